import datetime as dt
import math

import pytest

from load_engine.domain.enums import SleepType, SymptomPolarity
from load_engine.domain.models import ActivityContributor, MealContributor, SleepContributor, SymptomObservation
from load_engine.metrics.contributions import (
    activity_duration_weight,
    activity_load,
    clamp,
    is_main_recovery_period,
    meal_load,
    sleep_load,
    sleep_recovery_modifier,
    symptom_load,
)

MORNING = dt.datetime(2025, 1, 10, 9, 0)


def make_activity(
    physical: float = 3,
    cognitive: float = 3,
    emotional: float = 3,
    duration_minutes: float | None = 60,
) -> ActivityContributor:
    return ActivityContributor(
        occurred_at=MORNING,
        physical_exertion=physical,
        cognitive_exertion=cognitive,
        emotional_load=emotional,
        duration_minutes=duration_minutes,
    )


def make_sleep(*, hours: float, quality: int) -> SleepContributor:
    wake_time = dt.datetime(2025, 1, 10, 7, 0)
    return SleepContributor(
        bed_time=wake_time - dt.timedelta(hours=hours),
        wake_time=wake_time,
        quality=quality,
    )


# -------------------------------------------------------------------
# Activity
# -------------------------------------------------------------------


def test_activity_one_hour_moderate_exertion():
    activity = make_activity(4, 2, 2, duration_minutes=60)

    assert activity.load_contribution == pytest.approx(16.0, abs=0.1)
    assert not activity.is_high_exertion


def test_activity_maximal_exertion_caps_duration_weight():
    activity = make_activity(5, 5, 5, duration_minutes=120)

    assert activity.load_contribution == pytest.approx(60.0, abs=0.1)
    assert activity.is_high_exertion


def test_activity_duration_beyond_two_hours_is_capped():
    assert activity_load(5, 5, 5, 240) == pytest.approx(activity_load(5, 5, 5, 120))


def test_activity_without_duration_counts_as_one_hour():
    assert activity_duration_weight(None) == 1.0
    assert activity_load(3, 3, 3, None) == pytest.approx(18.0)


def test_activity_negative_duration_contributes_nothing():
    assert activity_load(5, 5, 5, -30) == 0.0


def test_activity_out_of_range_exertion_is_clamped():
    assert activity_load(10, 10, 10, 60) == pytest.approx(30.0)
    assert activity_load(-3, 0, 0, 60) == pytest.approx(6.0)


def test_activity_non_finite_inputs_map_to_upper_bound():
    assert activity_duration_weight(math.inf) == 2.0
    assert activity_load(math.nan, 1, 1, 60) == pytest.approx(14.0)


def test_activity_exertion_summary():
    assert make_activity(4, 2, 1).exertion_summary == "Physical: 4, Cognitive: 2, Emotional: 1"


# -------------------------------------------------------------------
# Meal
# -------------------------------------------------------------------


def test_meal_with_exertion():
    meal = MealContributor(occurred_at=MORNING, physical_exertion=3, cognitive_exertion=2, emotional_load=2)

    assert meal.has_exertion_data
    assert meal.load_contribution == pytest.approx(3.5, abs=0.1)


def test_meal_without_exertion_contributes_nothing():
    meal = MealContributor(occurred_at=MORNING, meal_type="lunch")

    assert not meal.has_exertion_data
    assert meal.load_contribution == 0.0
    assert not meal.is_high_exertion


def test_meal_partial_exertion_defaults_missing_dimensions_to_one():
    assert meal_load(3, None, None) == pytest.approx(2.5)


# -------------------------------------------------------------------
# Sleep
# -------------------------------------------------------------------


def test_main_sleep_good_quality_speeds_recovery():
    sleep = make_sleep(hours=8, quality=4)

    assert sleep.is_main_recovery_period
    assert sleep.recovery_modifier == pytest.approx(1.2)
    assert sleep.load_contribution == 0.0
    assert sleep.sleep_type is SleepType.FULL_SLEEP


def test_main_sleep_very_poor_quality_adds_load():
    sleep = make_sleep(hours=7, quality=1)

    assert sleep.recovery_modifier == pytest.approx(0.5)
    assert sleep.load_contribution == pytest.approx(10.0)
    assert sleep.is_poor_quality
    assert sleep.quality_description == "Very poor"


@pytest.mark.parametrize(
    ("quality", "modifier", "load"),
    [
        (1, 0.5, 10.0),
        (2, 0.7, 5.0),
        (3, 1.0, 0.0),
        (4, 1.2, 0.0),
        (5, 1.4, 0.0),
    ],
)
def test_main_sleep_quality_table(quality, modifier, load):
    assert sleep_recovery_modifier(True, quality) == pytest.approx(modifier)
    assert sleep_load(True, quality) == pytest.approx(load)


def test_three_hours_is_still_a_nap():
    assert not is_main_recovery_period(3.0)
    assert is_main_recovery_period(3.5)


def test_nap_never_adds_load():
    nap = make_sleep(hours=1, quality=1)

    assert nap.sleep_type is SleepType.NAP
    assert nap.load_contribution == 0.0
    assert nap.recovery_modifier == 1.0


def test_good_nap_nudges_recovery():
    assert make_sleep(hours=1.5, quality=5).recovery_modifier == pytest.approx(1.1)


def test_sleep_with_wake_before_bed_is_zero_length():
    sleep = SleepContributor(
        bed_time=dt.datetime(2025, 1, 10, 8, 0),
        wake_time=dt.datetime(2025, 1, 10, 7, 0),
        quality=1,
    )

    assert sleep.duration_hours == 0.0
    assert sleep.sleep_type is SleepType.REST
    assert sleep.load_contribution == 0.0


# -------------------------------------------------------------------
# Symptom
# -------------------------------------------------------------------


def test_negative_symptom_severity_above_midpoint():
    symptom = SymptomObservation(observed_at=MORNING, severity=5, name="fatigue")

    assert symptom.load_contribution() == pytest.approx(20.0)


def test_negative_symptom_below_midpoint_adds_nothing():
    assert symptom_load(2, is_positive=False) == 0.0
    assert symptom_load(3, is_positive=False) == 0.0


def test_positive_symptom_is_inverted():
    energetic = SymptomObservation(observed_at=MORNING, severity=5, polarity=SymptomPolarity.POSITIVE)
    drained = SymptomObservation(observed_at=MORNING, severity=1, polarity=SymptomPolarity.POSITIVE)

    assert energetic.normalized_severity == 1.0
    assert energetic.load_contribution() == 0.0
    assert drained.load_contribution() == pytest.approx(20.0)


def test_symptom_multiplier_scales_burden():
    assert symptom_load(4, is_positive=False, symptom_multiplier=1.5) == pytest.approx(15.0)
    assert symptom_load(4, is_positive=False, symptom_multiplier=-1.0) == 0.0


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------


def test_clamp_non_finite_goes_to_upper_bound():
    assert clamp(math.nan, 0.0, 100.0) == 100.0
    assert clamp(-math.inf, 0.0, 100.0) == 100.0
    assert clamp(-5.0, 0.0, 100.0) == 0.0
    assert clamp(42.0, 0.0, 100.0) == 42.0
