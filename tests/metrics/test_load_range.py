import datetime as dt
from zoneinfo import ZoneInfo

import pytest

from load_engine.domain.models import ActivityContributor, SleepContributor, SymptomObservation
from load_engine.metrics.load_range import (
    calculate_load_range,
    day_key,
    group_contributors_by_date,
    group_symptoms_by_date,
    iter_days,
)

START = dt.date(2025, 1, 1)


def make_activity(
    *,
    day: dt.date,
    exertion: float = 5,
    duration_minutes: float = 120,
) -> ActivityContributor:
    return ActivityContributor(
        occurred_at=dt.datetime.combine(day, dt.time(10, 0)),
        physical_exertion=exertion,
        cognitive_exertion=exertion,
        emotional_load=exertion,
        duration_minutes=duration_minutes,
    )


def test_range_has_one_sorted_score_per_day(standard_configuration):
    end = START + dt.timedelta(days=6)

    scores = calculate_load_range(
        start=START,
        end=end,
        contributors_by_date={START + dt.timedelta(days=2): [make_activity(day=START + dt.timedelta(days=2))]},
        symptoms_by_date={},
        configuration=standard_configuration,
    )

    assert len(scores) == 7
    assert [s.date for s in scores] == list(iter_days(START, end))
    assert scores[0].decayed_load == 0.0
    assert scores[2].raw_load == pytest.approx(60.0)


def test_single_day_range(standard_configuration):
    scores = calculate_load_range(
        start=START,
        end=START,
        contributors_by_date={},
        symptoms_by_date={},
        configuration=standard_configuration,
    )

    assert len(scores) == 1


def test_idle_days_decay_strictly(standard_configuration):
    scores = calculate_load_range(
        start=START,
        end=START + dt.timedelta(days=5),
        contributors_by_date={START: [make_activity(day=START), make_activity(day=START)]},
        symptoms_by_date={},
        configuration=standard_configuration,
    )

    decayed = [s.decayed_load for s in scores]
    assert decayed[0] == 100.0
    assert decayed[1] == pytest.approx(70.0)
    assert all(later < earlier for earlier, later in zip(decayed, decayed[1:]))
    assert all(s.raw_load == 0.0 for s in scores[1:])


def test_each_day_carries_previous_decayed_load(standard_configuration):
    day_two = START + dt.timedelta(days=1)

    scores = calculate_load_range(
        start=START,
        end=day_two,
        contributors_by_date={
            START: [make_activity(day=START, exertion=3, duration_minutes=60)],
            day_two: [make_activity(day=day_two, exertion=3, duration_minutes=60)],
        },
        symptoms_by_date={},
        configuration=standard_configuration,
    )

    assert scores[0].decayed_load == pytest.approx(18.0)
    assert scores[1].decayed_load == pytest.approx(18.0 + 18.0 * 0.7)


def test_inverted_range_is_empty(standard_configuration):
    scores = calculate_load_range(
        start=START,
        end=START - dt.timedelta(days=1),
        contributors_by_date={},
        symptoms_by_date={},
        configuration=standard_configuration,
    )

    assert scores == []


def test_initial_load_seeds_first_day(standard_configuration):
    scores = calculate_load_range(
        start=START,
        end=START + dt.timedelta(days=1),
        contributors_by_date={},
        symptoms_by_date={},
        configuration=standard_configuration,
        initial_load=50.0,
    )

    assert scores[0].decayed_load == pytest.approx(35.0)
    assert scores[1].decayed_load == pytest.approx(24.5)


def test_reflection_felt_load_is_carried_forward(standard_configuration):
    scores = calculate_load_range(
        start=START,
        end=START + dt.timedelta(days=1),
        contributors_by_date={START: [make_activity(day=START, exertion=3, duration_minutes=60)]},
        symptoms_by_date={},
        configuration=standard_configuration,
        reflections_by_date={START: 2.0},
    )

    assert scores[0].decayed_load == pytest.approx(18.0)
    assert scores[0].felt_load == pytest.approx(36.0)
    assert scores[1].decayed_load == pytest.approx(36.0 * 0.7)


def test_symptoms_count_on_their_day(standard_configuration):
    day_two = START + dt.timedelta(days=1)
    symptoms = [SymptomObservation(observed_at=dt.datetime(2025, 1, 2, 15, 0), severity=5)]

    scores = calculate_load_range(
        start=START,
        end=day_two,
        contributors_by_date={},
        symptoms_by_date=group_symptoms_by_date(symptoms),
        configuration=standard_configuration,
    )

    assert scores[0].raw_load == 0.0
    assert scores[1].raw_load == pytest.approx(20.0)


# -------------------------------------------------------------------
# Grouping
# -------------------------------------------------------------------


def test_group_contributors_by_date():
    sleep = SleepContributor(
        bed_time=dt.datetime(2025, 1, 1, 23, 0),
        wake_time=dt.datetime(2025, 1, 2, 7, 0),
        quality=4,
    )
    contributors = [
        make_activity(day=START),
        make_activity(day=START),
        sleep,
    ]

    grouped = group_contributors_by_date(contributors)

    assert set(grouped) == {START, dt.date(2025, 1, 2)}
    assert len(grouped[START]) == 2
    assert grouped[dt.date(2025, 1, 2)] == [sleep]


def test_day_key_uses_local_calendar_day():
    new_york = ZoneInfo("America/New_York")
    evening_utc = dt.datetime(2025, 1, 11, 3, 0, tzinfo=dt.UTC)

    assert day_key(evening_utc) == dt.date(2025, 1, 11)
    assert day_key(evening_utc, new_york) == dt.date(2025, 1, 10)


def test_group_by_timezone_merges_offsets_for_one_location():
    new_york = ZoneInfo("America/New_York")
    symptoms = [
        SymptomObservation(observed_at=dt.datetime(2025, 1, 10, 18, 0, tzinfo=new_york), severity=4),
        SymptomObservation(observed_at=dt.datetime(2025, 1, 11, 2, 0, tzinfo=dt.UTC), severity=4),
    ]

    grouped = group_symptoms_by_date(symptoms, new_york)

    assert list(grouped) == [dt.date(2025, 1, 10)]
    assert len(grouped[dt.date(2025, 1, 10)]) == 2


def test_non_finite_reflection_keeps_carry_over(standard_configuration):
    day_two = START + dt.timedelta(days=1)

    scores = calculate_load_range(
        start=START,
        end=day_two,
        contributors_by_date={START: [make_activity(day=START)]},
        symptoms_by_date={},
        configuration=standard_configuration,
        reflections_by_date={START: float("nan")},
    )

    assert scores[0].decayed_load == pytest.approx(60.0)
    assert scores[0].felt_load == 100.0
    assert scores[1].decayed_load == pytest.approx(70.0)
