"""Per-event load contribution extractors.

One pure function per event category turns a single event into a
non-negative load value (and, for sleep, a recovery modifier):

- Activity: mean exertion × duration weight × activity weight × 6.0
- Meal: mean exertion × 0.5 × 0.5 × 6.0 (no exertion data -> 0)
- Sleep: quality-driven recovery modifier plus a load burden for poor main sleep
- Symptom: bidirectional severity normalisation, burden above the midpoint only

Properties:
- Deterministic and side-effect free
- Total: out-of-range inputs are clamped, non-finite inputs become the upper bound
- Never negative
"""

from __future__ import annotations

import math

# Exertion scale (physical / cognitive / emotional) and quality/severity scale
SCALE_MIN = 1.0
SCALE_MAX = 5.0

# Base multiplier keeping a maximal single activity (5 × 2.0 × 6.0 = 60) well under the 100 cap
LOAD_MULTIPLIER = 6.0

ACTIVITY_WEIGHT = 1.0
ACTIVITY_MIN_DURATION_WEIGHT = 0.0
ACTIVITY_MAX_DURATION_WEIGHT = 2.0  # Two hours
ACTIVITY_DEFAULT_DURATION_WEIGHT = 1.0  # One hour when duration is unknown
HIGH_EXERTION_CUTOFF = 4.0

MEAL_WEIGHT = 0.5
MEAL_DURATION_WEIGHT = 0.5  # Meals count as 30 minutes of activity

MAIN_SLEEP_MIN_HOURS = 3.0
MAX_SLEEP_LOAD = 10.0
SLEEP_LOAD_PER_QUALITY_STEP = 5.0
MAIN_SLEEP_RECOVERY_MODIFIERS = {
    1: 0.5,  # Very poor - half-speed recovery
    2: 0.7,
    3: 1.0,  # Neutral
    4: 1.2,
    5: 1.4,  # Excellent - 40% faster recovery
}
NAP_GOOD_RECOVERY_MODIFIER = 1.1
NEUTRAL_RECOVERY_MODIFIER = 1.0

SYMPTOM_NEUTRAL_SEVERITY = 3.0
SYMPTOM_LOAD_PER_STEP = 10.0


# -------------------------------------------------------------------
# Numeric helpers
# -------------------------------------------------------------------


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]; NaN and infinities map to upper.

    Treating non-finite values as the ceiling keeps every downstream
    quantity bounded without raising.
    """
    if not math.isfinite(value):
        return upper
    return max(lower, min(upper, value))


def clamp_non_negative(value: float) -> float:
    """Clamp to >= 0 where no ceiling exists; NaN maps to 0, +inf stays +inf."""
    if math.isnan(value):
        return 0.0
    return max(0.0, value)


def clamp_scale(value: float) -> float:
    """Clamp a 1-5 rating."""
    return clamp(float(value), SCALE_MIN, SCALE_MAX)


def average_exertion(physical: float, cognitive: float, emotional: float) -> float:
    """Mean of the three exertion dimensions, each clamped to 1-5."""
    return (clamp_scale(physical) + clamp_scale(cognitive) + clamp_scale(emotional)) / 3.0


# -------------------------------------------------------------------
# Activity
# -------------------------------------------------------------------


def activity_duration_weight(duration_minutes: float | None) -> float:
    """Duration weight in hours, capped at 2.0.

    Args:
        duration_minutes: Activity duration, or None when not recorded

    Returns:
        1.0 for unknown duration, otherwise clamp(minutes / 60, 0.0, 2.0)
    """
    if duration_minutes is None:
        return ACTIVITY_DEFAULT_DURATION_WEIGHT
    return clamp(
        float(duration_minutes) / 60.0,
        ACTIVITY_MIN_DURATION_WEIGHT,
        ACTIVITY_MAX_DURATION_WEIGHT,
    )


def activity_load(
    physical: float,
    cognitive: float,
    emotional: float,
    duration_minutes: float | None,
) -> float:
    """Load contribution of a single activity.

    Example:
        >>> round(activity_load(4, 2, 2, 60), 1)
        16.0
    """
    return (
        average_exertion(physical, cognitive, emotional)
        * activity_duration_weight(duration_minutes)
        * ACTIVITY_WEIGHT
        * LOAD_MULTIPLIER
    )


def is_high_exertion_activity(
    physical: float,
    cognitive: float,
    emotional: float,
    duration_minutes: float | None,
) -> bool:
    intensity = average_exertion(physical, cognitive, emotional) * activity_duration_weight(duration_minutes)
    return intensity >= HIGH_EXERTION_CUTOFF


# -------------------------------------------------------------------
# Meal
# -------------------------------------------------------------------


def meal_has_exertion_data(
    physical: float | None,
    cognitive: float | None,
    emotional: float | None,
) -> bool:
    return physical is not None or cognitive is not None or emotional is not None


def meal_average_exertion(
    physical: float | None,
    cognitive: float | None,
    emotional: float | None,
) -> float:
    """Mean meal exertion; unset dimensions count as minimal (1)."""
    return average_exertion(
        SCALE_MIN if physical is None else physical,
        SCALE_MIN if cognitive is None else cognitive,
        SCALE_MIN if emotional is None else emotional,
    )


def meal_load(
    physical: float | None,
    cognitive: float | None,
    emotional: float | None,
) -> float:
    """Load contribution of a single meal.

    Meals without any exertion rating contribute nothing.
    """
    if not meal_has_exertion_data(physical, cognitive, emotional):
        return 0.0
    return (
        meal_average_exertion(physical, cognitive, emotional)
        * MEAL_DURATION_WEIGHT
        * MEAL_WEIGHT
        * LOAD_MULTIPLIER
    )


def is_high_exertion_meal(
    physical: float | None,
    cognitive: float | None,
    emotional: float | None,
) -> bool:
    if not meal_has_exertion_data(physical, cognitive, emotional):
        return False
    return meal_average_exertion(physical, cognitive, emotional) >= HIGH_EXERTION_CUTOFF


# -------------------------------------------------------------------
# Sleep
# -------------------------------------------------------------------


def is_main_recovery_period(duration_hours: float) -> bool:
    """Main sleep blocks last longer than three hours; anything shorter is a nap."""
    return clamp_non_negative(duration_hours) > MAIN_SLEEP_MIN_HOURS


def sleep_recovery_modifier(is_main_period: bool, quality: float) -> float:
    """Multiplier on yesterday's carried load (>1 faster recovery, <1 slower).

    Main periods map quality 1..5 to 0.5, 0.7, 1.0, 1.2, 1.4.
    Naps only nudge recovery up at quality >= 4, otherwise stay neutral.
    """
    rating = clamp_scale(quality)
    if is_main_period:
        return MAIN_SLEEP_RECOVERY_MODIFIERS[int(rating)]
    if rating >= 4:
        return NAP_GOOD_RECOVERY_MODIFIER
    return NEUTRAL_RECOVERY_MODIFIER


def sleep_load(is_main_period: bool, quality: float) -> float:
    """Load burden of a sleep period.

    Only poor main sleep adds load: quality 2 -> 5.0, quality 1 -> 10.0.
    Naps never add load.
    """
    if not is_main_period:
        return 0.0
    rating = clamp_scale(quality)
    if rating > 2:
        return 0.0
    return min(MAX_SLEEP_LOAD, (3.0 - rating) * SLEEP_LOAD_PER_QUALITY_STEP)


# -------------------------------------------------------------------
# Symptom
# -------------------------------------------------------------------


def normalized_severity(severity: float, is_positive: bool) -> float:
    """Map a 1-5 rating onto a burden scale where 5 is always worst.

    Positive wellbeing symptoms are inverted (6 - severity), so a high rating
    of a good symptom becomes a low burden.
    """
    rating = clamp_scale(severity)
    return 6.0 - rating if is_positive else rating


def symptom_load(severity: float, is_positive: bool, symptom_multiplier: float = 1.0) -> float:
    """Load contribution of one symptom observation.

    Burden only accrues above the neutral midpoint (3):
    normalised 4 -> 10, 5 -> 20, then scaled by the symptom multiplier.

    Example:
        >>> symptom_load(5, is_positive=False)
        20.0
        >>> symptom_load(5, is_positive=True)
        0.0
    """
    base = max(0.0, (normalized_severity(severity, is_positive) - SYMPTOM_NEUTRAL_SEVERITY) * SYMPTOM_LOAD_PER_STEP)
    if base == 0.0:
        return 0.0
    return base * clamp_non_negative(symptom_multiplier)
