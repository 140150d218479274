"""Daily load calculation.

Combines one day's contributions with the previous day's carried load:

    raw           = Σ contributor loads + Σ symptom loads
    carried       = previous_load × decay_rate × recovery_modifier
    raw_load      = clamp(raw, 0, 100)
    decayed_load  = clamp(raw_load + carried, 0, 100)
    risk_level    = classify(decayed_load)

The recovery modifier comes from the day's main sleep period (neutral 1.0
without one). Contributions are never negative, so decayed_load >= raw_load
whenever previous_load and decay_rate are non-negative.

Properties:
- Deterministic: Same input always produces same output
- Stateless: The only memory is the previous_load argument
- Total: Never raises over the documented input domain
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Iterable
from typing import assert_never

from loguru import logger

from load_engine.domain.models import (
    ActivityContributor,
    LoadConfiguration,
    LoadContributor,
    LoadScore,
    MealContributor,
    SleepContributor,
    SymptomObservation,
)
from load_engine.metrics.contributions import NEUTRAL_RECOVERY_MODIFIER, clamp
from load_engine.metrics.risk import MAX_LOAD, classify_risk

# How much lighter or heavier a day may feel than its computed load
MIN_REFLECTION_MULTIPLIER = 0.5
MAX_REFLECTION_MULTIPLIER = 2.0


def calculate_daily_load(
    *,
    day: dt.date,
    contributors: Iterable[LoadContributor],
    symptoms: Iterable[SymptomObservation],
    previous_load: float,
    configuration: LoadConfiguration,
    reflection_multiplier: float | None = None,
) -> LoadScore:
    """Calculate the load score for a single day.

    Args:
        day: Calendar day being scored
        contributors: Activities, meals and sleep periods of the day
        symptoms: Symptom observations of the day
        previous_load: Carried load of the previous day (0 for the first day)
        configuration: Thresholds, symptom multiplier and decay rate
        reflection_multiplier: Optional felt-load multiplier the person gave the day,
            clamped to 0.5-2.0 (non-finite values count as 2.0)

    Returns:
        LoadScore for the day. Empty inputs yield raw_load = 0 and a decayed
        load made only of the carried term.
    """
    contributors = list(contributors)
    symptoms = list(symptoms)

    contributor_load = sum(contribution_load(c) for c in contributors)
    symptom_load = sum(s.load_contribution(configuration.symptom_multiplier) for s in symptoms)

    recovery_modifier = main_recovery_modifier(contributors)
    decay_rate = clamp(configuration.decay_rate, 0.0, 1.0)
    carried = _sanitize_previous_load(previous_load, day) * decay_rate * recovery_modifier

    raw_load = clamp(contributor_load + symptom_load, 0.0, MAX_LOAD)
    decayed_load = clamp(raw_load + carried, 0.0, MAX_LOAD)
    risk_level = classify_risk(decayed_load, configuration.thresholds)

    felt_load = None
    if reflection_multiplier is not None:
        multiplier = clamp(reflection_multiplier, MIN_REFLECTION_MULTIPLIER, MAX_REFLECTION_MULTIPLIER)
        felt_load = clamp(decayed_load * multiplier, 0.0, MAX_LOAD)

    logger.debug(
        f"[LOAD] day={day.isoformat()} contributors={len(contributors)} symptoms={len(symptoms)} "
        f"raw={raw_load:.2f} carried={carried:.2f} recovery_modifier={recovery_modifier:.2f} "
        f"decayed={decayed_load:.2f} risk={risk_level.name}"
    )

    return LoadScore(
        date=day,
        raw_load=raw_load,
        decayed_load=decayed_load,
        risk_level=risk_level,
        felt_load=felt_load,
    )


def calculate_daily_load_from_events(
    *,
    day: dt.date,
    activities: Iterable[ActivityContributor],
    meals: Iterable[MealContributor],
    sleep: Iterable[SleepContributor],
    symptoms: Iterable[SymptomObservation],
    previous_load: float,
    configuration: LoadConfiguration,
    reflection_multiplier: float | None = None,
) -> LoadScore:
    """Typed-collection variant of calculate_daily_load.

    Kept for callers that hold events in per-category lists; the result is
    numerically identical to passing the concatenated contributors.
    """
    contributors: list[LoadContributor] = [*activities, *meals, *sleep]
    return calculate_daily_load(
        day=day,
        contributors=contributors,
        symptoms=symptoms,
        previous_load=previous_load,
        configuration=configuration,
        reflection_multiplier=reflection_multiplier,
    )


# -------------------------------------------------------------------
# Helpers (PURE FUNCTIONS)
# -------------------------------------------------------------------


def contribution_load(contributor: LoadContributor) -> float:
    """Non-negative load of a single contributor."""
    match contributor:
        case ActivityContributor():
            return contributor.load_contribution
        case MealContributor():
            return contributor.load_contribution
        case SleepContributor():
            return contributor.load_contribution
        case _:
            assert_never(contributor)


def main_recovery_modifier(contributors: Iterable[LoadContributor]) -> float:
    """Recovery modifier of the day's main sleep period.

    With several main periods the longest one wins (the first on ties).
    Naps never set the day's modifier.
    """
    main_periods = [c for c in contributors if isinstance(c, SleepContributor) and c.is_main_recovery_period]
    if not main_periods:
        return NEUTRAL_RECOVERY_MODIFIER
    return max(main_periods, key=lambda s: s.duration_hours).recovery_modifier


def _sanitize_previous_load(previous_load: float, day: dt.date) -> float:
    if not math.isfinite(previous_load) or not 0.0 <= previous_load <= MAX_LOAD:
        logger.warning(f"[LOAD] Clamping out-of-range previous_load={previous_load} for day={day.isoformat()}")
    return clamp(previous_load, 0.0, MAX_LOAD)
