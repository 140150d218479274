"""Load breakdown by event category.

Answers "what drove today's load?" for display. Uses the same extractors
as the daily calculator but ignores decay and the previous day entirely.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from load_engine.domain.models import (
    ActivityContributor,
    LoadBreakdown,
    LoadConfiguration,
    LoadContributor,
    MealContributor,
    SleepContributor,
    SymptomObservation,
)

DEFAULT_SYMPTOM_MULTIPLIER = 1.0


def analyse_contributions(
    *,
    contributors: Iterable[LoadContributor],
    symptoms: Iterable[SymptomObservation],
    configuration: LoadConfiguration | None = None,
) -> LoadBreakdown:
    """Sum each category's load and derive its share of the total.

    Args:
        contributors: Activities, meals and sleep periods
        symptoms: Symptom observations
        configuration: Supplies the symptom multiplier; 1.0 when omitted

    Returns:
        LoadBreakdown whose four percentages sum to 100 when the total is
        positive, and are all 0 when there is no load.
    """
    symptom_multiplier = (
        configuration.symptom_multiplier if configuration is not None else DEFAULT_SYMPTOM_MULTIPLIER
    )

    activity_load = 0.0
    meal_load = 0.0
    sleep_load = 0.0
    for contributor in contributors:
        match contributor:
            case ActivityContributor():
                activity_load += contributor.load_contribution
            case MealContributor():
                meal_load += contributor.load_contribution
            case SleepContributor():
                sleep_load += contributor.load_contribution

    symptom_load = sum(s.load_contribution(symptom_multiplier) for s in symptoms)

    breakdown = LoadBreakdown(
        activity_load=activity_load,
        meal_load=meal_load,
        sleep_load=sleep_load,
        symptom_load=symptom_load,
    )
    logger.debug(
        f"[BREAKDOWN] activity={activity_load:.2f} meal={meal_load:.2f} "
        f"sleep={sleep_load:.2f} symptom={symptom_load:.2f} total={breakdown.total_load:.2f}"
    )
    return breakdown
