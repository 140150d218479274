from __future__ import annotations

import datetime as dt
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from loguru import logger

from load_engine.domain.enums import RiskLevel
from load_engine.domain.models import LoadBreakdown, LoadConfiguration, LoadContributor, LoadScore, SymptomObservation
from load_engine.metrics.breakdown import analyse_contributions
from load_engine.metrics.load_range import calculate_load_range, group_contributors_by_date, group_symptoms_by_date

# -------------------------------------------------------------------
# Report Model
# -------------------------------------------------------------------


@dataclass(frozen=True)
class DailyLoadReport:
    """Score of one day together with what drove it."""

    score: LoadScore
    breakdown: LoadBreakdown

    @property
    def date(self) -> dt.date:
        return self.score.date


@dataclass(frozen=True)
class LoadReport:
    """Lightweight report output from the pipeline."""

    days: list[DailyLoadReport] = field(default_factory=list)

    @property
    def scores(self) -> list[LoadScore]:
        return [d.score for d in self.days]

    @property
    def peak(self) -> DailyLoadReport | None:
        """Day with the highest decayed load (earliest on ties)."""
        if not self.days:
            return None
        return max(self.days, key=lambda d: d.score.decayed_load)

    @property
    def days_by_risk(self) -> dict[RiskLevel, int]:
        counts = Counter(d.score.risk_level for d in self.days)
        return {level: counts.get(level, 0) for level in RiskLevel}


# -------------------------------------------------------------------
# Pipeline
# -------------------------------------------------------------------


def run_load_pipeline(
    *,
    contributors: Iterable[LoadContributor],
    symptoms: Iterable[SymptomObservation],
    start: dt.date,
    end: dt.date,
    configuration: LoadConfiguration,
    initial_load: float = 0.0,
    reflections_by_date: Mapping[dt.date, float] | None = None,
    tz: dt.tzinfo | None = None,
) -> LoadReport:
    """End-to-end load pipeline.

    Events → day buckets → range scores + per-day breakdown
    """
    contributors_by_date = group_contributors_by_date(contributors, tz)
    symptoms_by_date = group_symptoms_by_date(symptoms, tz)

    scores = calculate_load_range(
        start=start,
        end=end,
        contributors_by_date=contributors_by_date,
        symptoms_by_date=symptoms_by_date,
        configuration=configuration,
        initial_load=initial_load,
        reflections_by_date=reflections_by_date,
    )

    days = [
        DailyLoadReport(
            score=score,
            breakdown=analyse_contributions(
                contributors=contributors_by_date.get(score.date, []),
                symptoms=symptoms_by_date.get(score.date, []),
                configuration=configuration,
            ),
        )
        for score in scores
    ]

    logger.info(
        f"[PIPELINE] Scored {len(days)} days from {start.isoformat()} to {end.isoformat()} "
        f"({sum(len(v) for v in contributors_by_date.values())} contributors, "
        f"{sum(len(v) for v in symptoms_by_date.values())} symptoms)"
    )
    return LoadReport(days=days)
