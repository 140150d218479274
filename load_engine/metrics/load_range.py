"""Multi-day load computation.

Folds the daily calculator across a closed date interval, carrying each
day's load into the next:

    previous_load[0]   = initial_load (0.0 unless seeded)
    previous_load[i]   = scores[i - 1].effective_load

Day i depends on day i - 1, so the range is always computed in a single
pass in ascending date order and is never parallelised across days.

Missing days are idle days (no contributors, no symptoms), not gaps.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping, Sequence

from loguru import logger

from load_engine.domain.models import LoadConfiguration, LoadContributor, LoadScore, SymptomObservation
from load_engine.metrics.daily_load import calculate_daily_load


def calculate_load_range(
    *,
    start: dt.date,
    end: dt.date,
    contributors_by_date: Mapping[dt.date, Sequence[LoadContributor]],
    symptoms_by_date: Mapping[dt.date, Sequence[SymptomObservation]],
    configuration: LoadConfiguration,
    initial_load: float = 0.0,
    reflections_by_date: Mapping[dt.date, float] | None = None,
) -> list[LoadScore]:
    """Calculate one LoadScore per day from start to end inclusive.

    Args:
        start: First day of the range
        end: Last day of the range (inclusive)
        contributors_by_date: Contributors keyed by day (see group_contributors_by_date)
        symptoms_by_date: Symptoms keyed by day (see group_symptoms_by_date)
        configuration: Scoring configuration used for every day
        initial_load: Carried load entering the first day (default 0.0)
        reflections_by_date: Optional felt-load multipliers keyed by day

    Returns:
        Scores sorted ascending by date, exactly (end - start).days + 1 long.
        An inverted range (end < start) returns an empty list.

    Example:
        >>> scores = calculate_load_range(
        ...     start=dt.date(2025, 1, 1),
        ...     end=dt.date(2025, 1, 3),
        ...     contributors_by_date={},
        ...     symptoms_by_date={},
        ...     configuration=configuration,
        ... )
        >>> len(scores)
        3
    """
    start, end = _as_day(start), _as_day(end)
    if end < start:
        logger.warning(f"[LOAD_RANGE] Empty range: end={end.isoformat()} precedes start={start.isoformat()}")
        return []

    reflections = reflections_by_date or {}

    # Arena of (day, contributors, symptoms) in ascending day order
    arena = [
        (day, contributors_by_date.get(day, ()), symptoms_by_date.get(day, ()))
        for day in iter_days(start, end)
    ]

    scores: list[LoadScore] = []
    previous_load = initial_load
    for day, contributors, symptoms in arena:
        score = calculate_daily_load(
            day=day,
            contributors=contributors,
            symptoms=symptoms,
            previous_load=previous_load,
            configuration=configuration,
            reflection_multiplier=reflections.get(day),
        )
        scores.append(score)
        previous_load = score.effective_load

    logger.debug(
        f"[LOAD_RANGE] Computed {len(scores)} days from {start.isoformat()} to {end.isoformat()}, "
        f"final decayed={scores[-1].decayed_load:.2f}"
    )
    return scores


def iter_days(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    """Yield every calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += dt.timedelta(days=1)


def day_key(moment: dt.datetime, tz: dt.tzinfo | None = None) -> dt.date:
    """Canonical local-calendar day of a timestamp.

    Aware timestamps are converted to ``tz`` first when one is given, so
    events recorded in different offsets land on the same local day for a
    single location. Naive timestamps are taken as already local.
    """
    if tz is not None and moment.tzinfo is not None:
        return moment.astimezone(tz).date()
    return moment.date()


def group_contributors_by_date(
    contributors: Iterable[LoadContributor],
    tz: dt.tzinfo | None = None,
) -> dict[dt.date, list[LoadContributor]]:
    """Bucket contributors by the local day of their effective timestamp.

    Activities and meals use when they happened; sleep uses wake time.
    """
    grouped: dict[dt.date, list[LoadContributor]] = defaultdict(list)
    for contributor in contributors:
        grouped[day_key(contributor.effective_at, tz)].append(contributor)
    return dict(grouped)


def group_symptoms_by_date(
    symptoms: Iterable[SymptomObservation],
    tz: dt.tzinfo | None = None,
) -> dict[dt.date, list[SymptomObservation]]:
    """Bucket symptom observations by the local day they were observed."""
    grouped: dict[dt.date, list[SymptomObservation]] = defaultdict(list)
    for symptom in symptoms:
        grouped[day_key(symptom.observed_at, tz)].append(symptom)
    return dict(grouped)


def _as_day(value: dt.date) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value
