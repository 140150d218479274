"""Risk tier classification of a decayed load value."""

from __future__ import annotations

from load_engine.domain.enums import RiskLevel
from load_engine.domain.models import LoadThresholds
from load_engine.metrics.contributions import clamp

MAX_LOAD = 100.0


def classify_risk(decayed_load: float, thresholds: LoadThresholds) -> RiskLevel:
    """Map a decayed load onto an ordered risk tier.

    Boundaries are inclusive-lower / exclusive-upper: a load exactly equal
    to a threshold belongs to the higher tier.

    - load < safe          -> SAFE
    - safe <= load < caution  -> CAUTION
    - caution <= load < high  -> HIGH
    - load >= high         -> CRITICAL

    The ``critical`` boundary marks the top of the scale and is not needed
    to separate tiers. Non-finite loads classify as CRITICAL.

    Args:
        decayed_load: Load after carrying over the previous day (0-100)
        thresholds: Ascending risk boundaries

    Returns:
        Risk tier for the load
    """
    load = clamp(decayed_load, 0.0, MAX_LOAD)
    if load < thresholds.safe:
        return RiskLevel.SAFE
    if load < thresholds.caution:
        return RiskLevel.CAUTION
    if load < thresholds.high:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL
