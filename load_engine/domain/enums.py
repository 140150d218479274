"""Canonical enums for the load engine.

String-based enums serialise cleanly to JSON and match the keys used in
settings and event documents. ``RiskLevel`` is an ``IntEnum`` because risk
tiers are ordered and callers compare them.
"""

from enum import IntEnum, StrEnum


# -----------------------------
# Risk Tier
# -----------------------------
class RiskLevel(IntEnum):
    """Ordered risk tier of a day's decayed load."""

    SAFE = 0
    CAUTION = 1
    HIGH = 2
    CRITICAL = 3

    @property
    def description(self) -> str:
        return _RISK_DESCRIPTIONS[self]


_RISK_DESCRIPTIONS = {
    RiskLevel.SAFE: "Safe",
    RiskLevel.CAUTION: "Caution",
    RiskLevel.HIGH: "High risk",
    RiskLevel.CRITICAL: "Rest needed",
}


# -----------------------------
# Symptom Polarity
# -----------------------------
class SymptomPolarity(StrEnum):
    """Whether a higher symptom rating means feeling better or worse.

    POSITIVE symptoms (energy, calm) are wellbeing ratings, so their scale is
    inverted before computing burden.
    """

    POSITIVE = "positive"
    NEGATIVE = "negative"


# -----------------------------
# Sleep Type
# -----------------------------
class SleepType(StrEnum):
    """Sleep period classification by duration."""

    REST = "rest"
    NAP = "nap"
    SHORT_SLEEP = "short_sleep"
    FULL_SLEEP = "full_sleep"
    EXTENDED_SLEEP = "extended_sleep"


# -----------------------------
# Capacity / Sensitivity / Recovery
# -----------------------------
class CapacityLevel(StrEnum):
    """How much load a person tolerates before warnings escalate."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SensitivityProfile(StrEnum):
    """How strongly symptoms feed into the daily load."""

    SENSITIVE = "sensitive"
    STANDARD = "standard"
    RESILIENT = "resilient"


class RecoveryWindow(StrEnum):
    """How long yesterday's load lingers."""

    QUICK = "12h"
    STANDARD = "24h"
    MODERATE = "48h"
    EXTENDED = "72h"

    @property
    def hours(self) -> int:
        return int(self.value.removesuffix("h"))


# -----------------------------
# Condition Presets
# -----------------------------
class ConditionPreset(StrEnum):
    """Named bundles of capacity, sensitivity and recovery settings."""

    STANDARD = "standard"
    MECFS = "mecfs"
    FIBROMYALGIA = "fibromyalgia"
    PCOS = "pcos"
    PTSD = "ptsd"
    LONG_COVID = "longcovid"
    AUTOIMMUNE = "autoimmune"
    CUSTOM = "custom"
