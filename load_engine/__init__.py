"""Load engine - cumulative daily load and recovery scoring.

This package provides:
- Per-event load contributions (activities, meals, sleep, symptoms)
- Daily load with recovery-modulated carry-over from the previous day
- Multi-day load ranges computed in date order
- Risk tier classification and per-category load breakdown
- Condition presets and personal baseline calibration

The engine is pure and stateless; configuration is always passed in.
"""

from load_engine.domain.enums import (
    CapacityLevel,
    ConditionPreset,
    RecoveryWindow,
    RiskLevel,
    SensitivityProfile,
    SleepType,
    SymptomPolarity,
)
from load_engine.domain.models import (
    ActivityContributor,
    LoadBreakdown,
    LoadConfiguration,
    LoadContributor,
    LoadScore,
    LoadThresholds,
    MealContributor,
    PersonalBaseline,
    SleepContributor,
    SymptomObservation,
)
from load_engine.domain.presets import build_configuration, calibrate_baseline, configuration_for_preset
from load_engine.metrics.breakdown import analyse_contributions
from load_engine.metrics.daily_load import calculate_daily_load, calculate_daily_load_from_events
from load_engine.metrics.load_range import (
    calculate_load_range,
    day_key,
    group_contributors_by_date,
    group_symptoms_by_date,
)
from load_engine.metrics.risk import classify_risk

__all__ = [
    "ActivityContributor",
    "CapacityLevel",
    "ConditionPreset",
    "LoadBreakdown",
    "LoadConfiguration",
    "LoadContributor",
    "LoadScore",
    "LoadThresholds",
    "MealContributor",
    "PersonalBaseline",
    "RecoveryWindow",
    "RiskLevel",
    "SensitivityProfile",
    "SleepContributor",
    "SleepType",
    "SymptomObservation",
    "SymptomPolarity",
    "analyse_contributions",
    "build_configuration",
    "calculate_daily_load",
    "calculate_daily_load_from_events",
    "calculate_load_range",
    "calibrate_baseline",
    "classify_risk",
    "configuration_for_preset",
    "day_key",
    "group_contributors_by_date",
    "group_symptoms_by_date",
]
