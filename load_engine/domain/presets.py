"""Capacity presets and personal baseline calibration.

Turns human-level choices (a condition preset, or capacity / sensitivity /
recovery window picked individually) into a LoadConfiguration, optionally
scaled by a personal baseline. The baseline is always passed in
explicitly; nothing here keeps state between calls.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from load_engine.domain.enums import CapacityLevel, ConditionPreset, RecoveryWindow, SensitivityProfile
from load_engine.domain.models import LoadConfiguration, LoadThresholds, PersonalBaseline
from load_engine.metrics.contributions import clamp

# Load of a typical good day; baselines are compared against it
STANDARD_GOOD_DAY_LOAD = 30.0
MIN_BASELINE_ADJUSTMENT = 0.8
MAX_BASELINE_ADJUSTMENT = 1.2
MIN_CALIBRATION_DAYS = 3

CAPACITY_THRESHOLDS = {
    CapacityLevel.LOW: LoadThresholds(safe=20, caution=40, high=60, critical=60),
    CapacityLevel.MEDIUM: LoadThresholds(safe=25, caution=50, high=75, critical=75),
    CapacityLevel.HIGH: LoadThresholds(safe=30, caution=60, high=80, critical=80),
}

SYMPTOM_MULTIPLIERS = {
    SensitivityProfile.SENSITIVE: 1.5,
    SensitivityProfile.STANDARD: 1.0,
    SensitivityProfile.RESILIENT: 0.7,
}

# Share of yesterday's load still present today (lower = slower recovery)
DECAY_RATES = {
    RecoveryWindow.QUICK: 0.85,
    RecoveryWindow.STANDARD: 0.7,
    RecoveryWindow.MODERATE: 0.55,
    RecoveryWindow.EXTENDED: 0.4,
}


@dataclass(frozen=True)
class PresetProfile:
    """Settings bundle behind a condition preset."""

    display_name: str
    description: str
    capacity: CapacityLevel
    sensitivity: SensitivityProfile
    recovery_window: RecoveryWindow


PRESET_PROFILES: dict[ConditionPreset, PresetProfile] = {
    ConditionPreset.STANDARD: PresetProfile(
        display_name="Standard",
        description="Default settings for general symptom tracking",
        capacity=CapacityLevel.MEDIUM,
        sensitivity=SensitivityProfile.STANDARD,
        recovery_window=RecoveryWindow.STANDARD,
    ),
    ConditionPreset.MECFS: PresetProfile(
        display_name="ME/CFS",
        description="Post-exertional malaise aware, extended recovery",
        capacity=CapacityLevel.LOW,
        sensitivity=SensitivityProfile.SENSITIVE,
        recovery_window=RecoveryWindow.EXTENDED,
    ),
    ConditionPreset.FIBROMYALGIA: PresetProfile(
        display_name="Fibromyalgia",
        description="Pain sensitivity focus, moderate recovery",
        capacity=CapacityLevel.LOW,
        sensitivity=SensitivityProfile.SENSITIVE,
        recovery_window=RecoveryWindow.MODERATE,
    ),
    ConditionPreset.PCOS: PresetProfile(
        display_name="PCOS",
        description="Hormone cycle aware, standard recovery",
        capacity=CapacityLevel.MEDIUM,
        sensitivity=SensitivityProfile.STANDARD,
        recovery_window=RecoveryWindow.STANDARD,
    ),
    ConditionPreset.PTSD: PresetProfile(
        display_name="PTSD",
        description="Stress-sensitive, quick-moderate recovery",
        capacity=CapacityLevel.MEDIUM,
        sensitivity=SensitivityProfile.SENSITIVE,
        recovery_window=RecoveryWindow.MODERATE,
    ),
    ConditionPreset.LONG_COVID: PresetProfile(
        display_name="Long COVID",
        description="Fatigue focus, extended recovery periods",
        capacity=CapacityLevel.LOW,
        sensitivity=SensitivityProfile.SENSITIVE,
        recovery_window=RecoveryWindow.EXTENDED,
    ),
    ConditionPreset.AUTOIMMUNE: PresetProfile(
        display_name="Autoimmune conditions",
        description="Flare-aware, variable recovery",
        capacity=CapacityLevel.LOW,
        sensitivity=SensitivityProfile.STANDARD,
        recovery_window=RecoveryWindow.MODERATE,
    ),
    ConditionPreset.CUSTOM: PresetProfile(
        display_name="Custom settings",
        description="Manually configure all settings",
        capacity=CapacityLevel.MEDIUM,
        sensitivity=SensitivityProfile.STANDARD,
        recovery_window=RecoveryWindow.STANDARD,
    ),
}


def build_configuration(
    *,
    capacity: CapacityLevel,
    sensitivity: SensitivityProfile,
    recovery_window: RecoveryWindow,
    baseline: PersonalBaseline | None = None,
) -> LoadConfiguration:
    """Combine individual choices into a LoadConfiguration.

    Thresholds come from the capacity level, scaled by the baseline
    adjustment; the symptom multiplier from sensitivity; the decay rate from
    the recovery window.
    """
    thresholds = CAPACITY_THRESHOLDS[capacity].scaled(baseline_adjustment(baseline))
    return LoadConfiguration(
        thresholds=thresholds,
        symptom_multiplier=SYMPTOM_MULTIPLIERS[sensitivity],
        decay_rate=DECAY_RATES[recovery_window],
    )


def configuration_for_preset(
    preset: ConditionPreset,
    baseline: PersonalBaseline | None = None,
) -> LoadConfiguration:
    profile = PRESET_PROFILES[preset]
    return build_configuration(
        capacity=profile.capacity,
        sensitivity=profile.sensitivity,
        recovery_window=profile.recovery_window,
        baseline=baseline,
    )


def matching_preset(
    capacity: CapacityLevel,
    sensitivity: SensitivityProfile,
    recovery_window: RecoveryWindow,
    selected: ConditionPreset = ConditionPreset.STANDARD,
) -> ConditionPreset:
    """Keep the selected preset while the choices still match it, else CUSTOM."""
    profile = PRESET_PROFILES[selected]
    if (profile.capacity, profile.sensitivity, profile.recovery_window) == (capacity, sensitivity, recovery_window):
        return selected
    return ConditionPreset.CUSTOM


def baseline_adjustment(baseline: PersonalBaseline | None) -> float:
    """Threshold scale factor from a personal baseline.

    Uncalibrated or missing baselines leave thresholds unchanged. Otherwise
    the ratio of the person's good-day load to the standard good day,
    clamped to [0.8, 1.2].
    """
    if baseline is None or not baseline.is_calibrated:
        return 1.0
    ratio = baseline.average_good_day_load / STANDARD_GOOD_DAY_LOAD
    return clamp(ratio, MIN_BASELINE_ADJUSTMENT, MAX_BASELINE_ADJUSTMENT)


def calibrate_baseline(
    good_day_loads: Sequence[float],
    established_on: dt.date,
) -> PersonalBaseline | None:
    """Build a baseline from loads of days the person marked as good.

    Returns None until at least three good days are available.
    """
    if len(good_day_loads) < MIN_CALIBRATION_DAYS:
        logger.debug(f"[BASELINE] {len(good_day_loads)} good days recorded, need {MIN_CALIBRATION_DAYS}")
        return None

    loads = [clamp(load, 0.0, 100.0) for load in good_day_loads]
    average = sum(loads) / len(loads)
    logger.info(f"[BASELINE] Calibrated from {len(loads)} good days, average load {average:.1f}")
    return PersonalBaseline(
        established_on=established_on,
        average_good_day_load=average,
        sample_count=len(loads),
    )
