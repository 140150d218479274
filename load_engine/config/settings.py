from __future__ import annotations

import datetime as dt
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from load_engine.domain.enums import CapacityLevel, ConditionPreset, RecoveryWindow, SensitivityProfile
from load_engine.domain.models import LoadConfiguration, PersonalBaseline
from load_engine.domain.presets import PRESET_PROFILES, build_configuration, matching_preset


class Settings(BaseSettings):
    condition_preset: ConditionPreset = Field(
        default=ConditionPreset.STANDARD,
        validation_alias="LOAD_CONDITION_PRESET",
        description="Named bundle of capacity, sensitivity and recovery window",
    )
    capacity: CapacityLevel | None = Field(
        default=None,
        validation_alias="LOAD_CAPACITY",
        description="Overrides the preset's capacity level",
    )
    sensitivity: SensitivityProfile | None = Field(
        default=None,
        validation_alias="LOAD_SENSITIVITY",
        description="Overrides the preset's symptom sensitivity",
    )
    recovery_window: RecoveryWindow | None = Field(
        default=None,
        validation_alias="LOAD_RECOVERY_WINDOW",
        description="Overrides the preset's recovery window",
    )
    timezone: str | None = Field(
        default=None,
        validation_alias="LOAD_TIMEZONE",
        description="IANA timezone used to assign events to calendar days",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown LOAD_TIMEZONE '{value}'") from e
        return value

    @property
    def tzinfo(self) -> dt.tzinfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None

    @property
    def effective_preset(self) -> ConditionPreset:
        """The selected preset, or CUSTOM once an override departs from it."""
        profile = PRESET_PROFILES[self.condition_preset]
        return matching_preset(
            self.capacity or profile.capacity,
            self.sensitivity or profile.sensitivity,
            self.recovery_window or profile.recovery_window,
            selected=self.condition_preset,
        )

    def to_configuration(self, baseline: PersonalBaseline | None = None) -> LoadConfiguration:
        """Resolve preset and overrides into the configuration handed to the engine."""
        profile = PRESET_PROFILES[self.condition_preset]
        configuration = build_configuration(
            capacity=self.capacity or profile.capacity,
            sensitivity=self.sensitivity or profile.sensitivity,
            recovery_window=self.recovery_window or profile.recovery_window,
            baseline=baseline,
        )
        logger.info(
            f"[SETTINGS] Using preset={self.effective_preset.value} decay_rate={configuration.decay_rate} "
            f"symptom_multiplier={configuration.symptom_multiplier}"
        )
        return configuration

