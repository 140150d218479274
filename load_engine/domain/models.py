"""Immutable value models for the load engine.

Contributors are read-only views over externally owned event records.
They form a closed tagged union on ``kind`` so the calculator can match
exhaustively over {activity, meal, sleep}. Symptoms are kept apart because
their normalisation depends on polarity and on the configured multiplier.

Range checks on event fields are the upstream persistence layer's job; the
models accept any number and the extractors clamp. Configuration types do
validate, since they are built by callers from settings.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from load_engine.domain.enums import RiskLevel, SleepType, SymptomPolarity
from load_engine.metrics import contributions


class _ValueModel(BaseModel):
    """Frozen base: value objects are never mutated after construction."""

    model_config = ConfigDict(frozen=True)


# -------------------------------------------------------------------
# Contributors
# -------------------------------------------------------------------


class ActivityContributor(_ValueModel):
    """Physical, cognitive or emotional activity."""

    kind: Literal["activity"] = "activity"
    occurred_at: datetime
    physical_exertion: float
    cognitive_exertion: float
    emotional_load: float
    duration_minutes: float | None = None
    name: str | None = None

    @property
    def effective_at(self) -> datetime:
        return self.occurred_at

    @property
    def average_exertion(self) -> float:
        return contributions.average_exertion(self.physical_exertion, self.cognitive_exertion, self.emotional_load)

    @property
    def duration_weight(self) -> float:
        return contributions.activity_duration_weight(self.duration_minutes)

    @property
    def load_contribution(self) -> float:
        return contributions.activity_load(
            self.physical_exertion,
            self.cognitive_exertion,
            self.emotional_load,
            self.duration_minutes,
        )

    @property
    def is_high_exertion(self) -> bool:
        return contributions.is_high_exertion_activity(
            self.physical_exertion,
            self.cognitive_exertion,
            self.emotional_load,
            self.duration_minutes,
        )

    @property
    def recovery_modifier(self) -> float | None:
        return None

    @property
    def exertion_summary(self) -> str:
        return (
            f"Physical: {int(self.physical_exertion)}, "
            f"Cognitive: {int(self.cognitive_exertion)}, "
            f"Emotional: {int(self.emotional_load)}"
        )


class MealContributor(_ValueModel):
    """Meal, optionally rated for the exertion it took."""

    kind: Literal["meal"] = "meal"
    occurred_at: datetime
    physical_exertion: float | None = None
    cognitive_exertion: float | None = None
    emotional_load: float | None = None
    meal_type: str | None = None

    @property
    def effective_at(self) -> datetime:
        return self.occurred_at

    @property
    def has_exertion_data(self) -> bool:
        return contributions.meal_has_exertion_data(self.physical_exertion, self.cognitive_exertion, self.emotional_load)

    @property
    def load_contribution(self) -> float:
        return contributions.meal_load(self.physical_exertion, self.cognitive_exertion, self.emotional_load)

    @property
    def is_high_exertion(self) -> bool:
        return contributions.is_high_exertion_meal(self.physical_exertion, self.cognitive_exertion, self.emotional_load)

    @property
    def recovery_modifier(self) -> float | None:
        return None


class SleepContributor(_ValueModel):
    """Sleep period between bed time and wake time.

    The wake time decides which day the sleep belongs to, since that is the
    day its quality affects.
    """

    kind: Literal["sleep"] = "sleep"
    bed_time: datetime
    wake_time: datetime
    quality: int

    @model_validator(mode="after")
    def validate_matching_timezones(self) -> SleepContributor:
        if (self.bed_time.tzinfo is None) != (self.wake_time.tzinfo is None):
            raise ValueError(
                f"bed_time and wake_time must both carry a timezone or both be naive, "
                f"got bed_time={self.bed_time.isoformat()}, wake_time={self.wake_time.isoformat()}"
            )
        return self

    @property
    def effective_at(self) -> datetime:
        return self.wake_time

    @property
    def duration_hours(self) -> float:
        return contributions.clamp_non_negative((self.wake_time - self.bed_time).total_seconds() / 3600.0)

    @property
    def is_main_recovery_period(self) -> bool:
        return contributions.is_main_recovery_period(self.duration_hours)

    @property
    def recovery_modifier(self) -> float:
        return contributions.sleep_recovery_modifier(self.is_main_recovery_period, self.quality)

    @property
    def load_contribution(self) -> float:
        return contributions.sleep_load(self.is_main_recovery_period, self.quality)

    @property
    def is_poor_quality(self) -> bool:
        return contributions.clamp_scale(self.quality) <= 2

    @property
    def is_good_quality(self) -> bool:
        return contributions.clamp_scale(self.quality) >= 4

    @property
    def sleep_type(self) -> SleepType:
        hours = self.duration_hours
        if hours < 0.5:
            return SleepType.REST
        if hours <= 3.0:
            return SleepType.NAP
        if hours <= 5.0:
            return SleepType.SHORT_SLEEP
        if hours <= 9.0:
            return SleepType.FULL_SLEEP
        return SleepType.EXTENDED_SLEEP

    @property
    def quality_description(self) -> str:
        return _QUALITY_DESCRIPTIONS[int(contributions.clamp_scale(self.quality))]

    @property
    def impact_score(self) -> float:
        """Load burden plus recovery deviation on a comparable scale."""
        return self.load_contribution + abs(1.0 - self.recovery_modifier) * 20.0


_QUALITY_DESCRIPTIONS = {
    1: "Very poor",
    2: "Poor",
    3: "Fair",
    4: "Good",
    5: "Excellent",
}


LoadContributor = Annotated[
    ActivityContributor | MealContributor | SleepContributor,
    Field(discriminator="kind"),
]


# -------------------------------------------------------------------
# Symptoms
# -------------------------------------------------------------------


class SymptomObservation(_ValueModel):
    """A rated symptom (1-5) with explicit polarity."""

    observed_at: datetime
    severity: int
    polarity: SymptomPolarity = SymptomPolarity.NEGATIVE
    name: str | None = None

    @property
    def is_positive(self) -> bool:
        return self.polarity is SymptomPolarity.POSITIVE

    @property
    def normalized_severity(self) -> float:
        return contributions.normalized_severity(self.severity, self.is_positive)

    def load_contribution(self, symptom_multiplier: float = 1.0) -> float:
        return contributions.symptom_load(self.severity, self.is_positive, symptom_multiplier)


# -------------------------------------------------------------------
# Configuration
# -------------------------------------------------------------------


class LoadThresholds(_ValueModel):
    """Ascending risk boundaries on the 0-100 load scale."""

    safe: float = Field(default=25.0, ge=0, allow_inf_nan=False)
    caution: float = Field(default=50.0, ge=0, allow_inf_nan=False)
    high: float = Field(default=75.0, ge=0, allow_inf_nan=False)
    critical: float = Field(default=100.0, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def validate_ascending(self) -> LoadThresholds:
        if not self.safe <= self.caution <= self.high <= self.critical:
            raise ValueError(
                f"Thresholds must be ascending, got safe={self.safe}, caution={self.caution}, "
                f"high={self.high}, critical={self.critical}"
            )
        return self

    def scaled(self, factor: float) -> LoadThresholds:
        return LoadThresholds(
            safe=self.safe * factor,
            caution=self.caution * factor,
            high=self.high * factor,
            critical=self.critical * factor,
        )


class LoadConfiguration(_ValueModel):
    """Caller-supplied scoring configuration. There is no global default."""

    thresholds: LoadThresholds
    symptom_multiplier: float = Field(..., ge=0, allow_inf_nan=False)
    decay_rate: float = Field(..., ge=0, le=1, allow_inf_nan=False)


class PersonalBaseline(_ValueModel):
    """Average load of a person's self-reported good days."""

    established_on: date
    average_good_day_load: float = Field(..., ge=0, allow_inf_nan=False)
    sample_count: int = Field(..., ge=0)

    @property
    def is_calibrated(self) -> bool:
        return self.sample_count >= 3


# -------------------------------------------------------------------
# Results
# -------------------------------------------------------------------


class LoadScore(_ValueModel):
    """Load for one calendar day.

    Invariants: 0 <= raw_load <= 100 and raw_load <= decayed_load <= 100.
    """

    date: date
    raw_load: float = Field(..., ge=0, le=100)
    decayed_load: float = Field(..., ge=0, le=100)
    risk_level: RiskLevel
    felt_load: float | None = Field(default=None, ge=0, le=100)

    @property
    def effective_load(self) -> float:
        """Felt load when the day was reflected on, otherwise the decayed load."""
        return self.decayed_load if self.felt_load is None else self.felt_load


class LoadBreakdown(_ValueModel):
    """Per-category load totals for display, independent of decay."""

    activity_load: float = Field(default=0.0, ge=0)
    meal_load: float = Field(default=0.0, ge=0)
    sleep_load: float = Field(default=0.0, ge=0)
    symptom_load: float = Field(default=0.0, ge=0)

    @computed_field
    @property
    def total_load(self) -> float:
        return self.activity_load + self.meal_load + self.sleep_load + self.symptom_load

    def _percentage(self, part: float) -> float:
        total = self.total_load
        return (part / total) * 100.0 if total > 0 else 0.0

    @computed_field
    @property
    def activity_percentage(self) -> float:
        return self._percentage(self.activity_load)

    @computed_field
    @property
    def meal_percentage(self) -> float:
        return self._percentage(self.meal_load)

    @computed_field
    @property
    def sleep_percentage(self) -> float:
        return self._percentage(self.sleep_load)

    @computed_field
    @property
    def symptom_percentage(self) -> float:
        return self._percentage(self.symptom_load)
