"""Threshold table for cross-component conflict rules - single source of truth.

Every numeric or categorical boundary a rule predicate compares against lives
here. Rules capture a ConflictThresholds instance when the rule set is built,
so changing a value changes rule behavior without touching predicate code.

Durations are minutes. Energy is the 1-5 self-reported rating.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ConflictThresholds(BaseModel):
    """Read-only numeric boundaries and confidence bands used by rules."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Duration cutoffs (minutes)
    SHORT_DURATION_THRESHOLD: int = Field(default=30, gt=0)
    LONG_DURATION_THRESHOLD: int = Field(default=60, gt=0)
    VERY_LONG_DURATION_THRESHOLD: int = Field(default=90, gt=0)
    EQUIPMENT_TRANSITION_DURATION: int = Field(default=45, gt=0)

    # Readiness cutoffs
    LOW_ENERGY_THRESHOLD: int = Field(default=2, ge=1, le=5)
    HIGH_SORENESS_AREA_COUNT: int = Field(default=3, ge=1)

    # Load / selection cutoffs
    HIGH_WEEKLY_VOLUME_THRESHOLD: float = Field(default=300, gt=0)
    MANY_EQUIPMENT_COUNT: int = Field(default=4, ge=0)

    # Optimization suggestions
    MIN_EQUIPMENT_FOR_STRENGTH: int = Field(default=2, ge=0)
    WARMUP_DURATION_MINUTES: int = Field(default=5, gt=0)
    WARMUP_DURATION_MAX_MINUTES: int = Field(default=10, gt=0)

    # Confidence bands
    HIGH_CONFIDENCE: float = Field(default=0.9, ge=0.0, le=1.0)
    MEDIUM_HIGH_CONFIDENCE: float = Field(default=0.85, ge=0.0, le=1.0)
    MEDIUM_CONFIDENCE: float = Field(default=0.8, ge=0.0, le=1.0)
    MEDIUM_LOW_CONFIDENCE: float = Field(default=0.75, ge=0.0, le=1.0)
    LOW_CONFIDENCE: float = Field(default=0.7, ge=0.0, le=1.0)
    VERY_LOW_CONFIDENCE: float = Field(default=0.65, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_duration_order(self) -> "ConflictThresholds":
        """Short, long and very long cutoffs must be strictly increasing."""
        if not self.SHORT_DURATION_THRESHOLD < self.LONG_DURATION_THRESHOLD < self.VERY_LONG_DURATION_THRESHOLD:
            raise ValueError(
                "Duration thresholds must satisfy SHORT < LONG < VERY_LONG, got "
                f"{self.SHORT_DURATION_THRESHOLD} / {self.LONG_DURATION_THRESHOLD} / {self.VERY_LONG_DURATION_THRESHOLD}"
            )
        if self.WARMUP_DURATION_MINUTES > self.WARMUP_DURATION_MAX_MINUTES:
            raise ValueError(
                f"Warm-up range is inverted: {self.WARMUP_DURATION_MINUTES}-{self.WARMUP_DURATION_MAX_MINUTES} minutes"
            )
        return self


DEFAULT_THRESHOLDS = ConflictThresholds()

# Focus groupings referenced by more than one rule group
HIGH_INTENSITY_FOCUSES: frozenset[str] = frozenset({"strength", "power"})
ADVANCED_FOCUSES: frozenset[str] = frozenset({"power", "endurance"})
DEMANDING_FOCUSES: frozenset[str] = frozenset({"strength", "power", "endurance"})

NEW_TRAINEE_LEVELS: frozenset[str] = frozenset({"beginner", "novice"})

# Which option fields influence which - used by change-impact analysis
COMPONENT_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "customization_focus": ("customization_duration", "customization_equipment", "customization_energy"),
    "customization_energy": ("customization_duration", "customization_focus", "customization_soreness"),
    "customization_soreness": ("customization_areas", "customization_focus", "customization_duration"),
    "customization_duration": ("customization_focus", "customization_energy", "customization_equipment"),
    "customization_equipment": ("customization_focus", "customization_areas", "customization_duration"),
    "customization_areas": ("customization_soreness", "customization_equipment", "customization_focus"),
    "customization_trainingLoad": ("customization_focus", "customization_duration", "customization_energy"),
}
