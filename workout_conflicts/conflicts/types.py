"""Data model for cross-component conflict detection.

The options bundle is a plain mapping produced by the customization UI; the
context is a nested snapshot of profile and environmental data. Neither is
validated strictly: malformed values degrade to "absent" during extraction so
that detection stays total.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Option field names shared by rules, extraction and the customization UI
FOCUS_FIELD = "customization_focus"
DURATION_FIELD = "customization_duration"
ENERGY_FIELD = "customization_energy"
EQUIPMENT_FIELD = "customization_equipment"
AREAS_FIELD = "customization_areas"
SORENESS_FIELD = "customization_soreness"
TRAINING_LOAD_FIELD = "customization_trainingLoad"

# Context components referenced by records
USER_PROFILE_COMPONENT = "user_profile"
USER_GOALS_COMPONENT = "user_goals"
ENVIRONMENTAL_FACTORS_COMPONENT = "environmental_factors"

OptionsBundle = Mapping[str, Any]

ConflictType = Literal["efficiency", "safety", "user_experience", "goal_alignment"]
Severity = Literal["low", "medium", "high"]
Impact = Literal["effectiveness", "safety", "performance", "recovery"]

SEVERITY_RANK: dict[str, int] = {"low": 1, "medium": 2, "high": 3}


def _mapping_or_empty(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value
    if not isinstance(value, Mapping):
        return {}
    return value


class UserProfile(BaseModel):
    """Profile slice of the context. Values stay raw until extracted."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    fitness_level: Any = Field(default=None, alias="fitnessLevel")
    goals: Any = None


class EnvironmentalFactors(BaseModel):
    """Environmental slice of the context."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    time_of_day: Any = Field(default=None, alias="timeOfDay")


class ConflictContext(BaseModel):
    """Read-only context snapshot accompanying one options bundle.

    Accepts camelCase keys (as sent by the UI) and snake_case keys. Nested
    sections that are missing or not mappings collapse to empty sections.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    user_profile: UserProfile = Field(default_factory=UserProfile, alias="userProfile")
    environmental_factors: EnvironmentalFactors = Field(
        default_factory=EnvironmentalFactors,
        alias="environmentalFactors",
    )

    @field_validator("user_profile", "environmental_factors", mode="before")
    @classmethod
    def coerce_section(cls, value: Any) -> Any:
        """Treat a null or non-mapping section as an empty one."""
        return _mapping_or_empty(value)

    @classmethod
    def from_raw(cls, raw: "ConflictContext | Mapping[str, Any] | None") -> "ConflictContext":
        """Build a context from a caller-supplied mapping, tolerating None."""
        if isinstance(raw, ConflictContext):
            return raw
        return cls.model_validate(_mapping_or_empty(raw))


class TrainingLoad(BaseModel):
    """Normalized recent training load."""

    model_config = ConfigDict(frozen=True)

    weekly_volume: float = 0.0
    average_intensity: Literal["light", "moderate", "intense"] = "moderate"
    recent_activities: tuple[str, ...] = ()


class ConflictFinding(BaseModel):
    """Body of a diagnostic as produced by a rule generator.

    The engine turns a finding into a ConflictRecord by stamping an id, which
    keeps generators free of id bookkeeping.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    components: tuple[str, ...] = Field(min_length=1)
    type: ConflictType
    severity: Severity
    description: str = Field(min_length=1)
    suggested_resolution: str = Field(min_length=1, alias="suggestedResolution")
    confidence: float = Field(ge=0.0, le=1.0)
    impact: Impact
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def component_set(self) -> frozenset[str]:
        return frozenset(self.components)


class ConflictRecord(ConflictFinding):
    """A detected conflict, owned by the caller once returned."""

    id: str = Field(min_length=1)

    @classmethod
    def from_finding(cls, conflict_id: str, finding: ConflictFinding) -> "ConflictRecord":
        return cls(id=conflict_id, **finding.model_dump())

    def signature(self) -> tuple:
        """Id-free tuple used to compare records across evaluations."""
        return (self.components, self.type, self.severity, self.confidence, self.impact, self.description)
