"""Extraction helpers that normalize raw option and context values.

The customization UI sends either plain values (``"strength"``, ``45``) or
richer configuration objects (``{"focus": "strength"}``,
``{"totalDuration": 45}``). Every rule reads fields through these helpers so
all rules agree on parsing. Each helper returns an Extracted result: present
with a normalized value, or ABSENT when the raw value is missing or malformed.
Helpers never raise.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from workout_conflicts.conflicts.types import ConflictContext, TrainingLoad

T = TypeVar("T")

FOCUS_VALUES: frozenset[str] = frozenset(
    {"strength", "power", "endurance", "cardio", "flexibility", "mobility", "recovery", "balance"}
)

# Display labels used by older profile forms
FITNESS_LEVEL_ALIASES: dict[str, str] = {
    "beginner": "beginner",
    "new to exercise": "beginner",
    "novice": "novice",
    "intermediate": "intermediate",
    "some experience": "intermediate",
    "advanced": "advanced",
    "advanced athlete": "advanced",
}

TIMES_OF_DAY: frozenset[str] = frozenset({"morning", "afternoon", "evening"})

TRAINING_INTENSITIES: frozenset[str] = frozenset({"light", "moderate", "intense"})

MIN_ENERGY = 1
MAX_ENERGY = 5


@dataclass(frozen=True)
class Extracted(Generic[T]):
    """Two-case extraction result: present with a value, or absent."""

    value: T | None = None
    present: bool = False

    @classmethod
    def of(cls, value: T) -> Extracted[T]:
        return cls(value=value, present=True)

    def __bool__(self) -> bool:
        return self.present


ABSENT: Extracted[Any] = Extracted()


def _label(raw: Any) -> str | None:
    if not isinstance(raw, str):
        return None
    label = raw.strip().lower().replace("-", "_").replace(" ", "_")
    return label or None


def _number(raw: Any) -> float | None:
    """Parse a finite number; booleans and blank strings are not numbers."""
    if isinstance(raw, bool):
        return None
    if not isinstance(raw, (int, float, str)):
        return None
    try:
        value = float(raw.strip() if isinstance(raw, str) else raw)
    except (ValueError, OverflowError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def _plain_number(value: float) -> int | float:
    # Whole numbers come back as int, fractions unchanged
    return int(value) if value.is_integer() else value


def _string_tuple(raw: Any) -> tuple[str, ...] | None:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        return None
    items = [item.strip() for item in raw if isinstance(item, str) and item.strip()]
    return tuple(dict.fromkeys(items))


def _first_key(raw: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def extract_focus(raw: Any) -> Extracted[str]:
    """Resolve a focus value (string or ``{"focus": ...}``) to a known focus."""
    if isinstance(raw, Mapping):
        raw = raw.get("focus")
    label = _label(raw)
    if label not in FOCUS_VALUES:
        return ABSENT
    return Extracted.of(label)


def extract_duration(raw: Any) -> Extracted[int | float]:
    """Resolve a duration in minutes (number, or ``{"totalDuration": ...}``).

    The value is not rounded: 29.5 minutes is still shorter than a 30 minute
    cutoff.
    """
    if isinstance(raw, Mapping):
        raw = _first_key(raw, ("totalDuration", "duration"))
    value = _number(raw)
    if value is None or value <= 0:
        return ABSENT
    return Extracted.of(_plain_number(value))


def extract_energy(raw: Any) -> Extracted[int | float]:
    """Resolve an energy rating on the 1-5 scale, keeping half-point ratings."""
    if isinstance(raw, Mapping):
        raw = _first_key(raw, ("rating", "value"))
    value = _number(raw)
    if value is None or not MIN_ENERGY <= value <= MAX_ENERGY:
        return ABSENT
    return Extracted.of(_plain_number(value))


def extract_equipment(raw: Any) -> Extracted[tuple[str, ...]]:
    """Resolve the selected equipment list.

    An explicitly empty list is present (the user chose no equipment); a
    missing field is absent.
    """
    if isinstance(raw, Mapping):
        raw = _first_key(raw, ("specificEquipment", "equipment"))
    items = _string_tuple(raw)
    if items is None:
        return ABSENT
    return Extracted.of(items)


def extract_areas(raw: Any) -> Extracted[tuple[str, ...]]:
    """Resolve targeted body areas (list or ``{"selectedAreas": [...]}``)."""
    if isinstance(raw, Mapping):
        raw = _first_key(raw, ("selectedAreas", "areas"))
    items = _string_tuple(raw)
    if items is None:
        return ABSENT
    return Extracted.of(items)


def extract_soreness(raw: Any) -> Extracted[tuple[str, ...]]:
    """Resolve sore areas from a list or a ``{area: {"selected": bool}}`` rating map."""
    if isinstance(raw, Mapping):
        raw = [
            area
            for area, rating in raw.items()
            if isinstance(rating, Mapping) and rating.get("selected") is True
        ]
    items = _string_tuple(raw)
    if items is None:
        return ABSENT
    return Extracted.of(items)


def extract_training_load(raw: Any) -> Extracted[TrainingLoad]:
    """Resolve recent training load.

    Requires a known ``averageIntensity``; volume defaults to 0 when missing.
    """
    if not isinstance(raw, Mapping):
        return ABSENT
    intensity = _label(_first_key(raw, ("averageIntensity", "average_intensity")))
    if intensity not in TRAINING_INTENSITIES:
        return ABSENT
    volume = _number(_first_key(raw, ("weeklyVolume", "weekly_volume")))
    activities = _string_tuple(_first_key(raw, ("recentActivities", "recent_activities"))) or ()
    return Extracted.of(
        TrainingLoad(
            weekly_volume=volume if volume is not None and volume >= 0 else 0.0,
            average_intensity=intensity,
            recent_activities=activities,
        )
    )


def extract_fitness_level(context: ConflictContext) -> Extracted[str]:
    """Resolve ``userProfile.fitnessLevel`` to beginner/novice/intermediate/advanced."""
    raw = context.user_profile.fitness_level
    if not isinstance(raw, str):
        return ABSENT
    level = FITNESS_LEVEL_ALIASES.get(raw.strip().lower())
    if level is None:
        return ABSENT
    return Extracted.of(level)


def extract_time_of_day(context: ConflictContext) -> Extracted[str]:
    """Resolve ``environmentalFactors.timeOfDay`` to morning/afternoon/evening."""
    label = _label(context.environmental_factors.time_of_day)
    if label not in TIMES_OF_DAY:
        return ABSENT
    return Extracted.of(label)


def extract_goals(context: ConflictContext) -> Extracted[tuple[str, ...]]:
    """Resolve ``userProfile.goals`` to normalized goal tags."""
    items = _string_tuple(context.user_profile.goals)
    if not items:
        return ABSENT
    return Extracted.of(tuple(_label(item) for item in items))
