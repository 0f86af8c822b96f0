"""Soreness-related conflict rules.

Area names are compared case-insensitively so that "Chest" from the soreness
form matches "chest" from the area selector.
"""

from workout_conflicts.conflicts.constants import DEFAULT_THRESHOLDS, DEMANDING_FOCUSES, ConflictThresholds
from workout_conflicts.conflicts.extraction import extract_areas, extract_focus, extract_soreness
from workout_conflicts.conflicts.rules.base import Rule, RuleGroup
from workout_conflicts.conflicts.types import (
    AREAS_FIELD,
    FOCUS_FIELD,
    SORENESS_FIELD,
    ConflictContext,
    ConflictFinding,
    OptionsBundle,
)


def _overlapping_areas(options: OptionsBundle) -> list[str]:
    """Targeted areas that are also reported sore, in targeted-area order."""
    sore = extract_soreness(options.get(SORENESS_FIELD))
    areas = extract_areas(options.get(AREAS_FIELD))
    if not sore or not areas:
        return []
    sore_keys = {area.lower() for area in sore.value}
    return [area for area in areas.value if area.lower() in sore_keys]


def build_soreness_rules(thresholds: ConflictThresholds = DEFAULT_THRESHOLDS) -> RuleGroup:
    """Build the soreness rule group against a threshold table."""

    def sore_areas_targeted(options: OptionsBundle, _context: ConflictContext) -> bool:
        return bool(_overlapping_areas(options))

    def sore_areas_targeted_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(SORENESS_FIELD, AREAS_FIELD),
            type="safety",
            severity="medium",
            description="Selected workout areas overlap with sore muscle groups",
            suggested_resolution="Choose different areas or reduce intensity for sore regions",
            confidence=thresholds.MEDIUM_HIGH_CONFIDENCE,
            impact="recovery",
            metadata={
                "overlapping_areas": _overlapping_areas(options),
                "sore_area_count": len(extract_soreness(options.get(SORENESS_FIELD)).value),
            },
        )

    def widespread_soreness_demanding_focus(options: OptionsBundle, _context: ConflictContext) -> bool:
        sore = extract_soreness(options.get(SORENESS_FIELD))
        focus = extract_focus(options.get(FOCUS_FIELD))
        return bool(
            sore
            and len(sore.value) >= thresholds.HIGH_SORENESS_AREA_COUNT
            and focus.value in DEMANDING_FOCUSES
        )

    def widespread_soreness_demanding_focus_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(SORENESS_FIELD, FOCUS_FIELD),
            type="safety",
            severity="high",
            description="High soreness with intense focus may worsen muscle recovery",
            suggested_resolution="Switch to recovery or flexibility focus",
            confidence=thresholds.HIGH_CONFIDENCE,
            impact="recovery",
            metadata={
                "sore_area_count": len(extract_soreness(options.get(SORENESS_FIELD)).value),
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "high_soreness_area_count": thresholds.HIGH_SORENESS_AREA_COUNT,
            },
        )

    return RuleGroup(
        name="soreness",
        rules=(
            Rule("soreness_areas_targeted", "soreness_areas", sore_areas_targeted, sore_areas_targeted_conflict),
            Rule(
                "soreness_widespread_demanding_focus",
                "soreness_focus",
                widespread_soreness_demanding_focus,
                widespread_soreness_demanding_focus_conflict,
            ),
        ),
    )
