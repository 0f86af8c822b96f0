"""Equipment-related conflict rules.

These rules only look at the equipment selection itself. Whether the
equipment is available at the user's locations is decided elsewhere.
"""

from workout_conflicts.conflicts.constants import DEFAULT_THRESHOLDS, ConflictThresholds
from workout_conflicts.conflicts.extraction import extract_duration, extract_equipment, extract_focus
from workout_conflicts.conflicts.rules.base import Rule, RuleGroup
from workout_conflicts.conflicts.types import (
    DURATION_FIELD,
    EQUIPMENT_FIELD,
    FOCUS_FIELD,
    ConflictContext,
    ConflictFinding,
    OptionsBundle,
)


def build_equipment_rules(thresholds: ConflictThresholds = DEFAULT_THRESHOLDS) -> RuleGroup:
    """Build the equipment rule group against a threshold table."""

    # Explicitly empty selection only; a missing field means "not chosen yet"
    def strength_without_equipment(options: OptionsBundle, _context: ConflictContext) -> bool:
        focus = extract_focus(options.get(FOCUS_FIELD))
        equipment = extract_equipment(options.get(EQUIPMENT_FIELD))
        return bool(focus.value == "strength" and equipment and len(equipment.value) == 0)

    def strength_without_equipment_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(EQUIPMENT_FIELD, FOCUS_FIELD),
            type="efficiency",
            severity="medium",
            description="Strength focus without equipment may limit training options",
            suggested_resolution="Add resistance equipment or switch to a body weight-friendly focus",
            confidence=thresholds.MEDIUM_LOW_CONFIDENCE,
            impact="effectiveness",
            metadata={
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "equipment_count": 0,
            },
        )

    def crowded_short_session(options: OptionsBundle, _context: ConflictContext) -> bool:
        equipment = extract_equipment(options.get(EQUIPMENT_FIELD))
        duration = extract_duration(options.get(DURATION_FIELD))
        return bool(
            equipment
            and duration
            and len(equipment.value) > thresholds.MANY_EQUIPMENT_COUNT
            and duration.value < thresholds.EQUIPMENT_TRANSITION_DURATION
        )

    def crowded_short_session_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(EQUIPMENT_FIELD, DURATION_FIELD),
            type="efficiency",
            severity="medium",
            description="Many equipment pieces with short duration may rush transitions",
            suggested_resolution="Reduce equipment selection or extend duration",
            confidence=thresholds.MEDIUM_CONFIDENCE,
            impact="effectiveness",
            metadata={
                "equipment": list(extract_equipment(options.get(EQUIPMENT_FIELD)).value),
                "equipment_count": len(extract_equipment(options.get(EQUIPMENT_FIELD)).value),
                "duration": extract_duration(options.get(DURATION_FIELD)).value,
            },
        )

    return RuleGroup(
        name="equipment",
        rules=(
            Rule("equipment_strength_without_equipment", "equipment_focus", strength_without_equipment, strength_without_equipment_conflict),
            Rule("equipment_crowded_short_session", "equipment_duration", crowded_short_session, crowded_short_session_conflict),
        ),
    )
