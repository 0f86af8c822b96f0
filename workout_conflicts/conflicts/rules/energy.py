"""Energy-related conflict rules."""

from workout_conflicts.conflicts.constants import DEFAULT_THRESHOLDS, HIGH_INTENSITY_FOCUSES, ConflictThresholds
from workout_conflicts.conflicts.extraction import extract_duration, extract_energy, extract_focus
from workout_conflicts.conflicts.rules.base import Rule, RuleGroup
from workout_conflicts.conflicts.types import (
    DURATION_FIELD,
    ENERGY_FIELD,
    FOCUS_FIELD,
    ConflictContext,
    ConflictFinding,
    OptionsBundle,
)


def build_energy_rules(thresholds: ConflictThresholds = DEFAULT_THRESHOLDS) -> RuleGroup:
    """Build the energy rule group against a threshold table."""

    def _low_energy(options: OptionsBundle) -> bool:
        energy = extract_energy(options.get(ENERGY_FIELD))
        return bool(energy and energy.value <= thresholds.LOW_ENERGY_THRESHOLD)

    def low_energy_long_session(options: OptionsBundle, _context: ConflictContext) -> bool:
        duration = extract_duration(options.get(DURATION_FIELD))
        return bool(_low_energy(options) and duration and duration.value > thresholds.LONG_DURATION_THRESHOLD)

    def low_energy_long_session_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(ENERGY_FIELD, DURATION_FIELD),
            type="efficiency",
            severity="high",
            description="Low energy level paired with long workout duration may lead to poor performance",
            suggested_resolution="Reduce duration to 30-45 minutes or focus on recovery activities",
            confidence=thresholds.HIGH_CONFIDENCE,
            impact="performance",
            metadata={
                "energy_level": extract_energy(options.get(ENERGY_FIELD)).value,
                "duration": extract_duration(options.get(DURATION_FIELD)).value,
                "low_energy_threshold": thresholds.LOW_ENERGY_THRESHOLD,
                "long_duration_threshold": thresholds.LONG_DURATION_THRESHOLD,
            },
        )

    def low_energy_high_intensity(options: OptionsBundle, _context: ConflictContext) -> bool:
        focus = extract_focus(options.get(FOCUS_FIELD))
        return _low_energy(options) and focus.value in HIGH_INTENSITY_FOCUSES

    def low_energy_high_intensity_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(ENERGY_FIELD, FOCUS_FIELD),
            type="safety",
            severity="high",
            description="Low energy with high-intensity focus may increase injury risk",
            suggested_resolution="Switch to mobility, flexibility, or recovery focus",
            confidence=thresholds.HIGH_CONFIDENCE,
            impact="safety",
            metadata={
                "energy_level": extract_energy(options.get(ENERGY_FIELD)).value,
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "low_energy_threshold": thresholds.LOW_ENERGY_THRESHOLD,
            },
        )

    return RuleGroup(
        name="energy",
        rules=(
            Rule("energy_low_long_session", "energy_duration", low_energy_long_session, low_energy_long_session_conflict),
            Rule("energy_low_high_intensity", "energy_focus", low_energy_high_intensity, low_energy_high_intensity_conflict),
        ),
    )
