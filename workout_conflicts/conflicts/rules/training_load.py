"""Training-load conflict rules.

Recent load only matters when it was intense; light and moderate weeks never
trigger these rules.
"""

from workout_conflicts.conflicts.constants import DEFAULT_THRESHOLDS, HIGH_INTENSITY_FOCUSES, ConflictThresholds
from workout_conflicts.conflicts.extraction import (
    extract_duration,
    extract_energy,
    extract_focus,
    extract_training_load,
)
from workout_conflicts.conflicts.rules.base import Rule, RuleGroup
from workout_conflicts.conflicts.types import (
    DURATION_FIELD,
    ENERGY_FIELD,
    FOCUS_FIELD,
    TRAINING_LOAD_FIELD,
    ConflictContext,
    ConflictFinding,
    OptionsBundle,
)


def _intense_load(options: OptionsBundle) -> bool:
    load = extract_training_load(options.get(TRAINING_LOAD_FIELD))
    return bool(load and load.value.average_intensity == "intense")


def build_training_load_rules(thresholds: ConflictThresholds = DEFAULT_THRESHOLDS) -> RuleGroup:
    """Build the training-load rule group against a threshold table."""

    def overtraining_risk(options: OptionsBundle, _context: ConflictContext) -> bool:
        load = extract_training_load(options.get(TRAINING_LOAD_FIELD))
        focus = extract_focus(options.get(FOCUS_FIELD))
        return bool(
            _intense_load(options)
            and focus.value in HIGH_INTENSITY_FOCUSES
            and load.value.weekly_volume > thresholds.HIGH_WEEKLY_VOLUME_THRESHOLD
        )

    def overtraining_risk_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        load = extract_training_load(options.get(TRAINING_LOAD_FIELD)).value
        return ConflictFinding(
            components=(TRAINING_LOAD_FIELD, FOCUS_FIELD),
            type="safety",
            severity="high",
            description="High training load with intense focus may lead to overtraining",
            suggested_resolution="Consider recovery focus or reduce training intensity",
            confidence=thresholds.MEDIUM_HIGH_CONFIDENCE,
            impact="safety",
            metadata={
                "average_intensity": load.average_intensity,
                "weekly_volume": load.weekly_volume,
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "high_weekly_volume_threshold": thresholds.HIGH_WEEKLY_VOLUME_THRESHOLD,
            },
        )

    def intense_load_long_session(options: OptionsBundle, _context: ConflictContext) -> bool:
        duration = extract_duration(options.get(DURATION_FIELD))
        return bool(_intense_load(options) and duration and duration.value > thresholds.LONG_DURATION_THRESHOLD)

    def intense_load_long_session_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(TRAINING_LOAD_FIELD, DURATION_FIELD),
            type="efficiency",
            severity="medium",
            description="High training load with long duration may be unsustainable",
            suggested_resolution="Reduce duration or consider recovery-focused session",
            confidence=thresholds.MEDIUM_CONFIDENCE,
            impact="performance",
            metadata={
                "average_intensity": "intense",
                "duration": extract_duration(options.get(DURATION_FIELD)).value,
                "long_duration_threshold": thresholds.LONG_DURATION_THRESHOLD,
            },
        )

    def intense_load_low_energy(options: OptionsBundle, _context: ConflictContext) -> bool:
        energy = extract_energy(options.get(ENERGY_FIELD))
        return bool(_intense_load(options) and energy and energy.value <= thresholds.LOW_ENERGY_THRESHOLD)

    def intense_load_low_energy_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(TRAINING_LOAD_FIELD, ENERGY_FIELD),
            type="safety",
            severity="high",
            description="Low energy with high training load may lead to poor performance",
            suggested_resolution="Consider recovery session or reduce workout intensity",
            confidence=thresholds.HIGH_CONFIDENCE,
            impact="performance",
            metadata={
                "average_intensity": "intense",
                "energy_level": extract_energy(options.get(ENERGY_FIELD)).value,
                "low_energy_threshold": thresholds.LOW_ENERGY_THRESHOLD,
            },
        )

    return RuleGroup(
        name="training_load",
        rules=(
            Rule("training_load_overtraining_risk", "training_load_focus", overtraining_risk, overtraining_risk_conflict),
            Rule("training_load_long_session", "training_load_duration", intense_load_long_session, intense_load_long_session_conflict),
            Rule("training_load_low_energy", "training_load_energy", intense_load_low_energy, intense_load_low_energy_conflict),
        ),
    )
