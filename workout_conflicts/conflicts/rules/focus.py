"""Focus-related conflict rules.

Covers tensions between the chosen training focus and duration, experience
level and time of day.
"""

from workout_conflicts.conflicts.constants import (
    ADVANCED_FOCUSES,
    DEFAULT_THRESHOLDS,
    HIGH_INTENSITY_FOCUSES,
    NEW_TRAINEE_LEVELS,
    ConflictThresholds,
)
from workout_conflicts.conflicts.extraction import (
    extract_duration,
    extract_fitness_level,
    extract_focus,
    extract_time_of_day,
)
from workout_conflicts.conflicts.rules.base import Rule, RuleGroup
from workout_conflicts.conflicts.types import (
    DURATION_FIELD,
    ENVIRONMENTAL_FACTORS_COMPONENT,
    FOCUS_FIELD,
    USER_PROFILE_COMPONENT,
    ConflictContext,
    ConflictFinding,
    OptionsBundle,
)


def build_focus_rules(thresholds: ConflictThresholds = DEFAULT_THRESHOLDS) -> RuleGroup:
    """Build the focus rule group against a threshold table."""

    # Strength focus squeezed into a very short session
    def short_strength_session(options: OptionsBundle, _context: ConflictContext) -> bool:
        focus = extract_focus(options.get(FOCUS_FIELD))
        duration = extract_duration(options.get(DURATION_FIELD))
        return bool(
            focus.value == "strength"
            and duration
            and duration.value < thresholds.SHORT_DURATION_THRESHOLD
        )

    def short_strength_session_conflict(options: OptionsBundle, _context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(FOCUS_FIELD, DURATION_FIELD),
            type="efficiency",
            severity="medium",
            description="Strength focus with very short duration may limit training effectiveness",
            suggested_resolution="Increase duration to 45+ minutes or switch to mobility focus",
            confidence=thresholds.MEDIUM_LOW_CONFIDENCE,
            impact="effectiveness",
            metadata={
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "duration": extract_duration(options.get(DURATION_FIELD)).value,
                "short_duration_threshold": thresholds.SHORT_DURATION_THRESHOLD,
            },
        )

    # Advanced focus chosen by someone new to training
    def advanced_focus_for_new_trainee(options: OptionsBundle, context: ConflictContext) -> bool:
        focus = extract_focus(options.get(FOCUS_FIELD))
        fitness_level = extract_fitness_level(context)
        return focus.value in ADVANCED_FOCUSES and fitness_level.value in NEW_TRAINEE_LEVELS

    def advanced_focus_for_new_trainee_conflict(options: OptionsBundle, context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(FOCUS_FIELD, USER_PROFILE_COMPONENT),
            type="safety",
            severity="medium",
            description="Advanced focus may be inappropriate for someone new to exercise",
            suggested_resolution="Start with strength or flexibility focus to build foundation",
            confidence=thresholds.MEDIUM_CONFIDENCE,
            impact="safety",
            metadata={
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "fitness_level": extract_fitness_level(context).value,
            },
        )

    # High-intensity focus late in the day for non-advanced users
    def evening_high_intensity(options: OptionsBundle, context: ConflictContext) -> bool:
        focus = extract_focus(options.get(FOCUS_FIELD))
        time_of_day = extract_time_of_day(context)
        fitness_level = extract_fitness_level(context)
        return (
            focus.value in HIGH_INTENSITY_FOCUSES
            and time_of_day.value == "evening"
            and fitness_level.value != "advanced"
        )

    def evening_high_intensity_conflict(options: OptionsBundle, context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(FOCUS_FIELD, ENVIRONMENTAL_FACTORS_COMPONENT),
            type="user_experience",
            severity="medium",
            description="High-intensity focus in the evening may affect sleep quality",
            suggested_resolution="Consider morning workouts or switch to recovery focus",
            confidence=thresholds.MEDIUM_LOW_CONFIDENCE,
            impact="effectiveness",
            metadata={
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "time_of_day": extract_time_of_day(context).value,
                "fitness_level": extract_fitness_level(context).value,
            },
        )

    return RuleGroup(
        name="focus",
        rules=(
            Rule("focus_short_strength_session", "focus_duration", short_strength_session, short_strength_session_conflict),
            Rule(
                "focus_advanced_for_new_trainee",
                "experience_focus",
                advanced_focus_for_new_trainee,
                advanced_focus_for_new_trainee_conflict,
            ),
            Rule("focus_evening_high_intensity", "time_focus", evening_high_intensity, evening_high_intensity_conflict),
        ),
    )
