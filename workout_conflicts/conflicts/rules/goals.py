"""Goal and scheduling conflict rules for long sessions."""

from workout_conflicts.conflicts.constants import DEFAULT_THRESHOLDS, HIGH_INTENSITY_FOCUSES, ConflictThresholds
from workout_conflicts.conflicts.extraction import (
    extract_duration,
    extract_focus,
    extract_goals,
    extract_time_of_day,
)
from workout_conflicts.conflicts.rules.base import Rule, RuleGroup
from workout_conflicts.conflicts.types import (
    DURATION_FIELD,
    ENVIRONMENTAL_FACTORS_COMPONENT,
    FOCUS_FIELD,
    USER_GOALS_COMPONENT,
    ConflictContext,
    ConflictFinding,
    OptionsBundle,
)


def build_goal_rules(thresholds: ConflictThresholds = DEFAULT_THRESHOLDS) -> RuleGroup:
    """Build the goals rule group against a threshold table."""

    def _long_session(options: OptionsBundle) -> bool:
        duration = extract_duration(options.get(DURATION_FIELD))
        return bool(duration and duration.value > thresholds.LONG_DURATION_THRESHOLD)

    def long_strength_for_weight_loss(options: OptionsBundle, context: ConflictContext) -> bool:
        focus = extract_focus(options.get(FOCUS_FIELD))
        goals = extract_goals(context)
        return bool(
            goals
            and "weight_loss" in goals.value
            and focus.value == "strength"
            and _long_session(options)
        )

    def long_strength_for_weight_loss_conflict(options: OptionsBundle, context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(FOCUS_FIELD, DURATION_FIELD, USER_GOALS_COMPONENT),
            type="goal_alignment",
            severity="low",
            description="Long strength sessions may not align with weight loss goals",
            suggested_resolution="Consider cardio focus or circuit training for weight loss",
            confidence=thresholds.VERY_LOW_CONFIDENCE,
            impact="effectiveness",
            metadata={
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "goals": list(extract_goals(context).value),
                "duration": extract_duration(options.get(DURATION_FIELD)).value,
            },
        )

    def long_evening_session(options: OptionsBundle, context: ConflictContext) -> bool:
        focus = extract_focus(options.get(FOCUS_FIELD))
        time_of_day = extract_time_of_day(context)
        return bool(
            focus.value in HIGH_INTENSITY_FOCUSES
            and time_of_day.value == "evening"
            and _long_session(options)
        )

    def long_evening_session_conflict(options: OptionsBundle, context: ConflictContext) -> ConflictFinding:
        return ConflictFinding(
            components=(FOCUS_FIELD, DURATION_FIELD, ENVIRONMENTAL_FACTORS_COMPONENT),
            type="user_experience",
            severity="low",
            description="Intense evening workout may affect sleep quality",
            suggested_resolution="Reduce intensity or duration for evening sessions",
            confidence=thresholds.LOW_CONFIDENCE,
            impact="recovery",
            metadata={
                "focus": extract_focus(options.get(FOCUS_FIELD)).value,
                "time_of_day": extract_time_of_day(context).value,
                "duration": extract_duration(options.get(DURATION_FIELD)).value,
            },
        )

    return RuleGroup(
        name="goals",
        rules=(
            Rule("goals_long_strength_for_weight_loss", "goal_focus", long_strength_for_weight_loss, long_strength_for_weight_loss_conflict),
            Rule("goals_long_evening_session", "evening_duration", long_evening_session, long_evening_session_conflict),
        ),
    )
