"""Rule groups and the default rule set.

Group order here is evaluation order. Adding a rule means adding it to a
group builder (or adding a new builder to RULE_GROUP_BUILDERS); the engine
never changes.
"""

from collections.abc import Callable

from workout_conflicts.conflicts.constants import DEFAULT_THRESHOLDS, ConflictThresholds
from workout_conflicts.conflicts.rules.base import Rule, RuleGroup, RuleSet
from workout_conflicts.conflicts.rules.energy import build_energy_rules
from workout_conflicts.conflicts.rules.equipment import build_equipment_rules
from workout_conflicts.conflicts.rules.focus import build_focus_rules
from workout_conflicts.conflicts.rules.goals import build_goal_rules
from workout_conflicts.conflicts.rules.soreness import build_soreness_rules
from workout_conflicts.conflicts.rules.training_load import build_training_load_rules

RULE_GROUP_BUILDERS: tuple[Callable[[ConflictThresholds], RuleGroup], ...] = (
    build_focus_rules,
    build_energy_rules,
    build_soreness_rules,
    build_equipment_rules,
    build_training_load_rules,
    build_goal_rules,
)


def build_rule_set(thresholds: ConflictThresholds = DEFAULT_THRESHOLDS) -> RuleSet:
    """Build the complete rule set against a threshold table."""
    return RuleSet(builder(thresholds) for builder in RULE_GROUP_BUILDERS)


# Built on import so wiring errors stop the process at startup
DEFAULT_RULE_SET = build_rule_set()

__all__ = [
    "DEFAULT_RULE_SET",
    "RULE_GROUP_BUILDERS",
    "Rule",
    "RuleGroup",
    "RuleSet",
    "build_rule_set",
]
