"""Cross-component conflict detection for workout customization options."""

from workout_conflicts.conflicts.aggregation import aggregate_conflicts, rank_conflicts
from workout_conflicts.conflicts.analysis import (
    ComponentImpact,
    ConfigurationReview,
    OptimizationInsight,
    analyze_component_change,
    generate_optimization_insights,
    generate_recommendations,
    get_component_dependencies,
    review_configuration,
)
from workout_conflicts.conflicts.constants import DEFAULT_THRESHOLDS, ConflictThresholds
from workout_conflicts.conflicts.engine import ConflictDetectionEngine, detect_conflicts
from workout_conflicts.conflicts.errors import ConflictEngineError, RuleConfigurationError
from workout_conflicts.conflicts.rules import DEFAULT_RULE_SET, Rule, RuleGroup, RuleSet, build_rule_set
from workout_conflicts.conflicts.types import ConflictContext, ConflictFinding, ConflictRecord

__all__ = [
    "DEFAULT_RULE_SET",
    "DEFAULT_THRESHOLDS",
    "ComponentImpact",
    "ConfigurationReview",
    "ConflictContext",
    "ConflictDetectionEngine",
    "ConflictEngineError",
    "ConflictFinding",
    "ConflictRecord",
    "ConflictThresholds",
    "OptimizationInsight",
    "Rule",
    "RuleConfigurationError",
    "RuleGroup",
    "RuleSet",
    "aggregate_conflicts",
    "analyze_component_change",
    "build_rule_set",
    "detect_conflicts",
    "generate_optimization_insights",
    "generate_recommendations",
    "get_component_dependencies",
    "rank_conflicts",
    "review_configuration",
]
