"""Configuration review, optimization tips and change-impact analysis.

review_configuration answers "can this workout be generated as configured?"
and attaches optimization tips from generate_optimization_insights.
analyze_component_change answers "what happens if the user changes one field?"
by diffing conflict sets before and after the change. Diffing relies on ids
being content-derived, so the same conflict keeps the same id across calls.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from workout_conflicts.conflicts.aggregation import rank_conflicts
from workout_conflicts.conflicts.constants import COMPONENT_DEPENDENCIES, DEFAULT_THRESHOLDS, ConflictThresholds
from workout_conflicts.conflicts.engine import DEFAULT_ENGINE, ConflictDetectionEngine
from workout_conflicts.conflicts.extraction import extract_areas, extract_duration, extract_equipment, extract_focus
from workout_conflicts.conflicts.types import (
    AREAS_FIELD,
    DURATION_FIELD,
    EQUIPMENT_FIELD,
    FOCUS_FIELD,
    ConflictContext,
    ConflictRecord,
    OptionsBundle,
)

NEUTRAL_IMPACT_CONFIDENCE = 0.5


class OptimizationInsight(BaseModel):
    """A suggestion shown next to the workout configuration.

    Conflict-derived insights carry the conflict id in ``id``; standalone
    optimization tips use a fixed id per tip.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: Literal["critical_warning", "warning", "optimization"]
    message: str
    recommendation: str
    confidence: float = Field(ge=0.0, le=1.0)
    actionable: bool = True
    related_fields: tuple[str, ...] = Field(default=(), alias="relatedFields")
    metadata: dict[str, Any] = Field(default_factory=dict)


class ConfigurationReview(BaseModel):
    """Outcome of reviewing one options bundle."""

    is_valid: bool
    critical_issues: list[ConflictRecord] = Field(default_factory=list)
    warnings: list[ConflictRecord] = Field(default_factory=list)
    notes: list[ConflictRecord] = Field(default_factory=list)
    suggestions: list[OptimizationInsight] = Field(default_factory=list)


class ComponentImpact(BaseModel):
    """Effect of a single field change on the conflict set."""

    affected_component: str
    impact_type: Literal["positive", "negative", "neutral"]
    description: str
    confidence: float = Field(ge=0.0, le=1.0)
    conflict_id: str | None = None


def _is_critical(record: ConflictRecord) -> bool:
    return record.severity == "high" and record.type == "safety"


def generate_optimization_insights(
    options: OptionsBundle | None,
    thresholds: ConflictThresholds = DEFAULT_THRESHOLDS,
) -> list[OptimizationInsight]:
    """Build improvement tips that are not conflicts.

    - warm-up tip when duration exceeds VERY_LONG_DURATION_THRESHOLD
    - equipment tip for strength focus with fewer than MIN_EQUIPMENT_FOR_STRENGTH
      pieces (no equipment field counts as none)
    - areas tip when a focus is set but no target areas are
    """
    options = options if isinstance(options, Mapping) else {}
    duration = extract_duration(options.get(DURATION_FIELD))
    focus = extract_focus(options.get(FOCUS_FIELD))
    equipment = extract_equipment(options.get(EQUIPMENT_FIELD))
    areas = extract_areas(options.get(AREAS_FIELD))
    equipment_count = len(equipment.value) if equipment else 0

    insights: list[OptimizationInsight] = []
    if duration and duration.value > thresholds.VERY_LONG_DURATION_THRESHOLD:
        insights.append(
            OptimizationInsight(
                id="warmup_suggestion",
                type="optimization",
                message="Long workout duration detected - consider adding warm-up",
                recommendation=(
                    f"Include {thresholds.WARMUP_DURATION_MINUTES}-{thresholds.WARMUP_DURATION_MAX_MINUTES} "
                    "minutes of dynamic warm-up to prevent injury"
                ),
                confidence=thresholds.MEDIUM_LOW_CONFIDENCE,
                related_fields=(DURATION_FIELD,),
                metadata={"duration": duration.value, "suggestion": "add_warmup"},
            )
        )

    if focus.value == "strength" and equipment_count < thresholds.MIN_EQUIPMENT_FOR_STRENGTH:
        insights.append(
            OptimizationInsight(
                id="equipment_suggestion",
                type="optimization",
                message="Strength focus with minimal equipment may limit progression",
                recommendation="Consider adding resistance bands or dumbbells for variety",
                confidence=thresholds.LOW_CONFIDENCE,
                related_fields=(EQUIPMENT_FIELD, FOCUS_FIELD),
                metadata={"focus": focus.value, "equipment_count": equipment_count, "suggestion": "add_equipment"},
            )
        )

    if focus and not (areas and areas.value):
        insights.append(
            OptimizationInsight(
                id="areas_suggestion",
                type="optimization",
                message="Focus specified but no target areas selected",
                recommendation="Select specific muscle groups to target for better results",
                confidence=thresholds.VERY_LOW_CONFIDENCE,
                related_fields=(AREAS_FIELD, FOCUS_FIELD),
                metadata={"focus": focus.value, "suggestion": "select_areas"},
            )
        )
    return insights


def generate_recommendations(
    records: Iterable[ConflictRecord],
    options: OptionsBundle | None,
    thresholds: ConflictThresholds = DEFAULT_THRESHOLDS,
) -> list[OptimizationInsight]:
    """Turn conflicts into warnings and append optimization tips.

    High-severity safety conflicts become critical warnings. The result is
    ordered actionable first, then by confidence (highest first); the sort is
    stable.
    """
    insights = [
        OptimizationInsight(
            id=f"conflict_{record.id}",
            type="critical_warning" if _is_critical(record) else "warning",
            message=record.description,
            recommendation=record.suggested_resolution,
            confidence=record.confidence,
            related_fields=record.components,
            metadata={"conflict_type": record.type, "impact": record.impact, **record.metadata},
        )
        for record in records
    ]
    insights.extend(generate_optimization_insights(options, thresholds))
    return sorted(insights, key=lambda insight: (not insight.actionable, -insight.confidence))


def review_configuration(
    options: OptionsBundle | None,
    context: ConflictContext | Mapping[str, Any] | None = None,
    engine: ConflictDetectionEngine | None = None,
    thresholds: ConflictThresholds = DEFAULT_THRESHOLDS,
) -> ConfigurationReview:
    """Split aggregated, ranked conflicts into critical issues, warnings and notes.

    Critical issues are high-severity safety conflicts; a configuration with
    any of them is not valid. Other high or medium conflicts are warnings,
    low conflicts are notes. Suggestions are the optimization tips for the
    same options.
    """
    engine = engine or DEFAULT_ENGINE
    records = rank_conflicts(engine.detect_conflicts(options, context, aggregate=True))

    critical_issues = [record for record in records if _is_critical(record)]
    warnings = [record for record in records if not _is_critical(record) and record.severity in {"high", "medium"}]
    notes = [record for record in records if record.severity == "low"]

    return ConfigurationReview(
        is_valid=not critical_issues,
        critical_issues=critical_issues,
        warnings=warnings,
        notes=notes,
        suggestions=generate_optimization_insights(options, thresholds),
    )


def analyze_component_change(
    component: str,
    new_value: Any,
    options: OptionsBundle | None,
    context: ConflictContext | Mapping[str, Any] | None = None,
    engine: ConflictDetectionEngine | None = None,
) -> list[ComponentImpact]:
    """Compare conflicts before and after changing one option field.

    Args:
        component: Option field being changed (e.g. "customization_focus")
        new_value: New raw value; None removes the field
        options: Current options bundle (not modified)
        context: Context snapshot
        engine: Engine to use (default rule set if omitted)

    Returns:
        Positive impacts for resolved conflicts, negative impacts for new
        conflicts, or a single neutral impact when nothing changed
    """
    engine = engine or DEFAULT_ENGINE
    current_options = dict(options or {})
    new_options = dict(current_options)
    if new_value is None:
        new_options.pop(component, None)
    else:
        new_options[component] = new_value

    current_conflicts = engine.detect_conflicts(current_options, context)
    new_conflicts = engine.detect_conflicts(new_options, context)
    current_ids = {record.id for record in current_conflicts}
    new_ids = {record.id for record in new_conflicts}

    impacts: list[ComponentImpact] = [
        ComponentImpact(
            affected_component=record.components[0],
            impact_type="positive",
            description=f"Resolved: {record.description}",
            confidence=record.confidence,
            conflict_id=record.id,
        )
        for record in current_conflicts
        if record.id not in new_ids
    ]
    impacts.extend(
        ComponentImpact(
            affected_component=record.components[0],
            impact_type="negative",
            description=f"New issue: {record.description}",
            confidence=record.confidence,
            conflict_id=record.id,
        )
        for record in new_conflicts
        if record.id not in current_ids
    )

    if not impacts:
        impacts.append(
            ComponentImpact(
                affected_component="general",
                impact_type="neutral",
                description="No significant changes to conflict status",
                confidence=NEUTRAL_IMPACT_CONFIDENCE,
            )
        )
    return impacts


def get_component_dependencies(component: str | None = None) -> dict[str, tuple[str, ...]]:
    """Get the option-field dependency map, or the entry for one field."""
    if component is None:
        return dict(COMPONENT_DEPENDENCIES)
    if component not in COMPONENT_DEPENDENCIES:
        return {}
    return {component: COMPONENT_DEPENDENCIES[component]}
