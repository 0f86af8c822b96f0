"""Tests for configuration review, optimization tips and change-impact analysis."""

import pytest

from workout_conflicts.conflicts import (
    DEFAULT_THRESHOLDS,
    ConflictThresholds,
    analyze_component_change,
    detect_conflicts,
    generate_optimization_insights,
    generate_recommendations,
    get_component_dependencies,
    review_configuration,
)


def _categories(records):
    return [record.id.rsplit("_", 1)[0] for record in records]


class TestReviewConfiguration:
    def test_clean_configuration(self):
        review = review_configuration({"customization_focus": "mobility", "customization_duration": 40})
        assert review.is_valid
        assert review.critical_issues == review.warnings == review.notes == []

    def test_high_severity_safety_is_critical(self):
        review = review_configuration({"customization_focus": "strength", "customization_energy": 1})
        assert not review.is_valid
        assert _categories(review.critical_issues) == ["energy_focus"]

    def test_medium_conflict_is_warning(self):
        review = review_configuration({"customization_focus": "strength", "customization_duration": 20})
        assert review.is_valid
        assert _categories(review.warnings) == ["focus_duration"]

    def test_high_efficiency_conflict_is_warning(self):
        """High severity alone does not block generation; it must also be a safety issue."""
        review = review_configuration({"customization_energy": 2, "customization_duration": 75})
        assert review.is_valid
        assert _categories(review.warnings) == ["energy_duration"]

    def test_low_conflict_is_note(self):
        review = review_configuration(
            {"customization_focus": "strength", "customization_duration": 70},
            {"userProfile": {"goals": ["weight_loss"]}},
        )
        assert review.is_valid
        assert _categories(review.notes) == ["goal_focus"]

    def test_critical_issues_ranked(self):
        options = {
            "customization_focus": "strength",
            "customization_energy": 1,
            "customization_trainingLoad": {"averageIntensity": "intense", "weeklyVolume": 400},
        }
        review = review_configuration(options)
        assert _categories(review.critical_issues) == [
            "energy_focus",
            "training_load_energy",
            "training_load_focus",
        ]


class TestAnalyzeComponentChange:
    def test_change_resolves_conflict(self):
        options = {"customization_focus": "strength", "customization_duration": 20}
        impacts = analyze_component_change("customization_duration", 45, options)
        assert len(impacts) == 1
        assert impacts[0].impact_type == "positive"
        assert impacts[0].affected_component == "customization_focus"
        assert impacts[0].description.startswith("Resolved: Strength focus with very short duration")
        assert impacts[0].conflict_id.startswith("focus_duration_")

    def test_change_introduces_conflict(self):
        impacts = analyze_component_change("customization_energy", 1, {"customization_focus": "strength"})
        assert [impact.impact_type for impact in impacts] == ["negative"]
        assert impacts[0].affected_component == "customization_energy"
        assert impacts[0].description.startswith("New issue: ")
        assert impacts[0].confidence == 0.9

    def test_change_with_no_effect(self):
        options = {"customization_focus": "strength", "customization_duration": 45}
        impacts = analyze_component_change("customization_duration", 50, options)
        assert len(impacts) == 1
        assert impacts[0].impact_type == "neutral"
        assert impacts[0].affected_component == "general"
        assert impacts[0].confidence == 0.5
        assert impacts[0].conflict_id is None

    def test_removing_field(self):
        options = {"customization_focus": "strength", "customization_duration": 20}
        impacts = analyze_component_change("customization_duration", None, options)
        assert [impact.impact_type for impact in impacts] == ["positive"]
        assert options == {"customization_focus": "strength", "customization_duration": 20}

    def test_swap_reports_both_directions(self):
        """Switching focus resolves one conflict and introduces another."""
        options = {"customization_focus": "strength", "customization_duration": 20}
        context = {"userProfile": {"fitnessLevel": "beginner"}}
        impacts = analyze_component_change("customization_focus", "endurance", options, context)
        assert [impact.impact_type for impact in impacts] == ["positive", "negative"]
        assert impacts[1].conflict_id.startswith("experience_focus_")


class TestComponentDependencies:
    def test_single_component(self):
        assert get_component_dependencies("customization_soreness") == {
            "customization_soreness": ("customization_areas", "customization_focus", "customization_duration")
        }

    def test_unknown_component(self):
        assert get_component_dependencies("customization_music") == {}

    def test_full_map(self):
        dependencies = get_component_dependencies()
        assert "customization_trainingLoad" in dependencies
        assert len(dependencies) == 7


class TestOptimizationInsights:
    def _ids(self, options, thresholds=DEFAULT_THRESHOLDS):
        return [insight.id for insight in generate_optimization_insights(options, thresholds)]

    def test_warmup_for_very_long_session(self):
        insights = generate_optimization_insights({"customization_duration": 95})
        assert [insight.id for insight in insights] == ["warmup_suggestion"]
        assert insights[0].recommendation.startswith("Include 5-10 minutes")
        assert insights[0].confidence == 0.75
        assert insights[0].metadata == {"duration": 95, "suggestion": "add_warmup"}

    def test_no_warmup_at_very_long_threshold(self):
        assert self._ids({"customization_duration": 90}) == []

    def test_fractional_duration_above_threshold(self):
        assert self._ids({"customization_duration": 90.5}) == ["warmup_suggestion"]

    @pytest.mark.parametrize("equipment", [None, [], ["Dumbbells"]])
    def test_strength_with_minimal_equipment(self, equipment):
        options = {"customization_focus": "strength", "customization_areas": ["legs"]}
        if equipment is not None:
            options["customization_equipment"] = equipment
        assert self._ids(options) == ["equipment_suggestion"]

    def test_strength_with_enough_equipment(self):
        options = {
            "customization_focus": "strength",
            "customization_areas": ["legs"],
            "customization_equipment": ["Dumbbells", "Bench"],
        }
        assert self._ids(options) == []

    def test_focus_without_areas(self):
        insights = generate_optimization_insights({"customization_focus": "mobility", "customization_areas": []})
        assert [insight.id for insight in insights] == ["areas_suggestion"]
        assert insights[0].related_fields == ("customization_areas", "customization_focus")

    def test_no_focus_no_tips(self):
        assert self._ids({"customization_areas": []}) == []
        assert self._ids(None) == []

    def test_threshold_substitution(self):
        options = {"customization_focus": "strength", "customization_areas": ["legs"]}
        assert self._ids(options, ConflictThresholds(MIN_EQUIPMENT_FOR_STRENGTH=0)) == []


class TestGenerateRecommendations:
    OPTIONS = {
        "customization_focus": "strength",
        "customization_energy": 1,
        "customization_duration": 20,
        "customization_equipment": ["Dumbbells"],
    }

    def test_conflicts_and_tips_ordered_by_confidence(self):
        insights = generate_recommendations(detect_conflicts(self.OPTIONS), self.OPTIONS)
        assert [insight.type for insight in insights] == ["critical_warning", "warning", "optimization", "optimization"]
        assert insights[0].id.startswith("conflict_energy_focus_")
        assert insights[1].id.startswith("conflict_focus_duration_")
        assert [insight.id for insight in insights[2:]] == ["equipment_suggestion", "areas_suggestion"]
        assert [insight.confidence for insight in insights] == [0.9, 0.75, 0.7, 0.65]

    def test_conflict_fields_carried_over(self):
        record = detect_conflicts(self.OPTIONS)[0]
        insight = generate_recommendations([record], {})[0]
        assert insight.message == record.description
        assert insight.recommendation == record.suggested_resolution
        assert insight.related_fields == record.components
        assert insight.metadata["conflict_type"] == record.type

    def test_wire_shape(self):
        insight = generate_optimization_insights({"customization_duration": 120})[0]
        assert insight.model_dump(by_alias=True)["relatedFields"] == ("customization_duration",)


class TestReviewSuggestions:
    def test_suggestions_populated(self):
        review = review_configuration({"customization_focus": "strength", "customization_duration": 100})
        assert review.is_valid
        assert [insight.id for insight in review.suggestions] == [
            "warmup_suggestion",
            "equipment_suggestion",
            "areas_suggestion",
        ]

    def test_suggestions_follow_thresholds(self):
        thresholds = ConflictThresholds(VERY_LONG_DURATION_THRESHOLD=120)
        review = review_configuration({"customization_duration": 100}, thresholds=thresholds)
        assert review.suggestions == []
