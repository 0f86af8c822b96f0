"""Tests for option and context extraction helpers."""

import pytest

from workout_conflicts.conflicts.extraction import (
    ABSENT,
    Extracted,
    extract_areas,
    extract_duration,
    extract_energy,
    extract_equipment,
    extract_fitness_level,
    extract_focus,
    extract_goals,
    extract_soreness,
    extract_time_of_day,
    extract_training_load,
)
from workout_conflicts.conflicts.types import ConflictContext


class TestExtracted:
    def test_absent_is_falsy(self):
        assert not ABSENT
        assert ABSENT.value is None

    def test_present_empty_value_is_truthy(self):
        """An empty selection is still a present value."""
        assert Extracted.of(())


class TestFocus:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("strength", "strength"),
            ("  Power ", "power"),
            ({"focus": "Endurance"}, "endurance"),
            ("RECOVERY", "recovery"),
        ],
    )
    def test_known_values(self, raw, expected):
        assert extract_focus(raw) == Extracted.of(expected)

    @pytest.mark.parametrize("raw", [None, "", "zumba", 3, False, {"focus": 3}, ["strength"]])
    def test_unknown_values(self, raw):
        assert extract_focus(raw) is ABSENT


class TestDuration:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(30, 30), (29.6, 29.6), ("45", 45), ("29.5", 29.5), ({"totalDuration": 20}, 20), ({"duration": 60}, 60)],
    )
    def test_valid_durations(self, raw, expected):
        assert extract_duration(raw).value == expected

    @pytest.mark.parametrize(
        "raw",
        [None, 0, -5, True, "long", float("nan"), float("inf"), 10**400, "1e400", {"totalDuration": None}, {}],
    )
    def test_invalid_durations(self, raw):
        assert extract_duration(raw) is ABSENT


class TestEnergy:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(1, 1), (5, 5), ("2", 2), (2.5, 2.5), ({"rating": 3}, 3), ({"value": 4}, 4)],
    )
    def test_valid_energy(self, raw, expected):
        assert extract_energy(raw).value == expected

    @pytest.mark.parametrize("raw", [0, 6, None, True, "tired", 10**400, -(10**400)])
    def test_out_of_scale(self, raw):
        assert extract_energy(raw) is ABSENT


class TestSelections:
    def test_equipment_list(self):
        assert extract_equipment(["Dumbbells", "Mat", "Dumbbells"]).value == ("Dumbbells", "Mat")

    def test_equipment_object(self):
        assert extract_equipment({"specificEquipment": ["Bench"]}).value == ("Bench",)
        assert extract_equipment({"equipment": ["Bands"]}).value == ("Bands",)

    def test_empty_equipment_is_present(self):
        equipment = extract_equipment([])
        assert equipment
        assert equipment.value == ()

    def test_missing_equipment_is_absent(self):
        assert extract_equipment(None) is ABSENT
        assert extract_equipment("Dumbbells") is ABSENT

    def test_areas(self):
        assert extract_areas({"selectedAreas": ["chest", "", 4, "legs"]}).value == ("chest", "legs")

    def test_soreness_rating_map(self):
        raw = {"back": {"selected": True, "rating": 3}, "legs": {"selected": False}, "arms": "yes"}
        assert extract_soreness(raw).value == ("back",)


class TestTrainingLoad:
    def test_intense_load(self):
        load = extract_training_load({"averageIntensity": "Intense", "weeklyVolume": "350", "recentActivities": ["run"]})
        assert load.value.average_intensity == "intense"
        assert load.value.weekly_volume == 350.0
        assert load.value.recent_activities == ("run",)

    def test_missing_volume_defaults_to_zero(self):
        assert extract_training_load({"averageIntensity": "light"}).value.weekly_volume == 0.0

    @pytest.mark.parametrize("raw", [None, [], {"weeklyVolume": 500}, {"averageIntensity": "extreme"}])
    def test_invalid_load(self, raw):
        assert extract_training_load(raw) is ABSENT


class TestContextExtraction:
    def test_fitness_level_aliases(self):
        context = ConflictContext.from_raw({"userProfile": {"fitnessLevel": "Advanced Athlete"}})
        assert extract_fitness_level(context).value == "advanced"

    def test_unknown_fitness_level(self):
        context = ConflictContext.from_raw({"userProfile": {"fitnessLevel": "adaptive"}})
        assert extract_fitness_level(context) is ABSENT

    def test_time_of_day(self):
        context = ConflictContext.from_raw({"environmentalFactors": {"timeOfDay": "Evening"}})
        assert extract_time_of_day(context).value == "evening"
        assert extract_time_of_day(ConflictContext()) is ABSENT

    def test_goals(self):
        context = ConflictContext.from_raw({"userProfile": {"goals": ["Weight Loss", "strength"]}})
        assert extract_goals(context).value == ("weight_loss", "strength")
        assert extract_goals(ConflictContext.from_raw({"userProfile": {"goals": []}})) is ABSENT


class TestNumericEdgeCases:
    def test_whole_numbers_stay_int(self):
        assert isinstance(extract_duration(45.0).value, int)
        assert isinstance(extract_energy("3").value, int)

    def test_oversized_weekly_volume_defaults_to_zero(self):
        load = extract_training_load({"averageIntensity": "intense", "weeklyVolume": 10**400})
        assert load.value.weekly_volume == 0.0
