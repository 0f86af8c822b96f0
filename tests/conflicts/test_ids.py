"""Tests for diagnostic id generation."""

import pytest

from workout_conflicts.conflicts.ids import DIGEST_LENGTH, ConflictIdGenerator
from workout_conflicts.conflicts.types import ConflictFinding


def _finding(**metadata) -> ConflictFinding:
    return ConflictFinding(
        components=("customization_focus", "customization_duration"),
        type="efficiency",
        severity="medium",
        description="Strength focus with very short duration may limit training effectiveness",
        suggested_resolution="Increase duration",
        confidence=0.75,
        impact="effectiveness",
        metadata=metadata,
    )


class TestConflictIdGenerator:
    def test_category_prefix(self):
        conflict_id = ConflictIdGenerator().generate("focus_duration", _finding(duration=20))
        prefix, digest = conflict_id.rsplit("_", 1)
        assert prefix == "focus_duration"
        assert len(digest) == DIGEST_LENGTH

    def test_reproducible_across_generators(self):
        """Identical findings get identical ids in separate evaluation calls."""
        first = ConflictIdGenerator().generate("focus_duration", _finding(duration=20))
        second = ConflictIdGenerator().generate("focus_duration", _finding(duration=20))
        assert first == second

    def test_different_trigger_data_gives_different_ids(self):
        generator = ConflictIdGenerator()
        first = generator.generate("focus_duration", _finding(duration=20))
        second = generator.generate("focus_duration", _finding(duration=10))
        assert first != second

    def test_same_finding_twice_in_one_call(self):
        """Repeated findings within one call are suffixed to stay unique."""
        generator = ConflictIdGenerator()
        ids = [generator.generate("focus_duration", _finding(duration=20)) for _ in range(3)]
        assert len(set(ids)) == 3
        assert ids[1] == f"{ids[0]}_2"
        assert ids[2] == f"{ids[0]}_3"
        assert generator.issued_count == 3

    def test_component_order_does_not_matter(self):
        finding = _finding(duration=20)
        reordered = finding.model_copy(update={"components": tuple(reversed(finding.components))})
        assert ConflictIdGenerator().generate("c", finding) == ConflictIdGenerator().generate("c", reordered)

    @pytest.mark.parametrize("category", ["", "   "])
    def test_empty_category_rejected(self, category):
        with pytest.raises(ValueError, match="non-empty"):
            ConflictIdGenerator().generate(category, _finding())
