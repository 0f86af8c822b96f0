"""Diagnostic id generation.

Ids are ``<category>_<digest>`` where the digest is a content hash of the
finding, so identical inputs produce identical ids across calls (callers use
this to diff conflict sets). A generator lives for one evaluation call and
appends an ordinal suffix when the same id would be issued twice.
"""

import hashlib
import json

from workout_conflicts.conflicts.types import ConflictFinding

DIGEST_LENGTH = 12


def _finding_digest(category: str, finding: ConflictFinding) -> str:
    payload = json.dumps(
        {
            "category": category,
            "components": sorted(finding.components),
            "type": finding.type,
            "metadata": finding.metadata,
        },
        sort_keys=True,
        default=str,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]


class ConflictIdGenerator:
    """Issues ids that are unique within one evaluation call."""

    def __init__(self) -> None:
        self._issued: set[str] = set()

    def generate(self, category: str, finding: ConflictFinding) -> str:
        """Return a category-prefixed id for a finding.

        Args:
            category: Non-empty conflict category tag (e.g. "focus_duration")
            finding: The finding being materialized

        Returns:
            Id string, suffixed with ``_<n>`` if the base id was already issued

        Raises:
            ValueError: If category is empty
        """
        if not category or not category.strip():
            raise ValueError("Conflict category must be a non-empty string")

        base_id = f"{category}_{_finding_digest(category, finding)}"
        conflict_id = base_id
        ordinal = 1
        while conflict_id in self._issued:
            ordinal += 1
            conflict_id = f"{base_id}_{ordinal}"
        self._issued.add(conflict_id)
        return conflict_id

    @property
    def issued_count(self) -> int:
        return len(self._issued)
