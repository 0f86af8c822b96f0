"""Post-processing of raw conflict records.

Aggregation collapses diagnostics that describe the same tension (same
component set, same type) so the UI does not show redundant warnings.
Ranking orders records for display. Both return new lists and never mutate
the raw engine output.
"""

from collections.abc import Iterable

from loguru import logger

from workout_conflicts.conflicts.types import SEVERITY_RANK, ConflictRecord


def _duplicate_key(record: ConflictRecord) -> tuple[frozenset[str], str]:
    return record.component_set, record.type


def _outranks(candidate: ConflictRecord, current: ConflictRecord) -> bool:
    """True if candidate should replace current; ties keep the earlier record."""
    candidate_rank = SEVERITY_RANK[candidate.severity]
    current_rank = SEVERITY_RANK[current.severity]
    if candidate_rank != current_rank:
        return candidate_rank > current_rank
    return candidate.confidence > current.confidence


def aggregate_conflicts(records: Iterable[ConflictRecord]) -> list[ConflictRecord]:
    """Merge duplicate records.

    Two records are duplicates when they reference the same unordered set of
    components and have the same type. The survivor is the higher severity,
    then the higher confidence, then the first encountered. Survivors keep the
    position of the first record in their duplicate group.

    Args:
        records: Raw records in evaluation order

    Returns:
        De-duplicated records
    """
    slots: dict[tuple[frozenset[str], str], int] = {}
    survivors: list[ConflictRecord] = []
    merged = 0

    for record in records:
        key = _duplicate_key(record)
        if key not in slots:
            slots[key] = len(survivors)
            survivors.append(record)
            continue
        merged += 1
        index = slots[key]
        if _outranks(record, survivors[index]):
            survivors[index] = record

    if merged:
        logger.debug("Merged duplicate conflicts", merged=merged, remaining=len(survivors))
    return survivors


def rank_conflicts(records: Iterable[ConflictRecord]) -> list[ConflictRecord]:
    """Order records by severity (high first), then confidence (high first).

    The sort is stable, so equal records keep evaluation order.
    """
    return sorted(
        records,
        key=lambda record: (-SEVERITY_RANK[record.severity], -record.confidence),
    )
