"""Cross-component conflict detection engine.

Evaluates every rule of a rule set against one (options, context) snapshot,
in registration order, and returns the diagnostics of the rules that fired.

Pure function of its inputs: no I/O, no persistence, no shared mutable state.
A fresh id generator is created per call, so concurrent calls need no locks.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from workout_conflicts.conflicts.aggregation import aggregate_conflicts
from workout_conflicts.conflicts.ids import ConflictIdGenerator
from workout_conflicts.conflicts.rules import DEFAULT_RULE_SET, RuleSet
from workout_conflicts.conflicts.types import ConflictContext, ConflictRecord, OptionsBundle


def _normalize_options(options: OptionsBundle | None) -> OptionsBundle:
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        logger.warning(
            "Options bundle is not a mapping, evaluating as empty",
            options_type=type(options).__name__,
        )
        return {}
    return options


class ConflictDetectionEngine:
    """Evaluates a rule set against option bundles."""

    def __init__(self, rule_set: RuleSet = DEFAULT_RULE_SET) -> None:
        self._rule_set = rule_set

    @property
    def rule_set(self) -> RuleSet:
        return self._rule_set

    def evaluate(
        self,
        options: OptionsBundle | None,
        context: ConflictContext | Mapping[str, Any] | None = None,
    ) -> list[ConflictRecord]:
        """Run every rule and return raw diagnostics in rule order.

        All rules are evaluated every call; rules may co-fire. An exception
        raised by a predicate or generator is a defect in that rule and
        propagates to the caller.

        Args:
            options: Options bundle (mapping of customization field -> raw value)
            context: Context snapshot (mapping or ConflictContext)

        Returns:
            Ordered list of conflict records (empty when nothing conflicts)
        """
        options = _normalize_options(options)
        conflict_context = ConflictContext.from_raw(context)
        id_generator = ConflictIdGenerator()
        records: list[ConflictRecord] = []

        for rule in self._rule_set:
            try:
                if not rule.predicate(options, conflict_context):
                    continue
                finding = rule.generate(options, conflict_context)
            except Exception:
                logger.exception("Conflict rule raised during evaluation", rule=rule.name, group=rule.group)
                raise

            record = ConflictRecord.from_finding(id_generator.generate(rule.category, finding), finding)
            logger.debug(
                "Conflict rule triggered",
                rule=rule.name,
                group=rule.group,
                conflict_id=record.id,
                severity=record.severity,
            )
            records.append(record)

        logger.info(
            "Conflict detection complete",
            rules_evaluated=len(self._rule_set),
            conflicts=len(records),
        )
        return records

    def detect_conflicts(
        self,
        options: OptionsBundle | None,
        context: ConflictContext | Mapping[str, Any] | None = None,
        *,
        aggregate: bool = False,
    ) -> list[ConflictRecord]:
        """Detect conflicts, optionally collapsing duplicate diagnostics.

        Args:
            options: Options bundle
            context: Context snapshot
            aggregate: If True, merge records sharing components and type

        Returns:
            Ordered list of conflict records
        """
        records = self.evaluate(options, context)
        if aggregate:
            return aggregate_conflicts(records)
        return records


# Process-wide engine over the default rule set
DEFAULT_ENGINE = ConflictDetectionEngine()


def detect_conflicts(
    options: OptionsBundle | None,
    context: ConflictContext | Mapping[str, Any] | None = None,
    *,
    aggregate: bool = False,
) -> list[ConflictRecord]:
    """Detect conflicts with the default rule set."""
    return DEFAULT_ENGINE.detect_conflicts(options, context, aggregate=aggregate)
