"""Rule, rule group and rule set definitions.

A rule pairs a pure predicate with a generator that is only called when the
predicate holds. Rules are grouped by domain concern, and groups are
concatenated into the rule set the engine evaluates. Wiring errors are
detected here, at construction time, so a broken rule set never reaches
evaluation.
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from workout_conflicts.conflicts.errors import RuleConfigurationError
from workout_conflicts.conflicts.types import ConflictContext, ConflictFinding, OptionsBundle

Predicate = Callable[[OptionsBundle, ConflictContext], bool]
Generator = Callable[[OptionsBundle, ConflictContext], ConflictFinding]


@dataclass(frozen=True)
class Rule:
    """One conflict condition.

    Attributes:
        name: Unique rule name within a rule set
        category: Id namespace for findings produced by this rule
        predicate: (options, context) -> bool; must be total and side-effect free
        generate: (options, context) -> ConflictFinding; called only when predicate holds
        group: Name of the owning rule group (filled in by RuleGroup)
    """

    name: str
    category: str
    predicate: Predicate
    generate: Generator
    group: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise RuleConfigurationError("Rule name must be a non-empty string")
        if not self.category or not self.category.strip():
            raise RuleConfigurationError(f"Rule '{self.name}' has an empty category")
        if not callable(self.predicate):
            raise RuleConfigurationError(f"Rule '{self.name}' is missing a callable predicate")
        if not callable(self.generate):
            raise RuleConfigurationError(f"Rule '{self.name}' is missing a callable generator")


@dataclass(frozen=True)
class RuleGroup:
    """Ordered rules sharing one domain concern (e.g. focus conflicts)."""

    name: str
    rules: tuple[Rule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise RuleConfigurationError("Rule group name must be a non-empty string")
        rules = tuple(self.rules)
        for rule in rules:
            if not isinstance(rule, Rule):
                raise RuleConfigurationError(f"Rule group '{self.name}' contains a non-Rule entry: {rule!r}")
        # Stamp group membership onto each rule
        object.__setattr__(
            self,
            "rules",
            tuple(
                rule if rule.group == self.name else Rule(rule.name, rule.category, rule.predicate, rule.generate, self.name)
                for rule in rules
            ),
        )

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


class RuleSet:
    """Immutable, ordered union of rule groups.

    Iteration order is registration order: groups in the order given, rules
    in the order each group lists them.
    """

    def __init__(self, groups: Iterable[RuleGroup]) -> None:
        groups = tuple(groups)
        seen_groups: set[str] = set()
        seen_rules: set[str] = set()
        for group in groups:
            if not isinstance(group, RuleGroup):
                raise RuleConfigurationError(f"Rule set contains a non-RuleGroup entry: {group!r}")
            if group.name in seen_groups:
                raise RuleConfigurationError(f"Duplicate rule group name: {group.name}")
            seen_groups.add(group.name)
            for rule in group:
                if rule.name in seen_rules:
                    raise RuleConfigurationError(f"Duplicate rule name: {rule.name}")
                seen_rules.add(rule.name)

        self._groups = groups
        self._rules = tuple(rule for group in groups for rule in group)

    @property
    def groups(self) -> tuple[RuleGroup, ...]:
        return self._groups

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def get_rule(self, name: str) -> Rule | None:
        """Get a rule by name."""
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def list_rules(self) -> list[str]:
        """List rule names in evaluation order."""
        return [rule.name for rule in self._rules]

    def list_rules_by_group(self, group: str) -> list[str]:
        """List rule names in a specific group."""
        return [rule.name for rule in self._rules if rule.group == group]
