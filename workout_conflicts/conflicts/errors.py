"""Errors raised by the conflict detection engine.

Data absence is never an error: extraction returns ABSENT and the rule simply
does not fire. Only broken rule wiring raises, and it does so at startup.
"""


class ConflictEngineError(Exception):
    """Base exception for all conflict engine errors."""

    pass


class RuleConfigurationError(ConflictEngineError):
    """Raised when a rule or rule set is wired incorrectly (missing predicate, duplicate name)."""

    pass
