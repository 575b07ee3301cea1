"""
PassGuard Exceptions
=====================
"""

from __future__ import annotations

from typing import Sequence

from passguard.core.models import RuleViolation


class PolicyViolation(ValueError):
    """Raised when a password candidate violates one or more policy rules.

    The message is every violated rule's message joined with ``"; "`` in
    rule order, so callers can match on a single reason by substring.
    Subclassing :class:`ValueError` lets pydantic validators surface it as
    a regular validation error.

    Attributes:
        violations: Ordered violated rules.
        status_code: HTTP status a web handler should respond with.
    """

    status_code = 400
    separator = "; "

    def __init__(self, violations: Sequence[RuleViolation]) -> None:
        self.violations: list[RuleViolation] = list(violations)
        # args holds the violations so the error survives pickling.
        super().__init__(self.violations)

    @property
    def messages(self) -> list[str]:
        return [v.message for v in self.violations]

    @property
    def rule_ids(self) -> list[str]:
        return [v.rule_id for v in self.violations]

    def __str__(self) -> str:
        return self.separator.join(self.messages)
