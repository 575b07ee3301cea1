"""
PassGuard Core Data Models
===========================

Pydantic models for the password policy engine: the violated-rule record
carried by :class:`~passguard.core.exceptions.PolicyViolation`, the
five-level strength label, and the full strength report returned by
:meth:`PasswordPolicyEngine.assess`.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class StrengthLabel(str, enum.Enum):
    """Qualitative strength band shown next to the strength meter."""

    VERY_WEAK = "Muy débil"
    WEAK = "Débil"
    FAIR = "Aceptable"
    STRONG = "Fuerte"
    VERY_STRONG = "Muy fuerte"


class RuleViolation(BaseModel):
    """One unmet policy rule.

    Attributes:
        rule_id: Stable rule identifier (e.g. ``"min_length"``).
        message: Spanish message shown to the user.
    """

    model_config = ConfigDict(frozen=True)

    rule_id: str
    message: str


class StrengthReport(BaseModel):
    """Complete policy and strength assessment of one candidate.

    Attributes:
        password_masked: First and last character with asterisks between.
        length: Candidate length in characters.
        character_classes: Classes present, in fixed order.
        entropy_bits: Combinatorial entropy estimate in bits.
        score: Strength score in [0, 100].
        label: Strength band derived from the score.
        compliant: Whether the candidate satisfies every policy rule.
        violations: Ordered list of violated rules.
        suggestions: Improvement hints.
    """

    password_masked: str = ""
    length: int = 0
    character_classes: list[str] = Field(default_factory=list)
    entropy_bits: float = 0.0
    score: int = Field(default=0, ge=0, le=100)
    label: StrengthLabel = StrengthLabel.VERY_WEAK
    compliant: bool = False
    violations: list[RuleViolation] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
