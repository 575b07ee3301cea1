"""
PassGuard Policy Engine
========================

Central entry point of the password policy engine. The
:class:`PasswordPolicyEngine` owns an immutable rule set and dictionary,
built once at construction, and exposes:

- :meth:`validate` -- enforce the policy, raising one aggregate
  :class:`PolicyViolation` listing every unmet rule;
- :meth:`check`    -- the same evaluation returned as a list;
- :meth:`score`    -- 0-100 strength estimate, never raises;
- :meth:`label`    -- Spanish strength band for a score;
- :meth:`assess`   -- everything above bundled in a :class:`StrengthReport`.

The engine holds no mutable state, so one instance can be shared by any
number of threads. Module-level :func:`validate`, :func:`score` and
:func:`label` are bound to a default engine.

References:
    - Gamma, E. et al. (1994). Design Patterns -- Strategy and Facade.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

from __future__ import annotations

import threading
from typing import Optional, Sequence

from shared.config import GuardConfig, PolicyConfig, get_config
from shared.logger import GuardLogger

from passguard.analyzers.dictionary import build_dictionary
from passguard.analyzers.rules import (
    PolicyRule,
    build_default_rules,
    present_classes,
)
from passguard.analyzers.strength import (
    build_suggestions,
    entropy_bits,
    label_for,
    strength_score,
)
from passguard.core.exceptions import PolicyViolation
from passguard.core.models import RuleViolation, StrengthReport


class PasswordPolicyEngine:
    """Validates password candidates and estimates their strength.

    Usage::

        engine = PasswordPolicyEngine()
        engine.validate("Fixia2024Secure!")        # returns None
        engine.score("Fixia2024Secure!")           # 70
        engine.label(70)                           # "Fuerte"

    Args:
        config: Configuration; only ``config.policy`` and the logging
            settings are used. Defaults to :class:`GuardConfig` defaults.
        rules: Custom ordered rule set replacing the default one.
    """

    def __init__(
        self,
        config: Optional[GuardConfig] = None,
        rules: Optional[Sequence[PolicyRule]] = None,
    ) -> None:
        self.config = config or GuardConfig()
        self.logger = GuardLogger.from_config("engine", self.config)

        self._dictionary: frozenset[str] = build_dictionary(
            self.policy.extra_common_passwords
        )
        self._rules: tuple[PolicyRule, ...] = (
            tuple(rules)
            if rules is not None
            else build_default_rules(self.policy, self._dictionary)
        )
        self.logger.debug(
            "Engine ready",
            rules=len(self._rules),
            dictionary_size=len(self._dictionary),
        )

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def policy(self) -> PolicyConfig:
        return self.config.policy

    @property
    def rules(self) -> tuple[PolicyRule, ...]:
        return self._rules

    @property
    def dictionary(self) -> frozenset[str]:
        return self._dictionary

    # ------------------------------------------------------------------ #
    #  Policy enforcement
    # ------------------------------------------------------------------ #

    def check(self, candidate: Optional[str]) -> list[RuleViolation]:
        """Evaluate every rule and return the violated ones, in rule order.

        An empty list means the candidate is compliant.
        """
        candidate = candidate or ""
        return [
            RuleViolation(rule_id=rule.rule_id, message=rule.message)
            for rule in self._rules
            if not rule.is_satisfied(candidate)
        ]

    def validate(self, candidate: Optional[str]) -> None:
        """Enforce the password policy.

        Args:
            candidate: Password candidate. ``None`` is treated as empty.

        Raises:
            PolicyViolation: If one or more rules are violated; the error
                carries every violated rule, not only the first.
        """
        violations = self.check(candidate)
        if violations:
            self.logger.debug(
                "Candidate rejected",
                operation="validate",
                rule_ids=[v.rule_id for v in violations],
            )
            raise PolicyViolation(violations)

    def is_compliant(self, candidate: Optional[str]) -> bool:
        return not self.check(candidate)

    # ------------------------------------------------------------------ #
    #  Strength estimation
    # ------------------------------------------------------------------ #

    def score(self, candidate: Optional[str]) -> int:
        """Strength score in [0, 100]; never raises."""
        return strength_score(candidate or "", self.policy, self._dictionary)

    @staticmethod
    def label(score: int) -> str:
        """Spanish strength label for *score*.

        ``< 30`` "Muy débil", ``< 50`` "Débil", ``< 70`` "Aceptable",
        ``< 90`` "Fuerte", otherwise "Muy fuerte".
        """
        return label_for(score).value

    def assess(self, candidate: Optional[str]) -> StrengthReport:
        """Full policy and strength assessment for a strength meter.

        Never raises; policy violations are reported in the result.
        """
        candidate = candidate or ""
        violations = self.check(candidate)
        classes = present_classes(candidate, self.policy.special_characters)
        value = self.score(candidate)

        self.logger.debug(
            "Candidate assessed",
            operation="assess",
            score=value,
            violations=len(violations),
        )

        return StrengthReport(
            password_masked=mask_password(candidate),
            length=len(candidate),
            character_classes=classes,
            entropy_bits=round(entropy_bits(candidate), 2),
            score=value,
            label=label_for(value),
            compliant=not violations,
            violations=violations,
            suggestions=build_suggestions(
                candidate,
                classes,
                [v.rule_id for v in violations],
                self.policy,
            ),
        )


def mask_password(candidate: str) -> str:
    """Show first and last character with asterisks in between."""
    if len(candidate) <= 2:
        return "*" * len(candidate)
    return candidate[0] + "*" * (len(candidate) - 2) + candidate[-1]


# ========================= Module-level convenience ========================

_default_engine: Optional[PasswordPolicyEngine] = None
_default_lock = threading.Lock()


def get_engine() -> PasswordPolicyEngine:
    """Shared default engine, built on first use from :func:`get_config`.

    It therefore applies the project ``config.toml`` when one exists, the
    same policy the CLI uses without ``--config``.
    """
    global _default_engine
    with _default_lock:
        if _default_engine is None:
            _default_engine = PasswordPolicyEngine(get_config())
        return _default_engine


def validate(candidate: Optional[str]) -> None:
    """Validate *candidate* with the default engine; see :meth:`PasswordPolicyEngine.validate`."""
    get_engine().validate(candidate)


def score(candidate: Optional[str]) -> int:
    return get_engine().score(candidate)


def label(value: int) -> str:
    return PasswordPolicyEngine.label(value)
