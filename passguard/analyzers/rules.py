"""
Password Policy Rules
======================

The password policy expressed as data: an ordered tuple of
:class:`PolicyRule` objects, each a named predicate plus the Spanish
message shown to the user when the predicate fails. The engine walks the
tuple in order, so the order of :func:`build_default_rules` is the order
in which violations are reported.

Default policy:

1. Length between 12 and 128 characters.
2. At least one uppercase letter, lowercase letter, digit and special
   character (each missing class is reported on its own).
3. Not a common password, nor containing one.
4. No numeric/alphabetic/keyboard sequence of 4+ characters.
5. No character repeated 4+ times in a row.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - OWASP Authentication Cheat Sheet -- password complexity.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Callable

from shared.config import PolicyConfig

from passguard.analyzers.dictionary import build_dictionary, contains_common_password
from passguard.analyzers.sequences import has_repeated_run, has_sequence

_CLASS_PREFIX = "La contraseña debe contener al menos: "

MSG_COMMON = (
    "Esta contraseña es demasiado común. "
    "Por favor, elige una contraseña más segura"
)
MSG_SEQUENCE = "La contraseña no debe contener secuencias obvias de caracteres"
MSG_REPETITION = "La contraseña no debe contener demasiados caracteres repetidos"


@dataclass(frozen=True)
class PolicyRule:
    """A named predicate over a password candidate.

    Attributes:
        rule_id: Stable identifier, e.g. ``"min_length"``.
        message: Violation message shown to the user.
        predicate: Returns ``True`` when the candidate satisfies the rule.
    """

    rule_id: str
    message: str
    predicate: Callable[[str], bool]

    def is_satisfied(self, candidate: str) -> bool:
        return self.predicate(candidate)


# ===================================================================== #
#  Character classes
# ===================================================================== #


def has_uppercase(candidate: str) -> bool:
    return any(c.isupper() for c in candidate)


def has_lowercase(candidate: str) -> bool:
    return any(c.islower() for c in candidate)


def has_digit(candidate: str) -> bool:
    return any(c in string.digits for c in candidate)


def has_special(candidate: str, specials: str) -> bool:
    return any(c in specials for c in candidate)


def present_classes(candidate: str, specials: str) -> list[str]:
    """Names of the character classes present in *candidate*, in fixed order."""
    found: list[str] = []
    if has_uppercase(candidate):
        found.append("uppercase")
    if has_lowercase(candidate):
        found.append("lowercase")
    if has_digit(candidate):
        found.append("digit")
    if has_special(candidate, specials):
        found.append("special")
    return found


# ===================================================================== #
#  Default rule set
# ===================================================================== #


def build_default_rules(
    policy: PolicyConfig,
    dictionary: frozenset[str] | None = None,
) -> tuple[PolicyRule, ...]:
    """Build the ordered default rule set for *policy*.

    Args:
        policy: Policy parameters (length bounds, run length, specials).
        dictionary: Common-password set; built from the policy's extra
            entries when omitted.

    Returns:
        Immutable, ordered tuple of rules.
    """
    words = dictionary if dictionary is not None else build_dictionary(
        policy.extra_common_passwords
    )
    specials = policy.special_characters
    window = policy.run_length

    return (
        PolicyRule(
            "min_length",
            f"La contraseña debe tener al menos {policy.min_length} caracteres",
            lambda c: len(c) >= policy.min_length,
        ),
        PolicyRule(
            "max_length",
            f"La contraseña no puede exceder {policy.max_length} caracteres",
            lambda c: len(c) <= policy.max_length,
        ),
        PolicyRule(
            "uppercase",
            _CLASS_PREFIX + "una letra mayúscula",
            has_uppercase,
        ),
        PolicyRule(
            "lowercase",
            _CLASS_PREFIX + "una letra minúscula",
            has_lowercase,
        ),
        PolicyRule(
            "digit",
            _CLASS_PREFIX + "un número",
            has_digit,
        ),
        PolicyRule(
            "special",
            _CLASS_PREFIX + "un carácter especial (!@#$%^&*...)",
            lambda c: has_special(c, specials),
        ),
        PolicyRule(
            "common_password",
            MSG_COMMON,
            lambda c: not contains_common_password(c, words),
        ),
        PolicyRule(
            "sequence",
            MSG_SEQUENCE,
            lambda c: not has_sequence(c, window),
        ),
        PolicyRule(
            "repetition",
            MSG_REPETITION,
            lambda c: not has_repeated_run(c, window),
        ),
    )
