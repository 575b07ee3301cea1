"""
Password Strength Scoring
==========================

Heuristic 0-100 strength score and its five-level Spanish label, used to
drive a strength meter before the password is submitted. The score is
independent of policy compliance: a rejected candidate is still scored.

Score composition:

- Length:   2 points per character up to the knee (12), then 1 point per
            additional character, so every extra character counts.
- Classes:  8 points for each of uppercase, lowercase, digit, special.
- Variety:  distinct-character ratio scaled to at most 12 points.
- Penalties: dictionary hit (-30), sequence (-20), repetition (-20).

The result is clamped to [0, 100]. For display, an entropy estimate is
also provided using the combinatorial model log2(pool ** length).

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017), Appendix A -- Strength of Memorized Secrets.
    - Wheeler, D. L. (2016). zxcvbn: Low-Budget Password Strength
      Estimation. USENIX Security.
"""

from __future__ import annotations

import math
import string
from typing import Iterable

from shared.config import PolicyConfig

from passguard.analyzers.dictionary import COMMON_PASSWORDS, contains_common_password
from passguard.analyzers.rules import present_classes
from passguard.analyzers.sequences import has_repeated_run, has_sequence
from passguard.core.models import StrengthLabel

_POINTS_PER_CLASS = 8
_LENGTH_KNEE = 12

# Lower bounds, checked from the top down.
LABEL_THRESHOLDS: tuple[tuple[int, StrengthLabel], ...] = (
    (90, StrengthLabel.VERY_STRONG),
    (70, StrengthLabel.STRONG),
    (50, StrengthLabel.FAIR),
    (30, StrengthLabel.WEAK),
)


# ===================================================================== #
#  Score components
# ===================================================================== #


def length_points(length: int, knee: int = _LENGTH_KNEE) -> int:
    if length <= knee:
        return 2 * length
    return 2 * knee + (length - knee)


def class_points(class_count: int) -> int:
    return _POINTS_PER_CLASS * class_count


def variety_points(candidate: str, knee: int = _LENGTH_KNEE) -> int:
    """Distinct-character ratio scaled by ``min(len, knee)``.

    Below the knee this is simply the number of distinct characters.
    """
    if not candidate:
        return 0
    ratio = len(set(candidate)) / len(candidate)
    return int(ratio * min(len(candidate), knee) + 0.5)


def penalty_points(
    candidate: str,
    policy: PolicyConfig,
    dictionary: frozenset[str] = COMMON_PASSWORDS,
) -> int:
    penalty = 0
    if contains_common_password(candidate, dictionary):
        penalty += policy.dictionary_penalty
    if has_sequence(candidate, policy.run_length):
        penalty += policy.sequence_penalty
    if has_repeated_run(candidate, policy.run_length):
        penalty += policy.repetition_penalty
    return penalty


def strength_score(
    candidate: str,
    policy: PolicyConfig,
    dictionary: frozenset[str] = COMMON_PASSWORDS,
) -> int:
    """Compute the clamped 0-100 strength score of *candidate*.

    Args:
        candidate: Password candidate (may be empty).
        policy: Policy parameters supplying penalties and run length.
        dictionary: Common-password set used for the dictionary penalty.

    Returns:
        Integer score in [0, 100].
    """
    if not candidate:
        return 0

    classes = present_classes(candidate, policy.special_characters)
    total = (
        length_points(len(candidate))
        + class_points(len(classes))
        + variety_points(candidate)
        - penalty_points(candidate, policy, dictionary)
    )
    return max(0, min(100, total))


def label_for(score: int) -> StrengthLabel:
    """Map a score onto its :class:`StrengthLabel` band."""
    for lower_bound, label in LABEL_THRESHOLDS:
        if score >= lower_bound:
            return label
    return StrengthLabel.VERY_WEAK


# ===================================================================== #
#  Entropy estimate (display only)
# ===================================================================== #


def pool_size(candidate: str) -> int:
    """Effective character pool size based on the classes used.

    Lowercase 26, uppercase 26, digits 10, ASCII symbols 33, and 100 for
    any non-ASCII character.
    """
    pool = 0
    if any(c in string.ascii_lowercase for c in candidate):
        pool += 26
    if any(c in string.ascii_uppercase for c in candidate):
        pool += 26
    if any(c in string.digits for c in candidate):
        pool += 10
    if any(32 <= ord(c) < 127 and not c.isalnum() for c in candidate):
        pool += 33
    if any(ord(c) > 127 for c in candidate):
        pool += 100
    return pool


def entropy_bits(candidate: str) -> float:
    """Combinatorial entropy ``len * log2(pool)``, in bits."""
    pool = pool_size(candidate)
    if not candidate or pool <= 1:
        return 0.0
    return len(candidate) * math.log2(pool)


# ===================================================================== #
#  Suggestions
# ===================================================================== #


def build_suggestions(
    candidate: str,
    classes: Iterable[str],
    violated: Iterable[str],
    policy: PolicyConfig,
) -> list[str]:
    """Spanish improvement hints for a strength meter.

    Args:
        candidate: Password candidate.
        classes: Character classes present (see ``present_classes``).
        violated: Rule ids the candidate violates.
        policy: Active policy parameters.

    Returns:
        Ordered list of suggestions; never empty.
    """
    present = set(classes)
    failed = set(violated)
    suggestions: list[str] = []

    if len(candidate) < policy.min_length + 4:
        suggestions.append(
            f"Usa al menos {policy.min_length + 4} caracteres: cada carácter "
            f"adicional aumenta la seguridad (actualmente {len(candidate)})."
        )

    names = {
        "uppercase": "mayúsculas",
        "lowercase": "minúsculas",
        "digit": "números",
        "special": "símbolos",
    }
    missing = [label for key, label in names.items() if key not in present]
    if missing:
        suggestions.append(f"Combina {', '.join(missing)}.")

    if "common_password" in failed:
        suggestions.append(
            "Evita contraseñas conocidas o filtradas, aunque estén dentro "
            "de una frase más larga."
        )
    if "sequence" in failed:
        suggestions.append(
            "Evita secuencias como 1234, abcd o qwerty."
        )
    if "repetition" in failed:
        suggestions.append(
            f"No repitas el mismo carácter {policy.run_length} o más veces seguidas."
        )

    if not suggestions:
        suggestions.append(
            "Buena contraseña. Considera usar un gestor de contraseñas para "
            "generar y guardar contraseñas únicas."
        )
    return suggestions
