"""
PassGuard Analyzers
====================

Rule definitions, the common-password dictionary, sequence and
repetition detectors, and the strength heuristic.
"""

from passguard.analyzers.dictionary import COMMON_PASSWORDS, build_dictionary
from passguard.analyzers.rules import PolicyRule, build_default_rules
from passguard.analyzers.sequences import (
    find_keyboard_run,
    find_monotonic_run,
    find_repeated_run,
)
from passguard.analyzers.strength import label_for, strength_score

__all__ = [
    "COMMON_PASSWORDS",
    "PolicyRule",
    "build_default_rules",
    "build_dictionary",
    "find_keyboard_run",
    "find_monotonic_run",
    "find_repeated_run",
    "label_for",
    "strength_score",
]
