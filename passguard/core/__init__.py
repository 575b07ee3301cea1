"""
PassGuard Core Module
======================

The policy engine, its exception and its data models.
"""

from passguard.core.engine import PasswordPolicyEngine, get_engine
from passguard.core.exceptions import PolicyViolation
from passguard.core.models import RuleViolation, StrengthLabel, StrengthReport

__all__ = [
    "PasswordPolicyEngine",
    "PolicyViolation",
    "RuleViolation",
    "StrengthLabel",
    "StrengthReport",
    "get_engine",
]
