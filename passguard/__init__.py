"""
PassGuard -- Password Policy & Strength Engine
===============================================

Enforces the marketplace password policy for registration and password
changes, and scores candidate passwords for a live strength meter.

Modules:
    - passguard.core.engine: PasswordPolicyEngine and default functions
    - passguard.core.models: Pydantic data models
    - passguard.analyzers: Rules, dictionary, sequence detection, scoring
    - passguard.validators: Pydantic field integration
    - passguard.output: Console and report output
    - passguard.cli: Click-based command-line interface

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - OWASP Authentication Cheat Sheet.
"""

from passguard.core.engine import PasswordPolicyEngine, label, score, validate
from passguard.core.exceptions import PolicyViolation

__version__ = "1.0.0"
__tool_name__ = "passguard"

__all__ = [
    "PasswordPolicyEngine",
    "PolicyViolation",
    "label",
    "score",
    "validate",
]
