"""
Pydantic integration for request models.

Registration and password-reset handlers declare their password field as
:data:`CompliantPassword` (or call :func:`validate_password_requirements`
from a ``field_validator``); a non-compliant value then fails model
validation with every policy message, which the web layer maps to a 400.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator

from passguard.core.engine import get_engine


def validate_password_requirements(password: str) -> str:
    """
    Validate password meets the password policy.

    Args:
        password: The password string to validate

    Returns:
        The validated password string

    Raises:
        PolicyViolation: If password doesn't meet the policy (a ValueError)
    """
    get_engine().validate(password)
    return password


CompliantPassword = Annotated[str, AfterValidator(validate_password_requirements)]
