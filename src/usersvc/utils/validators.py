"""
Field validators for user records.

Pure functions: no I/O, no side effects. Each returns the trimmed value on
success so callers persist the normalized form, and raises the matching
UserServiceError on failure.

Usage:
    from usersvc.utils.validators import validate_user

    name, email = validate_user(payload.name, payload.email)
"""

import re

from ..errors import EmptyName, InvalidEmailFormat

# local@domain.tld shape only: no DNS/MX lookup, no RFC 5322 parsing
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+", re.ASCII)


def validate_name(name: str) -> str:
    """
    Check that a name is non-empty once surrounding whitespace is removed.

    Args:
        name: Raw name as submitted

    Returns:
        The trimmed name

    Raises:
        EmptyName: If nothing but whitespace remains
    """
    trimmed = name.strip()
    if not trimmed:
        raise EmptyName()
    return trimmed


def validate_email(email: str) -> str:
    """
    Check that a trimmed email has the local@domain.tld shape.

    Args:
        email: Raw email as submitted

    Returns:
        The trimmed email

    Raises:
        InvalidEmailFormat: If the whole trimmed string does not match
    """
    trimmed = email.strip()
    if EMAIL_PATTERN.fullmatch(trimmed) is None:
        raise InvalidEmailFormat()
    return trimmed


def validate_user(name: str, email: str) -> tuple[str, str]:
    """Validate name, then email. The first failure wins."""
    return validate_name(name), validate_email(email)
