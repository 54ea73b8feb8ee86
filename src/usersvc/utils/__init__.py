"""Utility functions for the user service."""

from .validators import validate_email, validate_name, validate_user

__all__ = ["validate_email", "validate_name", "validate_user"]
