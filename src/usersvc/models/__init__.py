"""Entity models for the user service."""

from .user import User, UserPayload

__all__ = ["User", "UserPayload"]
