"""Repositories for entity persistence."""

from .user_repository import USERS_TABLE_DDL, UserRepository

__all__ = ["UserRepository", "USERS_TABLE_DDL"]
