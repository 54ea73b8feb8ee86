"""UserRepository - persistence for the users table.

Maps five operations onto parameterized SQL and driver outcomes onto domain
outcomes:

    list()                  -> list[User]
    get(id)                 -> User | None            (None = not found)
    create(name, email)     -> User                   (id assigned by the store)
    update(id, name, email) -> User | None            (None = not found)
    delete(id)              -> bool                   (False = not found)

Any driver or connectivity failure is logged and re-raised as StorageError
carrying a client-safe message.

PostgreSQL does not raise on a write that matches no row, so "not found" is
derived from cardinality: update reads the affected-row count from the
command tag, delete checks existence before removing. The delete check and
removal are two independent statements, not a transaction.
"""

import asyncpg
from loguru import logger

from ...errors import StorageError
from ...models import User
from ..postgres import PostgresService, affected_rows

USERS_TABLE_DDL = """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT NOT NULL
    )
"""

# Failures below the repository: server errors, protocol/pool misuse, network
STORAGE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, RuntimeError)


class UserRepository:
    """Repository for User entities."""

    def __init__(self, db: PostgresService):
        self.db = db
        self.table = "users"

    async def init_schema(self) -> None:
        """
        Create the users table if it does not exist.

        Idempotent; run once at startup.
        """
        await self.db.execute(USERS_TABLE_DDL)
        logger.info(f"Table '{self.table}' ready")

    async def list(self) -> list[User]:
        """
        Get all users in the order the engine returns them.

        Returns:
            List of users (empty when the table is empty)
        """
        try:
            rows = await self.db.fetch(f"SELECT id, name, email FROM {self.table}")
        except STORAGE_FAILURES as e:
            logger.error(f"Error querying users: {e}")
            raise StorageError("Error querying users") from e

        return [User.model_validate(dict(row)) for row in rows]

    async def get(self, user_id: int) -> User | None:
        """
        Get a single user by ID.

        Args:
            user_id: Primary key

        Returns:
            User or None if not found
        """
        try:
            row = await self.db.fetchrow(
                f"SELECT id, name, email FROM {self.table} WHERE id = $1::bigint",
                user_id,
            )
        except STORAGE_FAILURES as e:
            logger.error(f"Error querying user {user_id}: {e}")
            raise StorageError("Internal server error") from e

        if not row:
            return None
        return User.model_validate(dict(row))

    async def create(self, name: str, email: str) -> User:
        """
        Insert a new user. Input is assumed to be validated already.

        Args:
            name: User name
            email: User email

        Returns:
            The persisted user including its generated id
        """
        try:
            row = await self.db.fetchrow(
                f"INSERT INTO {self.table} (name, email) VALUES ($1, $2) "
                f"RETURNING id, name, email",
                name,
                email,
            )
        except STORAGE_FAILURES as e:
            logger.error(f"Error inserting user: {e}")
            raise StorageError("Database insert error") from e

        user = User.model_validate(dict(row))
        logger.debug(f"Created user id={user.id}")
        return user

    async def update(self, user_id: int, name: str, email: str) -> User | None:
        """
        Overwrite name and email of an existing user.

        Success is decided by the affected-row count, not by the absence of
        an error. The returned record is built from the arguments; the row is
        not read back.

        Args:
            user_id: Primary key selecting the row
            name: New name
            email: New email

        Returns:
            The submitted record, or None if no row has that id
        """
        try:
            status = await self.db.execute(
                f"UPDATE {self.table} SET name = $1, email = $2 WHERE id = $3::bigint",
                name,
                email,
                user_id,
            )
        except STORAGE_FAILURES as e:
            logger.error(f"Error updating user {user_id}: {e}")
            raise StorageError("Error updating user") from e

        if affected_rows(status) == 0:
            return None

        logger.debug(f"Updated user id={user_id}")
        return User(id=user_id, name=name, email=email)

    async def delete(self, user_id: int) -> bool:
        """
        Delete a user after confirming it exists.

        Args:
            user_id: Primary key

        Returns:
            True if the user existed and was deleted, False if not found
        """
        try:
            row = await self.db.fetchrow(
                f"SELECT id FROM {self.table} WHERE id = $1::bigint",
                user_id,
            )
        except STORAGE_FAILURES as e:
            logger.error(f"Error querying user {user_id} before delete: {e}")
            raise StorageError("Internal server error") from e

        if not row:
            return False

        try:
            status = await self.db.execute(
                f"DELETE FROM {self.table} WHERE id = $1::bigint",
                user_id,
            )
        except STORAGE_FAILURES as e:
            logger.error(f"Error deleting user {user_id}: {e}")
            raise StorageError("Error deleting user") from e

        # row removed by someone else between the check and the delete
        if affected_rows(status) == 0:
            return False

        logger.debug(f"Deleted user id={user_id}")
        return True
