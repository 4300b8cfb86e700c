"""Repository for user operations."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from markcms.db import system_conn
from markcms.models.user import User


def _row_to_user(row: asyncpg.Record) -> User:
    """Convert a database row to a User model."""
    return User(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        created_at=row["created_at"],
    )


class UserRepo:
    """User lookups needed to resolve a session."""

    async def get(self, user_id: UUID) -> User | None:
        """
        Get a user by ID.
        System conn because the session is not established until this succeeds.

        Args:
            user_id: User UUID

        Returns:
            User if found, None otherwise
        """
        async with system_conn() as conn:
            row = await conn.fetchrow("SELECT * FROM users WHERE id = $1", user_id)
            return _row_to_user(row) if row else None
