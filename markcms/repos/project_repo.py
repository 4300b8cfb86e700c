"""Repository for project operations."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

import asyncpg

from markcms.db import user_conn
from markcms.models.project import Project, ProjectDraft


def _row_to_project(row: asyncpg.Record) -> Project:
    """Convert a database row to a Project model."""
    return Project(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        description=row["description"],
        domain=row["domain"],
        subdomain=row["subdomain"],
        is_published=row["is_published"],
        theme_settings=row["theme_settings"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ProjectRepo:
    """All project-related database operations. RLS scopes every query to the owner."""

    async def list_for_user(self, user_id: UUID) -> list[Project]:
        """
        List all projects for a user, newest first.

        Returns:
            List of Project objects ordered by created_at DESC
        """
        async with user_conn(user_id) as conn:
            rows = await conn.fetch("SELECT * FROM projects ORDER BY created_at DESC")
            return [_row_to_project(row) for row in rows]

    async def list_recent(self, user_id: UUID, limit: int | None = None) -> list[Project]:
        """
        List projects by most recent update.

        Args:
            user_id: User UUID
            limit: Maximum rows, or None for all

        Returns:
            List of Project objects ordered by updated_at DESC
        """
        async with user_conn(user_id) as conn:
            rows = await conn.fetch(
                "SELECT * FROM projects ORDER BY updated_at DESC LIMIT $1",
                limit,
            )
            return [_row_to_project(row) for row in rows]

    async def get(self, user_id: UUID, project_id: UUID) -> Project | None:
        """
        Get a project by ID.

        Returns:
            Project if found and owned by user, None otherwise
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow("SELECT * FROM projects WHERE id = $1", project_id)
            return _row_to_project(row) if row else None

    async def create(self, user_id: UUID, draft: ProjectDraft) -> Project:
        """
        Create a new project for a user.

        Args:
            user_id: Owner UUID
            draft: Column values for the new row

        Returns:
            Newly created Project
        """
        now = datetime.now(UTC)

        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO projects
                    (id, user_id, name, description, subdomain, is_published, theme_settings,
                     created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $8)
                RETURNING *
                """,
                uuid4(),
                user_id,
                draft.name,
                draft.description,
                draft.subdomain,
                draft.is_published,
                draft.theme_settings,
                now,
            )
            return _row_to_project(row)

    async def update(
        self,
        user_id: UUID,
        project_id: UUID,
        name: str,
        description: str | None,
        subdomain: str | None,
    ) -> Project | None:
        """
        Update the editable project fields and bump updated_at.

        Returns:
            Updated Project if found and owned by user, None otherwise
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                UPDATE projects
                SET name = $2, description = $3, subdomain = $4, updated_at = now()
                WHERE id = $1
                RETURNING *
                """,
                project_id,
                name,
                description,
                subdomain,
            )
            return _row_to_project(row) if row else None

    async def delete(self, user_id: UUID, project_id: UUID) -> bool:
        """
        Delete a project. Pages go with it (ON DELETE CASCADE).

        Returns:
            True if deleted, False if not found or not owned by user
        """
        async with user_conn(user_id) as conn:
            result = await conn.execute("DELETE FROM projects WHERE id = $1", project_id)
            return result == "DELETE 1"
