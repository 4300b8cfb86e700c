"""Repository for page operations."""

from __future__ import annotations

from uuid import UUID, uuid4

import asyncpg

from markcms.db import user_conn
from markcms.models.page import Page, PageDraft, SavePageRequest

_INSERT_PAGE = """
    INSERT INTO pages
        (id, project_id, title, slug, content, meta_description, meta_keywords,
         is_published, order_index, parent_id)
    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
    RETURNING *
"""


def _row_to_page(row: asyncpg.Record) -> Page:
    """Convert a database row to a Page model."""
    return Page(
        id=row["id"],
        project_id=row["project_id"],
        title=row["title"],
        slug=row["slug"],
        content=row["content"] or "",
        meta_description=row["meta_description"],
        meta_keywords=row["meta_keywords"],
        is_published=row["is_published"],
        order_index=row["order_index"],
        parent_id=row["parent_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _draft_args(draft: PageDraft) -> tuple:
    return (
        uuid4(),
        draft.project_id,
        draft.title,
        draft.slug,
        draft.content,
        draft.meta_description,
        draft.meta_keywords,
        draft.is_published,
        draft.order_index,
        draft.parent_id,
    )


class PageRepo:
    """All page-related database operations. RLS limits pages to the owner's projects."""

    async def list_for_project(self, user_id: UUID, project_id: UUID) -> list[Page]:
        """
        List a project's pages in display order.

        Returns:
            List of Page objects ordered by order_index ASC
        """
        async with user_conn(user_id) as conn:
            rows = await conn.fetch(
                "SELECT * FROM pages WHERE project_id = $1 ORDER BY order_index ASC, created_at ASC",
                project_id,
            )
            return [_row_to_page(row) for row in rows]

    async def get(self, user_id: UUID, page_id: UUID) -> Page | None:
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow("SELECT * FROM pages WHERE id = $1", page_id)
            return _row_to_page(row) if row else None

    async def create(self, user_id: UUID, draft: PageDraft) -> Page:
        """
        Insert one page.

        Returns:
            Newly created Page
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(_INSERT_PAGE, *_draft_args(draft))
            return _row_to_page(row)

    async def create_many(self, user_id: UUID, drafts: list[PageDraft]) -> list[Page]:
        """
        Insert several pages in a single transaction.

        Returns:
            Newly created pages, in the order given
        """
        if not drafts:
            return []
        async with user_conn(user_id) as conn:
            pages = []
            for draft in drafts:
                row = await conn.fetchrow(_INSERT_PAGE, *_draft_args(draft))
                pages.append(_row_to_page(row))
            return pages

    async def save(self, user_id: UUID, page_id: UUID, req: SavePageRequest) -> Page | None:
        """
        Write every editable field and stamp updated_at.

        Returns:
            Updated Page if found and owned by user, None otherwise
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                UPDATE pages
                SET title = $2, slug = $3, content = $4, meta_description = $5,
                    meta_keywords = $6, is_published = $7, updated_at = now()
                WHERE id = $1
                RETURNING *
                """,
                page_id,
                req.title,
                req.slug,
                req.content,
                req.meta_description,
                req.meta_keywords,
                req.is_published,
            )
            return _row_to_page(row) if row else None

    async def delete(self, user_id: UUID, page_id: UUID) -> bool:
        async with user_conn(user_id) as conn:
            result = await conn.execute("DELETE FROM pages WHERE id = $1", page_id)
            return result == "DELETE 1"
