"""Repository for the read-only template catalogue."""

from __future__ import annotations

import asyncpg

from markcms.db import system_conn
from markcms.models.template import Template


def _row_to_template(row: asyncpg.Record) -> Template:
    return Template(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        content=row["content"],
        preview_image=row["preview_image"],
        category=row["category"],
        created_at=row["created_at"],
    )


class TemplateRepo:
    """Templates are shared by all users, so reads use a system connection."""

    async def list_all(self) -> list[Template]:
        async with system_conn() as conn:
            rows = await conn.fetch("SELECT * FROM templates ORDER BY category, name")
            return [_row_to_template(row) for row in rows]
