"""Repository for analytics events (read-only from the dashboard)."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from markcms.db import user_conn
from markcms.models.analytics import AnalyticsEvent


def _row_to_event(row: asyncpg.Record) -> AnalyticsEvent:
    return AnalyticsEvent(
        id=row["id"],
        project_id=row["project_id"],
        page_id=row["page_id"],
        event_type=row["event_type"],
        event_data=row["event_data"],
        timestamp=row["timestamp"],
        user_agent=row["user_agent"],
        ip_address=row["ip_address"],
    )


class AnalyticsRepo:
    async def list_for_user(self, user_id: UUID) -> list[AnalyticsEvent]:
        """
        List every analytics event visible to the user.

        RLS limits rows to events on projects the user owns.
        """
        async with user_conn(user_id) as conn:
            rows = await conn.fetch("SELECT * FROM analytics ORDER BY timestamp DESC")
            return [_row_to_event(row) for row in rows]
