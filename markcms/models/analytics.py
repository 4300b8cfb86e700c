"""Analytics event models (read-only)."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class AnalyticsEvent(BaseModel):
    """Represents a row in the analytics table."""

    id: UUID
    project_id: UUID
    page_id: UUID | None = None
    event_type: str
    event_data: dict[str, Any] | None = None
    timestamp: datetime
    user_agent: str | None = None
    ip_address: str | None = None
