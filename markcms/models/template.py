"""Template models (read-only catalogue)."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class Template(BaseModel):
    """Represents a row in the templates table."""

    id: UUID
    name: str
    description: str | None = None
    content: str
    preview_image: str | None = None
    category: str
    created_at: datetime
