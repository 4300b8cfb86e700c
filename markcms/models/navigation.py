"""Navigation models: which screen is shown and what is selected."""

from __future__ import annotations

from typing import Literal, get_args
from uuid import UUID

from pydantic import BaseModel, ConfigDict

View = Literal["dashboard", "editor", "projects", "templates", "analytics", "settings"]

VIEWS: tuple[str, ...] = get_args(View)


class NavigationState(BaseModel):
    """Current view plus the project/page selection carried between screens."""

    model_config = ConfigDict(frozen=True)

    current_view: View = "dashboard"
    selected_project_id: UUID | None = None
    selected_page_id: UUID | None = None


class NavigateRequest(BaseModel):
    """What the client sends to POST /api/app/navigate."""

    model_config = {"extra": "forbid"}

    view: View
    project_id: UUID | None = None
    page_id: UUID | None = None
