"""App shell routes: render the gated, routed screen and navigate between screens."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from markcms.models.navigation import NavigateRequest
from markcms.models.screens import AppShell, AuthScreen
from markcms.routes.deps import get_app_session, require_app_session
from markcms.ui.app_session import AppSession

router = APIRouter(prefix="/api/app", tags=["app"])


@router.get("", status_code=200)
async def get_app_shell(app_session: AppSession | None = Depends(get_app_session)) -> AppShell:
    """
    Render whatever the current view is.

    Without a live session only the auth screen is returned.
    """
    if app_session is None:
        return AppShell(authenticated=False, screen=AuthScreen())
    return await app_session.render_shell()


@router.post("/navigate", status_code=200)
async def navigate(
    req: NavigateRequest,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Switch view. Omitted project_id / page_id keep their previous values."""
    app_session.navigation.navigate_to_view(req.view, req.project_id, req.page_id)
    return await app_session.render_shell()


@router.post("/sidebar/{project_id}/toggle", status_code=200)
async def toggle_sidebar_project(
    project_id: UUID,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Expand or collapse a project in the sidebar tree."""
    app_session.sidebar.toggle(project_id)
    return await app_session.render_shell()
