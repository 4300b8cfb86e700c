"""Page routes: save, publish toggle, delete."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response

from markcms.models.page import SavePageRequest
from markcms.models.screens import AppShell
from markcms.routes.deps import require_app_session, run_action
from markcms.ui.app_session import AppSession

router = APIRouter(prefix="/api/pages", tags=["pages"])


@router.put("/{page_id}", status_code=200)
async def save_page(
    page_id: UUID,
    req: SavePageRequest,
    response: Response,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Persist every editable field of a page."""
    await run_action(response, app_session.page_editor().save(page_id, req))
    return await app_session.render_shell()


@router.post("/{page_id}/publish", status_code=200)
async def toggle_publish(
    page_id: UUID,
    response: Response,
    pending: SavePageRequest | None = Body(default=None),
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """
    Flip the page's published flag and save.

    The body, if given, is the editor's unsaved buffer and is saved along
    with the new flag.
    """
    await run_action(response, app_session.page_editor().toggle_publish(page_id, pending))
    return await app_session.render_shell()


@router.delete("/{page_id}", status_code=200)
async def delete_page(
    page_id: UUID,
    response: Response,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Delete a page. The last page of a project cannot be deleted."""
    await run_action(response, app_session.page_editor().delete_page(page_id))
    return await app_session.render_shell()
