"""Markdown editor routes: preview, toolbar actions, tab switching."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Body, Depends

from markcms.models.editor import InsertRequest, InsertResponse, PreviewRequest, PreviewResponse
from markcms.models.screens import AppShell
from markcms.routes.deps import require_app_session
from markcms.ui.app_session import AppSession

router = APIRouter(prefix="/api/editor", tags=["editor"])


@router.post("/preview", status_code=200)
async def preview(
    req: PreviewRequest,
    app_session: AppSession = Depends(require_app_session),
) -> PreviewResponse:
    """Render markdown to sanitized HTML, with word and character counts."""
    return app_session.editor.preview(req.content)


@router.post("/insert", status_code=200)
async def insert(
    req: InsertRequest,
    app_session: AppSession = Depends(require_app_session),
) -> InsertResponse:
    """Apply a toolbar action around the current selection."""
    return app_session.editor.apply(req.action, req.content, req.selection_start, req.selection_end)


@router.post("/tab", status_code=200)
async def select_tab(
    tab: Literal["edit", "preview"] = Body(embed=True),
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Switch between the edit and preview tabs."""
    app_session.editor.select_tab(tab)
    return await app_session.render_shell()
