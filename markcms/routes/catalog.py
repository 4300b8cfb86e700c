"""Read-only routes for templates and analytics events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from markcms.auth import get_current_user
from markcms.models.analytics import AnalyticsEvent
from markcms.models.template import Template
from markcms.models.user import User

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/templates", status_code=200)
async def list_templates(request: Request, user: User = Depends(get_current_user)) -> list[Template]:
    """List the shared template catalogue."""
    return await request.app.state.gateways.templates.list_all()


@router.get("/analytics", status_code=200)
async def list_analytics(request: Request, user: User = Depends(get_current_user)) -> list[AnalyticsEvent]:
    """List analytics events for the current user's projects."""
    return await request.app.state.gateways.analytics.list_for_user(user.id)
