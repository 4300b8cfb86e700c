"""Route dependencies and the shared action wrapper."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Annotated, TypeVar

from fastapi import Cookie, Depends, HTTPException, Request, Response, status

from markcms.errors import NotFound, ValidationFailed
from markcms.ui.app_session import AppSession

T = TypeVar("T")


async def get_app_session(
    request: Request,
    session: Annotated[str | None, Cookie()] = None,
) -> AppSession | None:
    """The AppSession for the session cookie, or None when there is no cookie."""
    if not session:
        return None
    return await request.app.state.app_sessions.open(session)


async def require_app_session(
    app_session: AppSession | None = Depends(get_app_session),
) -> AppSession:
    """Like get_app_session, but the gate must be open."""
    if app_session is None or not app_session.is_open:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. Please sign in.",
        )
    return app_session


async def run_action(response: Response, action: Awaitable[T]) -> T | None:
    """
    Await a screen action and translate its outcome into a status code.

    The screen has already queued the user-facing notification; the route
    still answers with the re-rendered shell so the client stays in sync.
    """
    try:
        result = await action
    except ValidationFailed:
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        return None
    except NotFound:
        response.status_code = status.HTTP_404_NOT_FOUND
        return None
    if result is None or result is False:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return result
