"""Session routes. Signing in happens at the identity provider."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Request, Response

from markcms import config
from markcms.auth import get_current_user, read_session_token
from markcms.models.auth import LogoutResponse
from markcms.models.user import User, UserPublic

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", status_code=200)
async def get_current_user_endpoint(
    user: User = Depends(get_current_user),
) -> UserPublic:
    """
    Get the current authenticated user.

    Requires valid session cookie.
    """
    return UserPublic.from_user(user)


@router.post("/logout", status_code=200)
async def logout_endpoint(
    request: Request,
    response: Response,
    session: Annotated[str | None, Cookie()] = None,
) -> LogoutResponse:
    """
    Logout the current user.

    Ends the session server-side (gate listeners hear SIGNED_OUT) and
    clears the session cookie.
    """
    if session:
        decoded = read_session_token(session)
        request.app.state.session_broker.sign_out(session, decoded[1] if decoded else None)
        request.app.state.app_sessions.close(session)

    # Clear cookie by setting it to expired
    response.set_cookie(
        key=config.settings.SESSION_COOKIE,
        value="",
        httponly=True,
        secure=config.settings.COOKIE_SECURE,
        samesite="lax",
        max_age=0,  # Expire immediately
        path="/",
    )

    return LogoutResponse()
