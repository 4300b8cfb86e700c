"""Session models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from markcms.models.user import User


class AuthEvent(BaseModel):
    """A session-change notification emitted by the session broker."""

    event: Literal["INITIAL_SESSION", "SIGNED_IN", "SIGNED_OUT", "TOKEN_EXPIRED"]
    user: User | None = None


class LogoutResponse(BaseModel):
    """Response after logout."""

    message: str = "Logged out successfully"
