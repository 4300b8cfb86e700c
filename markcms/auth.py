"""
Authentication for markcms.

JWT issuance and verification, and the FastAPI dependency that resolves
the session cookie to a User. Sign-in flows live in the external identity
provider; this module only trusts tokens it signed.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Cookie, HTTPException, Request, status

from markcms import config
from markcms.models.user import User


def create_jwt(user_id: UUID, expires_in: timedelta | None = None) -> str:
    """
    Create a JWT for a user session.

    Args:
        user_id: User UUID to encode in the token
        expires_in: Lifetime override, defaults to JWT_EXPIRY_HOURS

    Returns:
        Signed JWT string
    """
    now = datetime.now(UTC)
    expires_at = now + (expires_in or timedelta(hours=config.settings.JWT_EXPIRY_HOURS))
    payload = {
        "sub": str(user_id),
        "exp": expires_at,
        "iat": now,
    }
    return jwt.encode(payload, config.settings.JWT_SECRET, algorithm=config.settings.JWT_ALGORITHM)


def decode_jwt(token: str) -> dict:
    """
    Decode and verify a JWT.

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        return jwt.decode(token, config.settings.JWT_SECRET, algorithms=[config.settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired. Please sign in again.",
        ) from e
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session token. Please sign in again.",
        ) from e


def read_session_token(token: str) -> tuple[UUID, datetime] | None:
    """
    Non-raising variant of decode_jwt for the session gate.

    Returns:
        (user_id, expires_at) for a valid token, None otherwise
    """
    try:
        payload = jwt.decode(token, config.settings.JWT_SECRET, algorithms=[config.settings.JWT_ALGORITHM])
        return UUID(payload["sub"]), datetime.fromtimestamp(payload["exp"], UTC)
    except (jwt.InvalidTokenError, KeyError, ValueError):
        return None


async def get_current_user(
    request: Request,
    session: Annotated[str | None, Cookie()] = None,
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Rejects missing, invalid, expired and signed-out tokens.

    Raises:
        HTTPException: If authentication fails
    """
    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. Please sign in.",
        )

    payload = decode_jwt(session)
    if request.app.state.session_broker.is_revoked(session):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session ended. Please sign in again.",
        )

    try:
        user_id = UUID(payload.get("sub", ""))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session token. Please sign in again.",
        ) from e

    user = await request.app.state.gateways.users.get(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found. Please sign in again.",
        )

    return user
