"""
Session gate.

Holds the signed-in user for one browser session. Nothing but the auth
screen is rendered while the gate is closed.
"""

from __future__ import annotations

import logging
from typing import Protocol
from uuid import UUID

from markcms.auth import read_session_token
from markcms.models.auth import AuthEvent
from markcms.models.user import User
from markcms.repos.base import UserGateway
from markcms.services.session_broker import AuthListener, SessionBroker, Subscription

logger = logging.getLogger(__name__)


class SessionSource(Protocol):
    """The identity provider's session primitives."""

    async def get_session(self) -> User | None: ...

    def on_auth_state_change(self, listener: AuthListener) -> Subscription: ...

    async def sign_out(self) -> None: ...


class TokenSessionSource:
    """SessionSource for one JWT session cookie."""

    def __init__(self, token: str, users: UserGateway, broker: SessionBroker):
        self._token = token
        self._users = users
        self._broker = broker
        decoded = read_session_token(token)
        self.user_id: UUID | None = decoded[0] if decoded else None
        self.expires_at = decoded[1] if decoded else None

    async def get_session(self) -> User | None:
        if self.user_id is None or self._broker.is_revoked(self._token):
            return None
        return await self._users.get(self.user_id)

    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        return self._broker.subscribe(self._token, listener)

    async def sign_out(self) -> None:
        self._broker.sign_out(self._token, self.expires_at)


class SessionGate:
    """Tracks the current user from an initial fetch plus change notifications."""

    def __init__(self, source: SessionSource):
        self._source = source
        self._user: User | None = None
        self._subscription: Subscription | None = None
        self._event_seen = False

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    async def start(self) -> None:
        """
        Subscribe, then fetch the current session.

        A notification that arrives while the fetch is in flight is newer
        than the fetch result and wins. If the fetch fails the subscription
        is dropped before the error propagates.
        """
        self._subscription = self._source.on_auth_state_change(self._on_auth_event)
        try:
            user = await self._source.get_session()
        except BaseException:
            self.stop()
            raise
        if not self._event_seen:
            self._user = user

    def _on_auth_event(self, event: AuthEvent) -> None:
        self._event_seen = True
        self._user = event.user
        logger.info("auth state changed: %s", event.event)

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
