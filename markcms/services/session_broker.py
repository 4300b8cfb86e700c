"""
Session-change notifications.

Stands in for the identity provider's auth-state subscription: every
listener registered for a session token hears SIGNED_OUT / TOKEN_EXPIRED
for that token, in the order the events are published.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from datetime import UTC, datetime

from markcms.models.auth import AuthEvent

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent], None]


class Subscription:
    """Handle returned by SessionBroker.subscribe()."""

    def __init__(self, broker: SessionBroker, token: str, listener: AuthListener):
        self._broker = broker
        self._token = token
        self._listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._broker._remove(self._token, self._listener)
            self.active = False


class SessionBroker:
    """In-process pub/sub of auth events, keyed by session token."""

    def __init__(self):
        self._listeners: dict[str, list[AuthListener]] = defaultdict(list)
        # token -> when the token would have expired anyway
        self._revoked: dict[str, datetime] = {}

    def subscribe(self, token: str, listener: AuthListener) -> Subscription:
        self._listeners[token].append(listener)
        return Subscription(self, token, listener)

    def _remove(self, token: str, listener: AuthListener) -> None:
        listeners = self._listeners.get(token)
        if not listeners:
            return
        if listener in listeners:
            listeners.remove(listener)
        if not listeners:
            del self._listeners[token]

    def publish(self, token: str, event: AuthEvent) -> None:
        """Deliver an event to every listener of a token, in subscription order."""
        for listener in list(self._listeners.get(token, [])):
            listener(event)

    def sign_out(self, token: str, expires_at: datetime | None = None) -> None:
        """
        End a session. The token is refused from now on and listeners
        receive SIGNED_OUT with no user.
        """
        self._revoked[token] = expires_at or datetime.now(UTC)
        logger.info("session signed out")
        self.publish(token, AuthEvent(event="SIGNED_OUT", user=None))

    def expire(self, token: str) -> None:
        self.publish(token, AuthEvent(event="TOKEN_EXPIRED", user=None))

    def is_revoked(self, token: str) -> bool:
        return token in self._revoked

    def cleanup_revoked(self) -> int:
        """
        Forget revoked tokens whose JWT has expired on its own.

        Returns:
            Number of entries removed
        """
        now = datetime.now(UTC)
        stale = [token for token, expires_at in self._revoked.items() if expires_at <= now]
        for token in stale:
            del self._revoked[token]
        return len(stale)
