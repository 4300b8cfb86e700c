"""Tests for the session broker, token session source and session gate."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from markcms.auth import create_jwt
from markcms.errors import BackendError
from markcms.models.auth import AuthEvent
from markcms.services.session_broker import SessionBroker
from markcms.ui.session import SessionGate, TokenSessionSource

pytestmark = pytest.mark.asyncio(loop_scope="session")


class FakeSource:
    """SessionSource whose fetch result is fixed; `during_fetch` runs while the fetch is in flight."""

    def __init__(self, broker, user, token="token", during_fetch=None):
        self.broker = broker
        self.user = user
        self.token = token
        self.during_fetch = during_fetch

    async def get_session(self):
        if self.during_fetch:
            self.during_fetch()
        return self.user

    def on_auth_state_change(self, listener):
        return self.broker.subscribe(self.token, listener)

    async def sign_out(self):
        self.broker.sign_out(self.token)


class TestSessionGate:
    async def test_open_with_session(self, test_user):
        gate = SessionGate(FakeSource(SessionBroker(), test_user))
        await gate.start()
        assert gate.is_authenticated
        assert gate.user == test_user

    async def test_closed_without_session(self):
        gate = SessionGate(FakeSource(SessionBroker(), None))
        await gate.start()
        assert not gate.is_authenticated
        assert gate.user is None

    async def test_sign_out_closes_gate(self, test_user):
        broker = SessionBroker()
        source = FakeSource(broker, test_user)
        gate = SessionGate(source)
        await gate.start()

        await source.sign_out()

        assert not gate.is_authenticated

    async def test_event_during_fetch_wins(self, test_user):
        """SIGNED_OUT published while the initial fetch is pending beats the stale fetch result."""
        broker = SessionBroker()
        source = FakeSource(
            broker,
            test_user,
            during_fetch=lambda: broker.publish("token", AuthEvent(event="SIGNED_OUT")),
        )
        gate = SessionGate(source)

        await gate.start()

        assert not gate.is_authenticated

    async def test_sign_in_event_opens_gate(self, test_user):
        broker = SessionBroker()
        gate = SessionGate(FakeSource(broker, None))
        await gate.start()

        broker.publish("token", AuthEvent(event="SIGNED_IN", user=test_user))

        assert gate.user == test_user

    async def test_stop_unsubscribes(self, test_user):
        broker = SessionBroker()
        gate = SessionGate(FakeSource(broker, test_user))
        await gate.start()

        gate.stop()
        gate.stop()
        broker.sign_out("token")

        assert gate.user == test_user


    async def test_failed_fetch_unsubscribes(self, test_user):
        broker = SessionBroker()

        def fail():
            raise BackendError("connection refused")

        gate = SessionGate(FakeSource(broker, test_user, during_fetch=fail))

        with pytest.raises(BackendError):
            await gate.start()

        assert broker._listeners.get("token", []) == []
        assert not gate.is_authenticated


class TestTokenSessionSource:
    async def test_resolves_user(self, gateways, test_user):
        token = create_jwt(test_user.id)
        source = TokenSessionSource(token, gateways.users, SessionBroker())
        assert source.user_id == test_user.id
        assert source.expires_at > datetime.now(UTC)
        assert await source.get_session() == test_user

    async def test_revoked_token(self, gateways, test_user):
        broker = SessionBroker()
        token = create_jwt(test_user.id)
        source = TokenSessionSource(token, gateways.users, broker)

        await source.sign_out()

        assert broker.is_revoked(token)
        assert await source.get_session() is None

    async def test_garbage_token(self, gateways):
        source = TokenSessionSource("not-a-jwt", gateways.users, SessionBroker())
        assert source.user_id is None
        assert await source.get_session() is None

    async def test_unknown_user(self, gateways):
        source = TokenSessionSource(create_jwt(uuid4()), gateways.users, SessionBroker())
        assert await source.get_session() is None


class TestSessionBroker:
    async def test_events_delivered_in_subscription_order(self):
        broker = SessionBroker()
        calls = []
        broker.subscribe("t", lambda e: calls.append(("a", e.event)))
        broker.subscribe("t", lambda e: calls.append(("b", e.event)))
        broker.subscribe("other", lambda e: calls.append(("c", e.event)))

        broker.expire("t")

        assert calls == [("a", "TOKEN_EXPIRED"), ("b", "TOKEN_EXPIRED")]

    async def test_unsubscribe(self):
        broker = SessionBroker()
        calls = []
        sub = broker.subscribe("t", calls.append)
        sub.unsubscribe()
        sub.unsubscribe()

        broker.sign_out("t")

        assert calls == []
        assert not sub.active

    async def test_cleanup_revoked(self):
        broker = SessionBroker()
        broker.sign_out("old", expires_at=datetime.now(UTC) - timedelta(minutes=1))
        broker.sign_out("live", expires_at=datetime.now(UTC) + timedelta(hours=1))

        assert broker.cleanup_revoked() == 1
        assert not broker.is_revoked("old")
        assert broker.is_revoked("live")
