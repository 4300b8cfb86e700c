"""Tests for per-session app state and the app-session registry."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from markcms.auth import create_jwt
from markcms.errors import BackendError
from markcms.services.session_broker import SessionBroker
from markcms.ui.app_session import AppSession, AppSessionRegistry

pytestmark = pytest.mark.asyncio(loop_scope="session")


@pytest.fixture
def broker():
    return SessionBroker()


class UnavailableUsers:
    async def get(self, user_id):
        raise BackendError("connection refused")


class SlowUsers:
    """Yields to the event loop before answering, like a real database round trip."""

    def __init__(self, users):
        self._users = users
        self.calls = 0

    async def get(self, user_id):
        self.calls += 1
        await asyncio.sleep(0.01)
        return await self._users.get(user_id)


@pytest.fixture
def registry(gateways, broker):
    return AppSessionRegistry(gateways, broker)


class TestRegistry:
    async def test_open_valid_token(self, registry, session_token, test_user):
        session = await registry.open(session_token)

        assert session.is_open
        assert session.gate.user == test_user
        assert len(registry) == 1
        assert await registry.open(session_token) is session

    async def test_invalid_token_not_kept(self, registry):
        session = await registry.open("garbage")
        assert not session.is_open
        assert len(registry) == 0

    async def test_unknown_user_not_kept(self, registry):
        session = await registry.open(create_jwt(uuid4()))
        assert not session.is_open
        assert len(registry) == 0

    async def test_sign_out_closes_live_session(self, registry, broker, session_token):
        session = await registry.open(session_token)

        broker.sign_out(session_token)

        assert not session.is_open
        reopened = await registry.open(session_token)
        assert not reopened.is_open
        assert len(registry) == 0

    async def test_expired_token_closes_session(self, registry, session_token):
        session = await registry.open(session_token)
        session.source.expires_at = datetime.now(UTC) - timedelta(seconds=1)

        result = await registry.open(session_token)

        assert result is session
        assert not session.is_open
        assert registry.get(session_token) is None

    async def test_cleanup_idle(self, registry, session_token, test_user):
        stale = await registry.open(session_token)
        fresh = await registry.open(create_jwt(test_user.id, expires_in=timedelta(hours=2)))
        stale.last_seen = datetime.now(UTC) - timedelta(hours=3)

        assert registry.cleanup_idle(max_idle_minutes=60) == 1

        assert len(registry) == 1
        assert registry.get(session_token) is None
        assert fresh.is_open


    async def test_failed_start_leaves_no_listener(self, gateways, broker, session_token):
        registry = AppSessionRegistry(replace(gateways, users=UnavailableUsers()), broker)

        for _ in range(3):
            with pytest.raises(BackendError):
                await registry.open(session_token)

        assert broker._listeners.get(session_token, []) == []
        assert len(registry) == 0

    async def test_concurrent_first_use_shares_one_session(self, gateways, broker, session_token):
        users = SlowUsers(gateways.users)
        registry = AppSessionRegistry(replace(gateways, users=users), broker)

        a, b = await asyncio.gather(registry.open(session_token), registry.open(session_token))

        assert a is b
        assert a.is_open
        assert users.calls == 1
        assert len(registry) == 1
        assert len(broker._listeners[session_token]) == 1

        a.navigation.navigate_to_view("settings")
        c = await registry.open(session_token)
        assert c.navigation.state.current_view == "settings"


class TestRenderShell:
    async def test_closed_session_gets_auth_screen(self, gateways, broker):
        session = AppSession("garbage", gateways, broker)
        await session.start()

        shell = await session.render_shell()

        assert shell.authenticated is False
        assert shell.screen.screen == "auth"
        assert shell.sidebar is None

    async def test_dashboard_by_default(self, registry, session_token, test_user):
        session = await registry.open(session_token)

        shell = await session.render_shell()

        assert shell.authenticated is True
        assert shell.user.email == test_user.email
        assert shell.navigation.current_view == "dashboard"
        assert shell.screen.screen == "dashboard"
        assert len(shell.sidebar.items) == 5

    @pytest.mark.parametrize("view", ["templates", "analytics", "settings"])
    async def test_placeholder_views(self, registry, session_token, view):
        session = await registry.open(session_token)
        session.navigation.navigate_to_view(view)

        shell = await session.render_shell()

        assert shell.screen.screen == view

    async def test_sidebar_reflects_selection_made_by_screen(self, registry, session_token, seed_project):
        project, pages = await seed_project()
        session = await registry.open(session_token)
        session.navigation.navigate_to_view("editor", project.id)

        shell = await session.render_shell()

        assert shell.screen.current_page.id == pages[0].id
        assert shell.navigation.selected_page_id == pages[0].id
        assert shell.sidebar.projects[0].expanded is True

    async def test_notifications_drained_once(self, registry, session_token):
        session = await registry.open(session_token)
        session.notifier.success("hello")

        first = await session.render_shell()
        second = await session.render_shell()

        assert [n.message for n in first.notifications] == ["hello"]
        assert second.notifications == []
