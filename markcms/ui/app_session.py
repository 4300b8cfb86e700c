"""
Per-browser application state.

An AppSession bundles the session gate, navigation store, notifications,
editor tab state and sidebar expansion for one session cookie. The
registry keeps them for the life of the process, keyed by token.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, timedelta

from markcms.models.screens import AppShell, AuthScreen
from markcms.models.user import UserPublic
from markcms.repos.base import Gateways
from markcms.services.session_broker import SessionBroker
from markcms.ui.context import ScreenContext
from markcms.ui.markdown_editor import MarkdownEditor
from markcms.ui.navigation import NavigationStore
from markcms.ui.notifications import Notifier
from markcms.ui.router import ScreenBuilder, render_view
from markcms.ui.screens import Dashboard, PageEditor, ProjectManager, Sidebar, placeholder
from markcms.ui.session import SessionGate, TokenSessionSource

logger = logging.getLogger(__name__)


class AppSession:
    def __init__(self, token: str, gateways: Gateways, broker: SessionBroker):
        self.token = token
        self.source = TokenSessionSource(token, gateways.users, broker)
        self.gate = SessionGate(self.source)
        self.navigation = NavigationStore()
        self.notifier = Notifier()
        self.editor = MarkdownEditor()
        self.last_seen = datetime.now(UTC)
        self._gateways = gateways
        self.context: ScreenContext | None = None
        self.sidebar: Sidebar | None = None

    async def start(self) -> None:
        await self.gate.start()
        if self.gate.user is not None:
            self.context = ScreenContext(
                user_id=self.gate.user.id,
                gateways=self._gateways,
                navigation=self.navigation,
                notifier=self.notifier,
            )
            self.sidebar = Sidebar(self.context)

    def stop(self) -> None:
        self.gate.stop()

    @property
    def is_open(self) -> bool:
        return self.gate.is_authenticated and self.context is not None

    # Screen factories. Each screen is built fresh per render: no cached records.

    def dashboard(self) -> Dashboard:
        return Dashboard(self.context)

    def project_manager(self) -> ProjectManager:
        return ProjectManager(self.context)

    def page_editor(self) -> PageEditor:
        return PageEditor(self.context, self.editor)

    def screens(self) -> dict[str, ScreenBuilder]:
        async def dashboard(state):
            return await self.dashboard().render()

        async def projects(state):
            return await self.project_manager().render()

        async def editor(state):
            return await self.page_editor().render(state.selected_project_id, state.selected_page_id)

        async def static(state):
            return placeholder(state.current_view)

        return {
            "dashboard": dashboard,
            "projects": projects,
            "editor": editor,
            "templates": static,
            "analytics": static,
            "settings": static,
        }

    async def render_shell(self) -> AppShell:
        """Gate, then route the current view. The sidebar reflects state after the screen ran."""
        if not self.is_open:
            return AppShell(authenticated=False, screen=AuthScreen())

        builder = render_view(self.navigation.state, self.screens())
        screen = await builder(self.navigation.state)
        state = self.navigation.state
        sidebar = await self.sidebar.render(state)
        return AppShell(
            authenticated=True,
            user=UserPublic.from_user(self.gate.user),
            navigation=state,
            screen=screen,
            sidebar=sidebar,
            notifications=self.notifier.drain(),
        )


class AppSessionRegistry:
    """Live AppSessions by session token."""

    def __init__(self, gateways: Gateways, broker: SessionBroker):
        self._gateways = gateways
        self._broker = broker
        self._sessions: dict[str, AppSession] = {}
        # token -> first-use start in flight; concurrent requests share it
        self._starting: dict[str, asyncio.Task[AppSession]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, token: str) -> AppSession | None:
        return self._sessions.get(token)

    async def open(self, token: str) -> AppSession:
        """
        Return the AppSession for a token, starting it on first use.

        A token past its expiry is reported to the gate as TOKEN_EXPIRED.
        Sessions whose gate is closed are not kept.
        """
        session = self._sessions.get(token)
        if session is None:
            task = self._starting.get(token)
            if task is None:
                task = asyncio.create_task(self._start(token))
                self._starting[token] = task
                task.add_done_callback(lambda done: self._forget_start(token, done))
            session = await asyncio.shield(task)
            if not session.is_open:
                return session

        expires_at = session.source.expires_at
        if expires_at is not None and expires_at <= datetime.now(UTC):
            self._broker.expire(token)

        if not session.gate.is_authenticated:
            self.close(token)
        session.last_seen = datetime.now(UTC)
        return session

    async def _start(self, token: str) -> AppSession:
        session = AppSession(token, self._gateways, self._broker)
        await session.start()
        if session.is_open:
            self._sessions[token] = session
        else:
            session.stop()
        return session

    def _forget_start(self, token: str, task: asyncio.Task) -> None:
        if self._starting.get(token) is task:
            del self._starting[token]

    def close(self, token: str) -> None:
        session = self._sessions.pop(token, None)
        if session is not None:
            session.stop()

    def cleanup_idle(self, max_idle_minutes: int = 60) -> int:
        """
        Drop sessions not seen for a while. Navigation state for them is lost.

        Returns:
            Number of sessions closed
        """
        cutoff = datetime.now(UTC) - timedelta(minutes=max_idle_minutes)
        idle = [token for token, s in self._sessions.items() if s.last_seen < cutoff]
        for token in idle:
            self.close(token)
        if idle:
            logger.info("closed %d idle app sessions", len(idle))
        return len(idle)
