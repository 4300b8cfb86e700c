"""
Pytest configuration and fixtures for markcms tests.

Tests run against the in-memory gateways; no database is needed.
"""

from __future__ import annotations

import os

# Set test environment variables before importing config
os.environ.setdefault("MARKCMS_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only")
os.environ.setdefault("ENVIRONMENT", "development")

from dataclasses import replace  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from markcms.auth import create_jwt  # noqa: E402
from markcms.errors import BackendError  # noqa: E402
from markcms.main import app, configure_state  # noqa: E402
from markcms.models.page import PageDraft  # noqa: E402
from markcms.models.project import ProjectDraft  # noqa: E402
from markcms.repos.memory import MemoryStore, memory_gateways  # noqa: E402
from markcms.ui.context import ScreenContext  # noqa: E402
from markcms.ui.navigation import NavigationStore  # noqa: E402
from markcms.ui.notifications import Notifier  # noqa: E402
from markcms.ui.screens.page_editor import slugify  # noqa: E402


class FailingGateway:
    """Every call fails the way a dropped database connection does."""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise BackendError("connection refused")

        return fail


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def gateways(store):
    return memory_gateways(store)


@pytest.fixture
def broken_gateways(gateways):
    """Users still resolve; every content gateway fails."""
    return replace(
        gateways,
        projects=FailingGateway(),
        pages=FailingGateway(),
        templates=FailingGateway(),
        analytics=FailingGateway(),
    )


@pytest.fixture(autouse=True)
def app_state(gateways):
    """Fresh gateways, broker and app-session registry on the ASGI app for every test."""
    configure_state(app, gateways)
    return app.state


@pytest.fixture
def test_user(store):
    return store.add_user("test-user@example.com", "Test User")


@pytest.fixture
def second_user(store):
    """A second user for cross-user isolation tests."""
    return store.add_user("second-user@example.com", "Second Test User")


@pytest.fixture
def session_token(test_user):
    return create_jwt(test_user.id)


@pytest.fixture
def ctx(test_user, gateways):
    """Screen context for the test user with a fresh navigation store."""
    return ScreenContext(
        user_id=test_user.id,
        gateways=gateways,
        navigation=NavigationStore(),
        notifier=Notifier(),
    )


@pytest.fixture
def broken_ctx(test_user, broken_gateways):
    return ScreenContext(
        user_id=test_user.id,
        gateways=broken_gateways,
        navigation=NavigationStore(),
        notifier=Notifier(),
    )


@pytest.fixture
def seed_project(gateways, test_user):
    """
    Factory that stores a project with the given pages straight through the gateways.

    Returns (project, pages) with pages in order_index order.
    """

    async def _seed(name="Test Site", page_titles=("Home",), published=False, owner=None):
        user_id = (owner or test_user).id
        project = await gateways.projects.create(
            user_id,
            ProjectDraft(name=name, description=f"{name} description", is_published=published),
        )
        pages = await gateways.pages.create_many(
            user_id,
            [
                PageDraft(
                    project_id=project.id,
                    title=title,
                    slug=slugify(title),
                    content=f"# {title}\n\nSome words here.",
                    is_published=published,
                    order_index=i,
                )
                for i, title in enumerate(page_titles)
            ],
        )
        return project, pages

    return _seed


@pytest_asyncio.fixture(loop_scope="session")
async def async_client():
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
