"""
Tests for the in-memory gateways.

Ownership mirrors the RLS policies: users only see their own projects and
the pages and analytics under them.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from markcms.errors import BackendError
from markcms.models.page import PageDraft, SavePageRequest
from markcms.models.project import ProjectDraft

pytestmark = pytest.mark.asyncio(loop_scope="session")


class TestProjectGateway:
    async def test_create_and_get(self, gateways, test_user):
        project = await gateways.projects.create(test_user.id, ProjectDraft(name="Site", theme_settings={"color": "blue"}))

        fetched = await gateways.projects.get(test_user.id, project.id)

        assert fetched == project
        assert fetched.user_id == test_user.id
        assert fetched.theme_settings == {"color": "blue"}
        assert fetched.created_at == fetched.updated_at

    async def test_list_recent_orders_by_update(self, gateways, test_user, seed_project):
        a, _ = await seed_project("A")
        b, _ = await seed_project("B")
        await gateways.projects.update(test_user.id, a.id, name="A2", description=None, subdomain=None)

        recent = await gateways.projects.list_recent(test_user.id)
        assert [p.name for p in recent] == ["A2", "B"]
        assert [p.id for p in await gateways.projects.list_recent(test_user.id, limit=1)] == [a.id]
        # list_for_user is by creation
        assert [p.id for p in await gateways.projects.list_for_user(test_user.id)] == [b.id, a.id]

    async def test_isolation(self, gateways, test_user, second_user, seed_project):
        theirs, _ = await seed_project("Theirs", owner=second_user)

        assert await gateways.projects.get(test_user.id, theirs.id) is None
        assert await gateways.projects.list_for_user(test_user.id) == []
        assert await gateways.projects.update(test_user.id, theirs.id, "x", None, None) is None
        assert await gateways.projects.delete(test_user.id, theirs.id) is False
        assert await gateways.projects.get(second_user.id, theirs.id) is not None


class TestPageGateway:
    async def test_list_ordered_by_index(self, gateways, test_user, seed_project):
        project, _ = await seed_project(page_titles=())
        for title, index in (("C", 2), ("A", 0), ("B", 1)):
            await gateways.pages.create(
                test_user.id, PageDraft(project_id=project.id, title=title, slug=title.lower(), order_index=index)
            )

        pages = await gateways.pages.list_for_project(test_user.id, project.id)

        assert [p.title for p in pages] == ["A", "B", "C"]

    async def test_create_in_foreign_project_rejected(self, gateways, test_user, second_user, seed_project):
        theirs, _ = await seed_project(owner=second_user)

        with pytest.raises(BackendError):
            await gateways.pages.create(test_user.id, PageDraft(project_id=theirs.id, title="x", slug="x"))

    async def test_foreign_pages_invisible(self, gateways, test_user, second_user, seed_project):
        theirs, [page] = await seed_project(owner=second_user)

        assert await gateways.pages.list_for_project(test_user.id, theirs.id) == []
        assert await gateways.pages.get(test_user.id, page.id) is None
        assert await gateways.pages.save(test_user.id, page.id, SavePageRequest(title="x", slug="x")) is None
        assert await gateways.pages.delete(test_user.id, page.id) is False

    async def test_save_bumps_updated_at(self, gateways, test_user, seed_project):
        _, [page] = await seed_project()

        saved = await gateways.pages.save(test_user.id, page.id, SavePageRequest.from_page(page))

        assert saved.created_at == page.created_at
        assert saved.updated_at > page.updated_at

    async def test_delete_missing(self, gateways, test_user):
        assert await gateways.pages.delete(test_user.id, uuid4()) is False


class TestTemplateAndAnalyticsGateways:
    async def test_templates_shared_and_sorted(self, gateways, store, test_user):
        store.add_template("Landing", "# Landing", category="marketing")
        store.add_template("Blog Post", "# Post", category="blog")
        store.add_template("About", "# About", category="blog")

        templates = await gateways.templates.list_all()

        assert [(t.category, t.name) for t in templates] == [
            ("blog", "About"),
            ("blog", "Blog Post"),
            ("marketing", "Landing"),
        ]

    async def test_analytics_scoped_and_newest_first(self, gateways, store, test_user, second_user, seed_project):
        mine, _ = await seed_project("Mine")
        theirs, _ = await seed_project("Theirs", owner=second_user)
        first = store.add_event(mine.id)
        store.add_event(theirs.id)
        last = store.add_event(mine.id, event_type="click")

        events = await gateways.analytics.list_for_user(test_user.id)

        assert [e.id for e in events] == [last.id, first.id]
