"""Tests for the sidebar tree."""

from __future__ import annotations

import pytest

from markcms.models.navigation import NavigationState
from markcms.ui.screens.sidebar import Sidebar

pytestmark = pytest.mark.asyncio(loop_scope="session")


class TestSidebar:
    async def test_nav_items(self, ctx):
        model = await Sidebar(ctx).render(NavigationState(current_view="templates"))

        assert [i.label for i in model.items] == ["Dashboard", "Projects", "Templates", "Analytics", "Settings"]
        assert [i.view for i in model.items if i.active] == ["templates"]

    async def test_projects_with_pages(self, ctx, seed_project):
        first, first_pages = await seed_project("First", page_titles=("Home", "About"))
        second, second_pages = await seed_project("Second", page_titles=("Home",))

        model = await Sidebar(ctx).render(NavigationState())

        assert [p.project.name for p in model.projects] == ["Second", "First"]
        assert model.projects[0].pages == second_pages
        assert model.projects[1].pages == first_pages
        assert not any(p.expanded for p in model.projects)

    async def test_selected_project_is_expanded(self, ctx, seed_project):
        project, _ = await seed_project()
        sidebar = Sidebar(ctx)

        model = await sidebar.render(NavigationState(current_view="editor", selected_project_id=project.id))

        assert model.projects[0].expanded is True
        assert project.id in sidebar.expanded

    async def test_toggle(self, ctx, seed_project):
        project, _ = await seed_project()
        sidebar = Sidebar(ctx)

        assert sidebar.toggle(project.id) is True
        assert (await sidebar.render(NavigationState())).projects[0].expanded is True

        assert sidebar.toggle(project.id) is False
        assert (await sidebar.render(NavigationState())).projects[0].expanded is False

    async def test_backend_failure(self, broken_ctx):
        model = await Sidebar(broken_ctx).render(NavigationState())

        assert len(model.items) == 5
        assert model.projects == []
        assert broken_ctx.notifier.drain()[0].message == "Failed to load projects"
