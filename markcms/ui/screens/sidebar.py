"""Sidebar: main navigation plus a tree of projects and their pages."""

from __future__ import annotations

import asyncio
import logging
from uuid import UUID

from markcms.errors import BackendError
from markcms.models.navigation import NavigationState
from markcms.models.project import ProjectResponse
from markcms.models.screens import SidebarItem, SidebarModel, SidebarProject
from markcms.ui.context import ScreenContext

logger = logging.getLogger(__name__)

NAV_ITEMS = [
    ("dashboard", "Dashboard"),
    ("projects", "Projects"),
    ("templates", "Templates"),
    ("analytics", "Analytics"),
    ("settings", "Settings"),
]


class Sidebar:
    def __init__(self, ctx: ScreenContext):
        self._ctx = ctx
        self.expanded: set[UUID] = set()

    def toggle(self, project_id: UUID) -> bool:
        """Expand or collapse a project. Returns the new expanded flag."""
        if project_id in self.expanded:
            self.expanded.discard(project_id)
            return False
        self.expanded.add(project_id)
        return True

    async def render(self, state: NavigationState) -> SidebarModel:
        items = [SidebarItem(view=view, label=label, active=state.current_view == view) for view, label in NAV_ITEMS]

        # the selected project is always shown open
        if state.selected_project_id is not None:
            self.expanded.add(state.selected_project_id)

        user_id = self._ctx.user_id
        gateways = self._ctx.gateways
        try:
            projects = await gateways.projects.list_recent(user_id)
            page_lists = await asyncio.gather(
                *(gateways.pages.list_for_project(user_id, project.id) for project in projects)
            )
        except BackendError as e:
            logger.error("Error loading sidebar projects: %s", e)
            self._ctx.notifier.error("Failed to load projects")
            return SidebarModel(items=items)

        return SidebarModel(
            items=items,
            projects=[
                SidebarProject(
                    project=ProjectResponse.from_model(project),
                    pages=pages,
                    expanded=project.id in self.expanded,
                )
                for project, pages in zip(projects, page_lists, strict=True)
            ],
        )
