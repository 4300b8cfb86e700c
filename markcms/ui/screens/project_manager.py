"""Project manager screen: list, create, edit, delete, duplicate projects."""

from __future__ import annotations

import logging
from uuid import UUID

from markcms.errors import BackendError, NotFound, ValidationFailed
from markcms.models.page import PageDraft
from markcms.models.project import (
    CreateProjectRequest,
    Project,
    ProjectDraft,
    ProjectResponse,
    UpdateProjectRequest,
)
from markcms.models.screens import ProjectsScreen
from markcms.ui.context import ScreenContext

logger = logging.getLogger(__name__)


def home_page_draft(project: Project) -> PageDraft:
    """The page every new project starts with."""
    return PageDraft(
        project_id=project.id,
        title="Home",
        slug="home",
        content=f"# Welcome to {project.name}\n\nThis is your homepage. Start editing to create amazing content!",
        meta_description=f"Welcome to {project.name}",
        is_published=False,
        order_index=0,
    )


class ProjectManager:
    def __init__(self, ctx: ScreenContext):
        self._ctx = ctx

    def _require_name(self, name: str) -> str:
        if not name.strip():
            self._ctx.notifier.error("Project name is required")
            raise ValidationFailed("Project name is required")
        return name

    async def render(self) -> ProjectsScreen:
        try:
            projects = await self._ctx.gateways.projects.list_for_user(self._ctx.user_id)
        except BackendError as e:
            logger.error("Error loading projects: %s", e)
            self._ctx.notifier.error("Failed to load projects")
            return ProjectsScreen()
        return ProjectsScreen(projects=[ProjectResponse.from_model(p) for p in projects])

    async def create(self, req: CreateProjectRequest) -> Project | None:
        """
        Create a project plus its Home page, then open it in the editor.

        Raises:
            ValidationFailed: blank name, nothing was sent to the backend
        """
        name = self._require_name(req.name)
        gateways = self._ctx.gateways
        try:
            project = await gateways.projects.create(
                self._ctx.user_id,
                ProjectDraft(
                    name=name,
                    description=req.description,
                    subdomain=req.subdomain or None,
                    is_published=False,
                ),
            )
            await gateways.pages.create(self._ctx.user_id, home_page_draft(project))
        except BackendError as e:
            logger.error("Error creating project: %s", e)
            self._ctx.notifier.error("Failed to create project")
            return None

        self._ctx.notifier.success("Project created successfully!")
        self._ctx.navigation.navigate_to_view("editor", project.id)
        return project

    async def update(self, project_id: UUID, req: UpdateProjectRequest) -> Project | None:
        """
        Raises:
            ValidationFailed: blank name
            NotFound: no such project for this user
        """
        name = self._require_name(req.name)
        try:
            project = await self._ctx.gateways.projects.update(
                self._ctx.user_id,
                project_id,
                name=name,
                description=req.description,
                subdomain=req.subdomain or None,
            )
        except BackendError as e:
            logger.error("Error updating project: %s", e)
            self._ctx.notifier.error("Failed to update project")
            return None

        if project is None:
            self._ctx.notifier.error("Project not found")
            raise NotFound(str(project_id))
        self._ctx.notifier.success("Project updated successfully!")
        return project

    async def delete(self, project_id: UUID) -> bool:
        try:
            deleted = await self._ctx.gateways.projects.delete(self._ctx.user_id, project_id)
        except BackendError as e:
            logger.error("Error deleting project: %s", e)
            self._ctx.notifier.error("Failed to delete project")
            return False

        if not deleted:
            self._ctx.notifier.error("Project not found")
            raise NotFound(str(project_id))
        self._ctx.notifier.success("Project deleted successfully")
        return True

    async def duplicate(self, project_id: UUID) -> Project | None:
        """
        Copy a project and all of its pages. Every copy starts unpublished.

        Raises:
            NotFound: no such project for this user
        """
        gateways = self._ctx.gateways
        user_id = self._ctx.user_id
        try:
            original = await gateways.projects.get(user_id, project_id)
            if original is None:
                self._ctx.notifier.error("Project not found")
                raise NotFound(str(project_id))

            copy = await gateways.projects.create(
                user_id,
                ProjectDraft(
                    name=f"{original.name} (Copy)",
                    description=original.description,
                    is_published=False,
                    theme_settings=original.theme_settings,
                ),
            )
            pages = await gateways.pages.list_for_project(user_id, original.id)
            await gateways.pages.create_many(
                user_id,
                [
                    PageDraft(
                        project_id=copy.id,
                        title=page.title,
                        slug=page.slug,
                        content=page.content,
                        meta_description=page.meta_description,
                        meta_keywords=page.meta_keywords,
                        is_published=False,
                        order_index=page.order_index,
                        parent_id=page.parent_id,
                    )
                    for page in pages
                ],
            )
        except BackendError as e:
            logger.error("Error duplicating project: %s", e)
            self._ctx.notifier.error("Failed to duplicate project")
            return None

        self._ctx.notifier.success("Project duplicated successfully!")
        return copy

    def open(self, project_id: UUID) -> None:
        self._ctx.navigation.navigate_to_view("editor", project_id)
