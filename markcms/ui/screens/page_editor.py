"""Page editor screen: a project's pages, the selected page, and its editing actions."""

from __future__ import annotations

import logging
import re
from uuid import UUID

from markcms.errors import BackendError, NotFound, ValidationFailed
from markcms.models.page import CreatePageRequest, Page, PageDraft, SavePageRequest
from markcms.models.project import ProjectResponse
from markcms.models.screens import EditorScreen, NotFoundScreen, ScreenAction
from markcms.ui.context import ScreenContext
from markcms.ui.markdown_editor import MarkdownEditor

logger = logging.getLogger(__name__)

BACK_TO_PROJECTS = ScreenAction(label="Back to Projects", view="projects")

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """'About Us!' -> 'about-us'"""
    return _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")


def project_not_found() -> NotFoundScreen:
    return NotFoundScreen(
        title="Project not found",
        message="The project you're looking for doesn't exist.",
        action=BACK_TO_PROJECTS,
    )


class PageEditor:
    def __init__(self, ctx: ScreenContext, editor: MarkdownEditor):
        self._ctx = ctx
        self._editor = editor

    async def render(self, project_id: UUID | None, page_id: UUID | None) -> EditorScreen | NotFoundScreen:
        """
        Load the project and its pages.

        With no page selected, the first page (by order_index) becomes the
        selection and the navigation store is told so.
        """
        if project_id is None:
            return project_not_found()

        gateways = self._ctx.gateways
        try:
            project = await gateways.projects.get(self._ctx.user_id, project_id)
            if project is None:
                return project_not_found()
            pages = await gateways.pages.list_for_project(self._ctx.user_id, project_id)
        except BackendError as e:
            logger.error("Error loading project: %s", e)
            self._ctx.notifier.error("Failed to load project")
            return project_not_found()

        screen = EditorScreen(
            project=ProjectResponse.from_model(project),
            pages=pages,
            back=BACK_TO_PROJECTS,
        )
        if not pages:
            screen.status = "empty"
            return screen

        if page_id is None:
            current = pages[0]
            self._ctx.navigation.navigate_to_view("editor", project_id, current.id)
        else:
            current = next((p for p in pages if p.id == page_id), None)

        if current is not None:
            screen.current_page = current
            screen.editor = self._editor.panel(current.content)
        return screen

    async def _get_page(self, page_id: UUID) -> Page:
        page = await self._ctx.gateways.pages.get(self._ctx.user_id, page_id)
        if page is None:
            self._ctx.notifier.error("Page not found")
            raise NotFound(str(page_id))
        return page

    async def save(self, page_id: UUID, req: SavePageRequest) -> Page | None:
        """
        Persist every editable field; the backend stamps updated_at.

        Raises:
            NotFound: no such page for this user
        """
        try:
            page = await self._ctx.gateways.pages.save(self._ctx.user_id, page_id, req)
        except BackendError as e:
            logger.error("Error saving page: %s", e)
            self._ctx.notifier.error("Failed to save page")
            return None

        if page is None:
            self._ctx.notifier.error("Page not found")
            raise NotFound(str(page_id))
        self._ctx.notifier.success("Page saved successfully!")
        return page

    async def toggle_publish(self, page_id: UUID, pending: SavePageRequest | None = None) -> Page | None:
        """
        Flip is_published and save straight away.

        `pending` is the editor's unsaved buffer; it is saved together with
        the new publish state. Without it the stored page is used.
        """
        if pending is None:
            try:
                pending = SavePageRequest.from_page(await self._get_page(page_id))
            except BackendError as e:
                logger.error("Error loading page: %s", e)
                self._ctx.notifier.error("Failed to save page")
                return None

        return await self.save(page_id, pending.model_copy(update={"is_published": not pending.is_published}))

    async def create_page(self, project_id: UUID, req: CreatePageRequest) -> Page | None:
        """
        Append a page to the project and select it.

        Raises:
            ValidationFailed: blank title
            NotFound: no such project for this user
        """
        title = req.title
        if not title.strip():
            self._ctx.notifier.error("Page title is required")
            raise ValidationFailed("Page title is required")

        gateways = self._ctx.gateways
        try:
            project = await gateways.projects.get(self._ctx.user_id, project_id)
            if project is None:
                self._ctx.notifier.error("Project not found")
                raise NotFound(str(project_id))
            pages = await gateways.pages.list_for_project(self._ctx.user_id, project_id)
            page = await gateways.pages.create(
                self._ctx.user_id,
                PageDraft(
                    project_id=project_id,
                    title=title,
                    slug=slugify(title),
                    content=f"# {title}\n\nStart writing your content here...",
                    meta_description=f"{title} page",
                    is_published=False,
                    order_index=len(pages),
                ),
            )
        except BackendError as e:
            logger.error("Error creating page: %s", e)
            self._ctx.notifier.error("Failed to create page")
            return None

        self._ctx.notifier.success("Page created successfully!")
        self._ctx.navigation.navigate_to_view("editor", project_id, page.id)
        return page

    async def delete_page(self, page_id: UUID) -> bool:
        """
        Delete a page unless it is the project's last one.

        Raises:
            ValidationFailed: it is the only page left
            NotFound: no such page for this user
        """
        gateways = self._ctx.gateways
        try:
            page = await self._get_page(page_id)
            pages = await gateways.pages.list_for_project(self._ctx.user_id, page.project_id)
            if len(pages) <= 1:
                self._ctx.notifier.error("Cannot delete the last page")
                raise ValidationFailed("Cannot delete the last page")
            deleted = await gateways.pages.delete(self._ctx.user_id, page_id)
        except BackendError as e:
            logger.error("Error deleting page: %s", e)
            self._ctx.notifier.error("Failed to delete page")
            return False

        if not deleted:
            # removed by another request after the list was fetched
            self._ctx.notifier.error("Page not found")
            raise NotFound(str(page_id))

        remaining = [p for p in pages if p.id != page_id]
        if self._ctx.navigation.state.selected_page_id == page_id:
            self._ctx.navigation.navigate_to_view("editor", page.project_id, remaining[0].id)

        self._ctx.notifier.success("Page deleted successfully")
        return True
