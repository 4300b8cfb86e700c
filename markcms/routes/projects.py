"""Project routes: list, create, get, update, delete, duplicate, open; page creation."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from markcms.auth import get_current_user
from markcms.models.page import CreatePageRequest, Page
from markcms.models.project import CreateProjectRequest, ProjectResponse, UpdateProjectRequest
from markcms.models.screens import AppShell
from markcms.models.user import User
from markcms.routes.deps import require_app_session, run_action
from markcms.ui.app_session import AppSession

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", status_code=200)
async def list_projects(app_session: AppSession = Depends(require_app_session)) -> list[ProjectResponse]:
    """List all projects for the current user, newest first."""
    screen = await app_session.project_manager().render()
    return screen.projects


@router.post("", status_code=201)
async def create_project(
    req: CreateProjectRequest,
    response: Response,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Create a project with its Home page and open it in the editor."""
    await run_action(response, app_session.project_manager().create(req))
    return await app_session.render_shell()


@router.get("/{project_id}", status_code=200)
async def get_project(
    project_id: UUID,
    request: Request,
    user: User = Depends(get_current_user),
) -> ProjectResponse:
    """Get a single project by ID."""
    project = await request.app.state.gateways.projects.get(user.id, project_id)
    if not project:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return ProjectResponse.from_model(project)


@router.patch("/{project_id}", status_code=200)
async def update_project(
    project_id: UUID,
    req: UpdateProjectRequest,
    response: Response,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Update a project's name, description and subdomain."""
    await run_action(response, app_session.project_manager().update(project_id, req))
    return await app_session.render_shell()


@router.delete("/{project_id}", status_code=200)
async def delete_project(
    project_id: UUID,
    response: Response,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Delete a project and its pages."""
    await run_action(response, app_session.project_manager().delete(project_id))
    return await app_session.render_shell()


@router.post("/{project_id}/duplicate", status_code=201)
async def duplicate_project(
    project_id: UUID,
    response: Response,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Copy a project and all of its pages, unpublished."""
    await run_action(response, app_session.project_manager().duplicate(project_id))
    return await app_session.render_shell()


@router.post("/{project_id}/open", status_code=200)
async def open_project(
    project_id: UUID,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Open a project in the editor."""
    app_session.project_manager().open(project_id)
    return await app_session.render_shell()


@router.get("/{project_id}/pages", status_code=200)
async def list_pages(
    project_id: UUID,
    request: Request,
    user: User = Depends(get_current_user),
) -> list[Page]:
    """List a project's pages in display order."""
    gateways = request.app.state.gateways
    if not await gateways.projects.get(user.id, project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.")
    return await gateways.pages.list_for_project(user.id, project_id)


@router.post("/{project_id}/pages", status_code=201)
async def create_page(
    project_id: UUID,
    req: CreatePageRequest,
    response: Response,
    app_session: AppSession = Depends(require_app_session),
) -> AppShell:
    """Append a page to a project and select it."""
    await run_action(response, app_session.page_editor().create_page(project_id, req))
    return await app_session.render_shell()
