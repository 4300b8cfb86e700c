"""
Screen view models.

Every screen the app shell can render is one of these shapes, tagged by
its `screen` field.
"""

from __future__ import annotations

from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from markcms.models.editor import EditorPanel
from markcms.models.navigation import NavigationState, View
from markcms.models.page import Page
from markcms.models.project import ProjectResponse
from markcms.models.user import UserPublic


class Notification(BaseModel):
    """One-shot toast shown to the user."""

    level: Literal["success", "error"]
    message: str


class ScreenAction(BaseModel):
    """A button that navigates somewhere."""

    label: str
    view: View
    project_id: UUID | None = None
    page_id: UUID | None = None


class DashboardStats(BaseModel):
    total_projects: int = 0
    published_sites: int = 0
    total_views: int = 0
    active_users: int = 0


class DashboardScreen(BaseModel):
    screen: Literal["dashboard"] = "dashboard"
    stats: DashboardStats = Field(default_factory=DashboardStats)
    recent_projects: list[ProjectResponse] = Field(default_factory=list)
    quick_actions: list[ScreenAction] = Field(default_factory=list)


class ProjectsScreen(BaseModel):
    screen: Literal["projects"] = "projects"
    projects: list[ProjectResponse] = Field(default_factory=list)


class EditorScreen(BaseModel):
    screen: Literal["editor"] = "editor"
    status: Literal["ready", "empty"] = "ready"
    project: ProjectResponse
    pages: list[Page] = Field(default_factory=list)
    current_page: Page | None = None
    editor: EditorPanel = Field(default_factory=EditorPanel)
    back: ScreenAction


class NotFoundScreen(BaseModel):
    screen: Literal["not_found"] = "not_found"
    title: str
    message: str
    action: ScreenAction


class PlaceholderScreen(BaseModel):
    screen: Literal["templates", "analytics", "settings"]
    title: str
    subtitle: str


class AuthScreen(BaseModel):
    screen: Literal["auth"] = "auth"
    message: str = "Sign in to continue."


Screen = Annotated[
    DashboardScreen | ProjectsScreen | EditorScreen | NotFoundScreen | PlaceholderScreen | AuthScreen,
    Field(discriminator="screen"),
]


class SidebarItem(BaseModel):
    view: View
    label: str
    active: bool = False


class SidebarProject(BaseModel):
    project: ProjectResponse
    pages: list[Page] = Field(default_factory=list)
    expanded: bool = False


class SidebarModel(BaseModel):
    items: list[SidebarItem] = Field(default_factory=list)
    projects: list[SidebarProject] = Field(default_factory=list)


class AppShell(BaseModel):
    """Full response of GET /api/app: gate, navigation, routed screen."""

    authenticated: bool
    user: UserPublic | None = None
    navigation: NavigationState | None = None
    screen: Screen
    sidebar: SidebarModel | None = None
    notifications: list[Notification] = Field(default_factory=list)
