"""
Pydantic models for markcms.

All data shapes defined here. No imports from db, repos, or routes.
"""

from markcms.models.analytics import AnalyticsEvent
from markcms.models.auth import AuthEvent, LogoutResponse
from markcms.models.navigation import VIEWS, NavigateRequest, NavigationState, View
from markcms.models.page import CreatePageRequest, Page, PageDraft, SavePageRequest
from markcms.models.project import (
    CreateProjectRequest,
    Project,
    ProjectDraft,
    ProjectResponse,
    UpdateProjectRequest,
)
from markcms.models.template import Template
from markcms.models.user import User, UserPublic

__all__ = [
    # User models
    "User",
    "UserPublic",
    # Auth models
    "AuthEvent",
    "LogoutResponse",
    # Navigation models
    "View",
    "VIEWS",
    "NavigationState",
    "NavigateRequest",
    # Project models
    "Project",
    "ProjectDraft",
    "CreateProjectRequest",
    "UpdateProjectRequest",
    "ProjectResponse",
    # Page models
    "Page",
    "PageDraft",
    "SavePageRequest",
    "CreatePageRequest",
    # Read-only records
    "Template",
    "AnalyticsEvent",
]
