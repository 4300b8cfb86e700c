"""
Gateway interfaces.

Screens and routes depend on these protocols, never on a concrete
backend client. PostgreSQL repos and the in-memory store both satisfy them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from markcms.models.analytics import AnalyticsEvent
from markcms.models.page import Page, PageDraft, SavePageRequest
from markcms.models.project import Project, ProjectDraft
from markcms.models.template import Template
from markcms.models.user import User


class UserGateway(Protocol):
    async def get(self, user_id: UUID) -> User | None: ...


class ProjectGateway(Protocol):
    async def list_for_user(self, user_id: UUID) -> list[Project]: ...

    async def list_recent(self, user_id: UUID, limit: int | None = None) -> list[Project]: ...

    async def get(self, user_id: UUID, project_id: UUID) -> Project | None: ...

    async def create(self, user_id: UUID, draft: ProjectDraft) -> Project: ...

    async def update(
        self,
        user_id: UUID,
        project_id: UUID,
        name: str,
        description: str | None,
        subdomain: str | None,
    ) -> Project | None: ...

    async def delete(self, user_id: UUID, project_id: UUID) -> bool: ...


class PageGateway(Protocol):
    async def list_for_project(self, user_id: UUID, project_id: UUID) -> list[Page]: ...

    async def get(self, user_id: UUID, page_id: UUID) -> Page | None: ...

    async def create(self, user_id: UUID, draft: PageDraft) -> Page: ...

    async def create_many(self, user_id: UUID, drafts: list[PageDraft]) -> list[Page]: ...

    async def save(self, user_id: UUID, page_id: UUID, req: SavePageRequest) -> Page | None: ...

    async def delete(self, user_id: UUID, page_id: UUID) -> bool: ...


class TemplateGateway(Protocol):
    async def list_all(self) -> list[Template]: ...


class AnalyticsGateway(Protocol):
    async def list_for_user(self, user_id: UUID) -> list[AnalyticsEvent]: ...


@dataclass
class Gateways:
    """One gateway per entity type, handed to every screen."""

    users: UserGateway
    projects: ProjectGateway
    pages: PageGateway
    templates: TemplateGateway
    analytics: AnalyticsGateway
