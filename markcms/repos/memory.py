"""
In-memory gateways.

Same interfaces as the Postgres repos, backed by dicts in one
MemoryStore. Used when MARKCMS_BACKEND=memory and by the test suite.
Ownership rules mirror the RLS policies: a user sees their own projects,
the pages and analytics of those projects, and every template.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from markcms.errors import BackendError
from markcms.models.analytics import AnalyticsEvent
from markcms.models.page import Page, PageDraft, SavePageRequest
from markcms.models.project import Project, ProjectDraft
from markcms.models.template import Template
from markcms.models.user import User
from markcms.repos.base import Gateways


class MemoryStore:
    """Shared tables for the in-memory gateways."""

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}
        self.projects: dict[UUID, Project] = {}
        self.pages: dict[UUID, Page] = {}
        self.templates: dict[UUID, Template] = {}
        self.analytics: dict[UUID, AnalyticsEvent] = {}
        self._last_tick: datetime | None = None

    def now(self) -> datetime:
        """Strictly increasing timestamps so ordering by time is deterministic."""
        now = datetime.now(UTC)
        if self._last_tick is not None and now <= self._last_tick:
            now = self._last_tick + timedelta(microseconds=1)
        self._last_tick = now
        return now

    def owns_project(self, user_id: UUID, project_id: UUID) -> bool:
        project = self.projects.get(project_id)
        return project is not None and project.user_id == user_id

    def add_user(self, email: str, name: str | None = None) -> User:
        user = User(id=uuid4(), email=email, name=name, created_at=self.now())
        self.users[user.id] = user
        return user

    def add_template(self, name: str, content: str, category: str = "general", description: str | None = None) -> Template:
        template = Template(
            id=uuid4(),
            name=name,
            description=description,
            content=content,
            category=category,
            created_at=self.now(),
        )
        self.templates[template.id] = template
        return template

    def add_event(self, project_id: UUID, event_type: str = "page_view", page_id: UUID | None = None) -> AnalyticsEvent:
        event = AnalyticsEvent(
            id=uuid4(),
            project_id=project_id,
            page_id=page_id,
            event_type=event_type,
            timestamp=self.now(),
        )
        self.analytics[event.id] = event
        return event


class MemoryUserRepo:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get(self, user_id: UUID) -> User | None:
        return self._store.users.get(user_id)


class MemoryProjectRepo:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def _owned(self, user_id: UUID) -> list[Project]:
        return [p for p in self._store.projects.values() if p.user_id == user_id]

    async def list_for_user(self, user_id: UUID) -> list[Project]:
        return sorted(self._owned(user_id), key=lambda p: p.created_at, reverse=True)

    async def list_recent(self, user_id: UUID, limit: int | None = None) -> list[Project]:
        projects = sorted(self._owned(user_id), key=lambda p: p.updated_at, reverse=True)
        return projects if limit is None else projects[:limit]

    async def get(self, user_id: UUID, project_id: UUID) -> Project | None:
        project = self._store.projects.get(project_id)
        return project if project and project.user_id == user_id else None

    async def create(self, user_id: UUID, draft: ProjectDraft) -> Project:
        now = self._store.now()
        project = Project(
            id=uuid4(),
            user_id=user_id,
            name=draft.name,
            description=draft.description,
            subdomain=draft.subdomain,
            is_published=draft.is_published,
            theme_settings=draft.theme_settings,
            created_at=now,
            updated_at=now,
        )
        self._store.projects[project.id] = project
        return project

    async def update(
        self,
        user_id: UUID,
        project_id: UUID,
        name: str,
        description: str | None,
        subdomain: str | None,
    ) -> Project | None:
        project = await self.get(user_id, project_id)
        if project is None:
            return None
        updated = project.model_copy(
            update={
                "name": name,
                "description": description,
                "subdomain": subdomain,
                "updated_at": self._store.now(),
            }
        )
        self._store.projects[project_id] = updated
        return updated

    async def delete(self, user_id: UUID, project_id: UUID) -> bool:
        if not self._store.owns_project(user_id, project_id):
            return False
        del self._store.projects[project_id]
        # ON DELETE CASCADE
        for page_id in [p.id for p in self._store.pages.values() if p.project_id == project_id]:
            del self._store.pages[page_id]
        return True


class MemoryPageRepo:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def list_for_project(self, user_id: UUID, project_id: UUID) -> list[Page]:
        if not self._store.owns_project(user_id, project_id):
            return []
        pages = [p for p in self._store.pages.values() if p.project_id == project_id]
        return sorted(pages, key=lambda p: (p.order_index, p.created_at))

    async def get(self, user_id: UUID, page_id: UUID) -> Page | None:
        page = self._store.pages.get(page_id)
        if page is None or not self._store.owns_project(user_id, page.project_id):
            return None
        return page

    async def create(self, user_id: UUID, draft: PageDraft) -> Page:
        if not self._store.owns_project(user_id, draft.project_id):
            # Matches the RLS insert policy: writes outside your projects are rejected
            raise BackendError("new row violates row-level security policy for table \"pages\"")
        now = self._store.now()
        page = Page(id=uuid4(), created_at=now, updated_at=now, **draft.model_dump())
        self._store.pages[page.id] = page
        return page

    async def create_many(self, user_id: UUID, drafts: list[PageDraft]) -> list[Page]:
        return [await self.create(user_id, draft) for draft in drafts]

    async def save(self, user_id: UUID, page_id: UUID, req: SavePageRequest) -> Page | None:
        page = await self.get(user_id, page_id)
        if page is None:
            return None
        updated = page.model_copy(update={**req.model_dump(), "updated_at": self._store.now()})
        self._store.pages[page_id] = updated
        return updated

    async def delete(self, user_id: UUID, page_id: UUID) -> bool:
        if await self.get(user_id, page_id) is None:
            return False
        del self._store.pages[page_id]
        return True


class MemoryTemplateRepo:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def list_all(self) -> list[Template]:
        return sorted(self._store.templates.values(), key=lambda t: (t.category, t.name))


class MemoryAnalyticsRepo:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def list_for_user(self, user_id: UUID) -> list[AnalyticsEvent]:
        events = [e for e in self._store.analytics.values() if self._store.owns_project(user_id, e.project_id)]
        return sorted(events, key=lambda e: e.timestamp, reverse=True)


def memory_gateways(store: MemoryStore | None = None) -> Gateways:
    """Build a full gateway set over one store."""
    store = store or MemoryStore()
    return Gateways(
        users=MemoryUserRepo(store),
        projects=MemoryProjectRepo(store),
        pages=MemoryPageRepo(store),
        templates=MemoryTemplateRepo(store),
        analytics=MemoryAnalyticsRepo(store),
    )
