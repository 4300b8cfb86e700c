"""Page models. Pages are ordered content units inside a project."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Page(BaseModel):
    """Core page model. Represents a row in the pages table."""

    id: UUID
    project_id: UUID
    title: str
    slug: str
    content: str = ""
    meta_description: str | None = None
    meta_keywords: str | None = None
    is_published: bool = False
    order_index: int = 0
    parent_id: UUID | None = None
    created_at: datetime
    updated_at: datetime


class PageDraft(BaseModel):
    """Fields supplied when inserting a page row."""

    project_id: UUID
    title: str
    slug: str
    content: str = ""
    meta_description: str | None = None
    meta_keywords: str | None = None
    is_published: bool = False
    order_index: int = 0
    parent_id: UUID | None = None


class SavePageRequest(BaseModel):
    """Every editable page field. Saving always writes all of them."""

    model_config = {"extra": "forbid"}

    title: str = Field(max_length=200)
    slug: str = Field(max_length=200)
    content: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    is_published: bool = False

    @classmethod
    def from_page(cls, page: Page) -> SavePageRequest:
        return cls(
            title=page.title,
            slug=page.slug,
            content=page.content or "",
            meta_description=page.meta_description or "",
            meta_keywords=page.meta_keywords or "",
            is_published=page.is_published,
        )


class CreatePageRequest(BaseModel):
    """What the client sends from the new-page dialog."""

    model_config = {"extra": "forbid"}

    title: str = Field(default="", max_length=200)
