"""Project models. A project is one website owned by a user."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class Project(BaseModel):
    """Core project model. Represents a row in the projects table."""

    id: UUID
    user_id: UUID
    name: str
    description: str | None = None
    domain: str | None = None
    subdomain: str | None = None
    is_published: bool = False
    theme_settings: dict[str, Any] | None = None
    created_at: datetime
    updated_at: datetime


class ProjectDraft(BaseModel):
    """Fields supplied when inserting a project row."""

    name: str
    description: str | None = None
    subdomain: str | None = None
    is_published: bool = False
    theme_settings: dict[str, Any] | None = None


class CreateProjectRequest(BaseModel):
    """What the client sends to create a project."""

    model_config = {"extra": "forbid"}

    name: str = Field(default="", max_length=200)
    description: str = Field(default="", max_length=2000)
    subdomain: str = Field(default="", max_length=100)


class UpdateProjectRequest(BaseModel):
    """What the client sends from the edit-project dialog."""

    model_config = {"extra": "forbid"}

    name: str = Field(default="", max_length=200)
    description: str = Field(default="", max_length=2000)
    subdomain: str = Field(default="", max_length=100)


class ProjectResponse(BaseModel):
    """What the API returns."""

    id: UUID
    name: str
    description: str | None
    domain: str | None
    subdomain: str | None
    is_published: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, project: Project) -> ProjectResponse:
        """Convert internal Project model to public API response."""
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            domain=project.domain,
            subdomain=project.subdomain,
            is_published=project.is_published,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )
