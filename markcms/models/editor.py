"""Markdown editor request/response shapes."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

ToolbarAction = Literal["bold", "italic", "link", "image", "list", "code"]


class PreviewRequest(BaseModel):
    """Markdown to render for the preview tab."""

    model_config = {"extra": "forbid"}

    content: str = Field(default="", max_length=500_000)


class PreviewResponse(BaseModel):
    html: str
    word_count: int
    char_count: int


class InsertRequest(BaseModel):
    """A toolbar click against the current textarea selection."""

    model_config = {"extra": "forbid"}

    content: str = Field(default="", max_length=500_000)
    action: ToolbarAction
    selection_start: int = Field(default=0, ge=0)
    selection_end: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _selection_in_bounds(self) -> InsertRequest:
        if self.selection_end < self.selection_start:
            raise ValueError("selection_end must not precede selection_start")
        if self.selection_end > len(self.content):
            raise ValueError("selection extends past end of content")
        return self


class InsertResponse(BaseModel):
    content: str
    selection_start: int
    selection_end: int


class EditorPanel(BaseModel):
    """Editor chrome state shown next to the textarea."""

    active_tab: Literal["edit", "preview"] = "edit"
    word_count: int = 0
    char_count: int = 0
    toolbar: list[ToolbarAction] = Field(default_factory=list)
    undo_available: bool = False
    redo_available: bool = False
