"""
Markdown editor state: edit/preview tab, toolbar splicing, counts, preview.

Undo and redo are shown in the toolbar but have no history behind them;
EditorPanel always reports them unavailable.
"""

from __future__ import annotations

from typing import Literal

from markcms.models.editor import EditorPanel, InsertResponse, PreviewResponse, ToolbarAction
from markcms.services.markdown_renderer import render_markdown

Tab = Literal["edit", "preview"]

# action -> (before, after)
TOOLBAR: dict[ToolbarAction, tuple[str, str]] = {
    "bold": ("**", "**"),
    "italic": ("*", "*"),
    "link": ("[", "](url)"),
    "image": ("![alt](", ")"),
    "list": ("- ", ""),
    "code": ("`", "`"),
}


def insert_markdown(content: str, start: int, end: int, before: str, after: str = "") -> InsertResponse:
    """
    Wrap content[start:end] in `before`/`after`.

    The returned selection covers the originally selected text at its new
    position, so the cursor lands where it was.
    """
    selected = content[start:end]
    new_content = content[:start] + before + selected + after + content[end:]
    return InsertResponse(
        content=new_content,
        selection_start=start + len(before),
        selection_end=start + len(before) + len(selected),
    )


def word_count(content: str) -> int:
    return len(content.split())


def char_count(content: str) -> int:
    return len(content)


class MarkdownEditor:
    def __init__(self):
        self.active_tab: Tab = "edit"

    def select_tab(self, tab: Tab) -> None:
        if tab not in ("edit", "preview"):
            raise ValueError(f"Unknown editor tab: {tab!r}")
        self.active_tab = tab

    def apply(self, action: ToolbarAction, content: str, start: int, end: int) -> InsertResponse:
        before, after = TOOLBAR[action]
        return insert_markdown(content, start, end, before, after)

    def preview(self, content: str) -> PreviewResponse:
        return PreviewResponse(
            html=render_markdown(content),
            word_count=word_count(content),
            char_count=char_count(content),
        )

    def panel(self, content: str) -> EditorPanel:
        return EditorPanel(
            active_tab=self.active_tab,
            word_count=word_count(content),
            char_count=char_count(content),
            # toolbar is only usable on the edit tab
            toolbar=list(TOOLBAR) if self.active_tab == "edit" else [],
        )
