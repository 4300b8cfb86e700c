"""Tests for the markdown editor: toolbar splicing, counts, preview rendering."""

from __future__ import annotations

import pytest

from markcms.services.markdown_renderer import render_markdown
from markcms.ui.markdown_editor import MarkdownEditor, char_count, insert_markdown, word_count


class TestInsertMarkdown:
    def test_wraps_selection(self):
        res = insert_markdown("hello world", 0, 5, "**", "**")
        assert res.content == "**hello** world"
        # selection still covers "hello"
        assert res.content[res.selection_start : res.selection_end] == "hello"
        assert (res.selection_start, res.selection_end) == (2, 7)

    def test_empty_selection_places_cursor_between_markers(self):
        res = insert_markdown("abc", 3, 3, "**", "**")
        assert res.content == "abc****"
        assert (res.selection_start, res.selection_end) == (5, 5)

    def test_prefix_only(self):
        res = insert_markdown("item", 0, 0, "- ")
        assert res.content == "- item"
        assert (res.selection_start, res.selection_end) == (2, 2)

    @pytest.mark.parametrize(
        "action,expected",
        [
            ("bold", "see **docs**"),
            ("italic", "see *docs*"),
            ("link", "see [docs](url)"),
            ("image", "see ![alt](docs)"),
            ("list", "see - docs"),
            ("code", "see `docs`"),
        ],
    )
    def test_toolbar_actions(self, action, expected):
        res = MarkdownEditor().apply(action, "see docs", 4, 8)
        assert res.content == expected
        assert res.content[res.selection_start : res.selection_end] == "docs"


class TestCounts:
    def test_word_count(self):
        assert word_count("") == 0
        assert word_count("   ") == 0
        assert word_count("  one two\nthree\t") == 3

    def test_char_count_counts_code_points(self):
        assert char_count("") == 0
        assert char_count("héllo") == 5


class TestRenderMarkdown:
    def test_headings_get_classes(self):
        html = render_markdown("# Title\n\n## Sub")
        assert '<h1 class="text-3xl font-bold mb-4 text-foreground">Title</h1>' in html
        assert '<h2 class="text-2xl font-semibold mb-3 text-foreground">Sub</h2>' in html

    def test_paragraph_and_emphasis(self):
        html = render_markdown("Some **bold** and *italic* text")
        assert '<p class="mb-4 text-foreground leading-relaxed">' in html
        assert "<strong>bold</strong>" in html
        assert "<em>italic</em>" in html

    def test_lists_and_blockquote(self):
        html = render_markdown("- a\n- b\n\n1. one\n\n> quoted")
        assert '<ul class="list-disc list-inside mb-4 space-y-1">' in html
        assert '<ol class="list-decimal list-inside mb-4 space-y-1">' in html
        assert "<blockquote" in html and "italic" in html

    def test_code(self):
        html = render_markdown("Use `x`\n\n```python\nprint(1)\n```")
        assert '<code class="bg-muted px-1 py-0.5 rounded text-sm font-mono">x</code>' in html
        assert '<pre class="bg-muted p-4 rounded-lg overflow-x-auto mb-4">' in html
        assert "print(1)" in html

    def test_table(self):
        html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |")
        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_raw_html_is_escaped(self):
        html = render_markdown('<script>alert("x")</script>\n\n<img src=x onerror=alert(1)>')
        assert "<script>" not in html
        assert "<img" not in html
        assert "&lt;script&gt;" in html

    def test_javascript_links_are_not_linked(self):
        html = render_markdown("[click](javascript:alert(1))")
        assert 'href="javascript' not in html

    def test_empty_content_shows_prompt(self):
        assert "<em>Start writing to see preview...</em>" in render_markdown("")


class TestMarkdownEditor:
    def test_preview(self):
        res = MarkdownEditor().preview("# Hi there")
        assert "<h1" in res.html
        assert res.word_count == 3
        assert res.char_count == 10

    def test_panel_on_edit_tab(self):
        panel = MarkdownEditor().panel("one two")
        assert panel.active_tab == "edit"
        assert panel.word_count == 2
        assert panel.char_count == 7
        assert panel.toolbar == ["bold", "italic", "link", "image", "list", "code"]
        assert panel.undo_available is False
        assert panel.redo_available is False

    def test_toolbar_hidden_on_preview_tab(self):
        editor = MarkdownEditor()
        editor.select_tab("preview")
        panel = editor.panel("text")
        assert panel.active_tab == "preview"
        assert panel.toolbar == []

    def test_unknown_tab(self):
        editor = MarkdownEditor()
        with pytest.raises(ValueError):
            editor.select_tab("split")
        assert editor.active_tab == "edit"
