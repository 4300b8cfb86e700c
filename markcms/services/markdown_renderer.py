"""
Markdown preview rendering.

CommonMark plus GFM tables and strikethrough via markdown-it-py. Raw HTML
in the source is escaped, never passed through, and link targets go
through markdown-it's URL validation, so the output is safe to embed.
Block elements carry the preview's styling classes.
"""

from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.token import Token

EMPTY_PREVIEW = "*Start writing to see preview...*"

_BLOCK_CLASSES: dict[tuple[str, str], str] = {
    ("heading_open", "h1"): "text-3xl font-bold mb-4 text-foreground",
    ("heading_open", "h2"): "text-2xl font-semibold mb-3 text-foreground",
    ("heading_open", "h3"): "text-xl font-medium mb-2 text-foreground",
    ("paragraph_open", "p"): "mb-4 text-foreground leading-relaxed",
    ("bullet_list_open", "ul"): "list-disc list-inside mb-4 space-y-1",
    ("ordered_list_open", "ol"): "list-decimal list-inside mb-4 space-y-1",
    ("blockquote_open", "blockquote"): "border-l-4 border-primary pl-4 italic mb-4 text-muted-foreground",
}
_INLINE_CODE_CLASS = "bg-muted px-1 py-0.5 rounded text-sm font-mono"
_PRE_CLASS = "bg-muted p-4 rounded-lg overflow-x-auto mb-4"


def _with_pre_class(default_rule):
    def rule(self, tokens, idx, options, env):
        return default_rule(tokens, idx, options, env).replace("<pre>", f'<pre class="{_PRE_CLASS}">', 1)

    return rule


def _build() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": False}).enable(["table", "strikethrough"])
    md.add_render_rule("fence", _with_pre_class(md.renderer.fence))
    md.add_render_rule("code_block", _with_pre_class(md.renderer.code_block))
    return md


_md = _build()


def _style(tokens: list[Token]) -> None:
    for token in tokens:
        css = _BLOCK_CLASSES.get((token.type, token.tag))
        if css:
            token.attrSet("class", css)
        elif token.type == "inline" and token.children:
            for child in token.children:
                if child.type == "code_inline":
                    child.attrSet("class", _INLINE_CODE_CLASS)


def render_markdown(content: str) -> str:
    """Render markdown to styled, sanitized HTML for the preview tab."""
    env: dict = {}
    tokens = _md.parse(content or EMPTY_PREVIEW, env)
    _style(tokens)
    return _md.renderer.render(tokens, _md.options, env)
