"""Markdown bodies for items and pages."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence, cast

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin


@dataclass(frozen=True, slots=True)
class MarkdownBody:
    """Rendered HTML plus the plain-text heading and lead paragraph, if any."""

    html: str
    title: str | None = None
    lead: str | None = None


@lru_cache(maxsize=1)
def _parser() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": True, "typographer": True})
    md.enable("table").enable("strikethrough")
    md.use(deflist_plugin)
    md.use(footnote_plugin)
    md.use(tasklists_plugin, label=True)
    return md


def parse_markdown(text: str) -> MarkdownBody:
    """Render ``text`` and pick out its first level-one heading and paragraph."""
    if not text.strip():
        return MarkdownBody(html="")
    md = _parser()
    env: dict[str, object] = {}
    tokens = md.parse(text, env)
    html = cast(str, md.renderer.render(tokens, md.options, env)).strip()
    return MarkdownBody(
        html=html,
        title=_first_inline(tokens, "heading_open", tag="h1"),
        lead=_first_inline(tokens, "paragraph_open"),
    )


def render_markdown(text: str) -> str:
    """Render Markdown to an HTML fragment suitable for a content body."""
    return parse_markdown(text).html


def _first_inline(tokens: Sequence[Token], opener: str, *, tag: str | None = None) -> str | None:
    for position, token in enumerate(tokens[:-1]):
        if token.type != opener or (tag is not None and token.tag != tag):
            continue
        # Paragraphs inside lists and blockquotes are not lead paragraphs.
        if token.level != 0:
            continue
        inline = tokens[position + 1]
        if inline.type != "inline":
            continue
        plain = _plain_text(inline.children or [])
        if plain:
            return plain
    return None


def _plain_text(children: Sequence[Token]) -> str:
    parts: list[str] = []
    for child in children:
        if child.type in {"text", "code_inline"}:
            parts.append(child.content)
        elif child.type in {"softbreak", "hardbreak"}:
            parts.append(" ")
    return "".join(parts).strip()
