"""Markdown to HTML conversion.

Wraps mistune with heading identifiers and MathJax passthrough. The output
is an HTML fragment meant to be embedded in the page template.
"""

import logging
from collections.abc import Iterable
from typing import Any

import mistune
from mistune.core import BlockState

from mdview.errors import RenderError

logger = logging.getLogger(__name__)

PLUGINS = ["math", "table", "strikethrough", "footnotes", "task_lists", "url"]

# Inline token types whose raw value is heading text
_TEXT_TOKENS = frozenset({"text", "codespan", "inline_math"})


class MarkdownRenderer:
    """Renders markdown source to an HTML fragment.

    Headings get identifiers derived from their text. Math delimiters are
    wrapped for a client-side MathJax renderer and never evaluated here.
    """

    def __init__(self) -> None:
        self._markdown = mistune.create_markdown(plugins=PLUGINS)
        self._markdown.before_render_hooks.append(_assign_heading_ids)
        self._markdown.renderer.register("task_list_item", _render_task_list_item)

    def render(self, source: bytes) -> str:
        """Render markdown bytes.

        Args:
            source: UTF-8 encoded markdown

        Returns:
            HTML fragment

        Raises:
            RenderError: If the source cannot be decoded or converted
        """
        try:
            text = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RenderError(f"Markdown is not valid UTF-8: {e}") from e

        logger.debug(f"Converting {len(text)} characters of markdown")
        try:
            html = self._markdown(text)
        except Exception as e:
            raise RenderError(f"Failed to convert markdown: {e}") from e
        logger.debug(f"Converted to {len(html)} characters of HTML")

        return str(html)


def heading_id(text: str, taken: set[str]) -> str:
    """Generate a unique identifier for a heading and record it as taken.

    ASCII letters are lowercased and digits kept; whitespace, "-" and "_"
    become "-"; everything else is dropped. An empty result becomes
    "heading". Collisions get "-1", "-2", ... in order of appearance.

    Args:
        text: Plain heading text
        taken: Identifiers already used in the document, updated in place

    Returns:
        Identifier not present in taken before the call
    """
    chars = []
    for char in text.strip():
        if not char.isascii():
            continue
        if char.isalnum():
            chars.append(char.lower())
        elif char.isspace() or char in "-_":
            chars.append("-")
    base = "".join(chars) or "heading"

    candidate = base
    suffix = 0
    while candidate in taken:
        suffix += 1
        candidate = f"{base}-{suffix}"

    taken.add(candidate)
    return candidate


def _assign_heading_ids(md: mistune.Markdown, state: BlockState) -> None:
    taken: set[str] = set()
    # Only link definitions, inline parsing must not register footnotes early
    env = {"ref_links": state.env.get("ref_links", {})}
    for token in _iter_headings(state.tokens):
        source = token.get("text", "").strip(" \r\n\t\f")
        text = "".join(_plain_text(md.inline(source, env)))
        token.setdefault("attrs", {})["id"] = heading_id(text, taken)


def _iter_headings(tokens: Iterable[dict[str, Any]]) -> Iterable[dict[str, Any]]:
    for token in tokens:
        if token.get("type") == "heading":
            yield token
        children = token.get("children")
        if isinstance(children, list):
            yield from _iter_headings(children)


def _plain_text(tokens: Iterable[dict[str, Any]]) -> Iterable[str]:
    for token in tokens:
        if token.get("type") in _TEXT_TOKENS:
            yield str(token.get("raw", ""))
        children = token.get("children")
        if isinstance(children, list):
            yield from _plain_text(children)


def _render_task_list_item(renderer: mistune.HTMLRenderer, text: str, checked: bool = False) -> str:
    # Attribute values are required in XHTML output
    checkbox = '<input class="task-list-item-checkbox" type="checkbox" disabled=""'
    checkbox += ' checked="" />' if checked else " />"

    if text.startswith("<p>"):
        text = text.replace("<p>", "<p>" + checkbox, 1)
    else:
        text = checkbox + text
    return f'<li class="task-list-item">{text}</li>\n'
