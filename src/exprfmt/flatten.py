"""Serialize a tagged Document into a markup string.

Tag paths decompose into an element: ``div#main.foo.bar`` becomes
``<div id="main" class="foo bar">``. Text fragments pass through
unescaped unless escaping is requested, either per call or through
RenderConfig.escape_text.

The walk uses an explicit stack, so document depth and width are bounded
only by memory.

Example:
    >>> from exprfmt.document import tagged
    >>> flatten(tagged("span.constant.number", "42"))
    '<span class="constant number">42</span>'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from exprfmt.config import get_render_config
from exprfmt.document import Document, Run, Tagged
from exprfmt.stringbuilder import StringBuilder
from exprfmt.utils.text import escape_html

_SEGMENT_RE = re.compile(r"([#.])([^#.]*)")


@dataclass(frozen=True, slots=True)
class _Close:
    name: str


@lru_cache(maxsize=256)
def parse_tag(tag: str) -> tuple[str, str | None, tuple[str, ...]]:
    """Split a tag path into element name, id and classes.

    Examples:
        >>> parse_tag("div#main.foo.bar")
        ('div', 'main', ('foo', 'bar'))
        >>> parse_tag(".quoted")
        ('span', None, ('quoted',))
    """
    cut = len(tag)
    for marker in "#.":
        pos = tag.find(marker)
        if pos != -1:
            cut = min(cut, pos)
    name = tag[:cut] or "span"
    element_id: str | None = None
    classes: list[str] = []
    for marker, value in _SEGMENT_RE.findall(tag[cut:]):
        if not value:
            continue
        if marker == "#":
            if element_id is None:
                element_id = value
        else:
            classes.append(value)
    return name, element_id, tuple(classes)


def _open_tag(tag: str) -> tuple[str, str]:
    name, element_id, classes = parse_tag(tag)
    attrs = ""
    if element_id is not None:
        attrs += f' id="{element_id}"'
    if classes:
        attrs += f' class="{" ".join(classes)}"'
    return name, f"<{name}{attrs}>"


def _is_blank(children: tuple[Document, ...]) -> bool:
    """True when every child is an empty text fragment."""
    return all(isinstance(child, str) and not child for child in children)


def flatten(doc: Document, *, escape: bool | None = None) -> str:
    """Serialize a Document to markup.

    Args:
        doc: Document produced by the markup renderer
        escape: HTML-escape text fragments (defaults to RenderConfig.escape_text)

    Returns:
        Markup string
    """
    if escape is None:
        escape = get_render_config().escape_text

    sb = StringBuilder()
    stack: list[Document | _Close] = [doc]
    while stack:
        item = stack.pop()
        match item:
            case str():
                sb.append(escape_html(item) if escape else item)
            case _Close(name=name):
                sb.append(f"</{name}>")
            case Run(children=children):
                stack.extend(reversed(children))
            case Tagged(tag=tag, children=children):
                if _is_blank(children):
                    continue
                name, opening = _open_tag(tag)
                sb.append(opening)
                stack.append(_Close(name))
                stack.extend(reversed(children))
    return sb.build()


def text_content(doc: Document) -> str:
    """Return only the visible text of a Document, without any tags."""
    sb = StringBuilder()
    stack: list[Document] = [doc]
    while stack:
        item = stack.pop()
        match item:
            case str():
                sb.append(item)
            case Run(children=children) | Tagged(children=children):
                stack.extend(reversed(children))
    return sb.build()


__all__ = ["flatten", "parse_tag", "text_content"]
