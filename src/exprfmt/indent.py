"""Indentation helpers shared by both renderers.

A nesting level maps to ``level * width`` spaces. The width defaults to the
active RenderConfig's ``indent_width``.

Example:
    >>> indent_prefix(2)
    '    '
    >>> indented_line(1, "end")
    '  end'
"""

from __future__ import annotations

from exprfmt.config import get_render_config


def indent_prefix(level: int, width: int | None = None) -> str:
    """Return the whitespace prefix for a nesting level."""
    if width is None:
        width = get_render_config().indent_width
    return " " * (level * width)


def indented_line(level: int, text: str, width: int | None = None) -> str:
    """Return text prefixed with the indentation for level."""
    return indent_prefix(level, width) + text


def raw_indent(level: int, delta: int = 0, width: int | None = None) -> str:
    """Return bare whitespace for ``level + delta``.

    Used where indentation is its own fragment rather than a prefix on a
    text unit, as in the markup renderer.
    """
    return indent_prefix(level + delta, width)


__all__ = ["indent_prefix", "indented_line", "raw_indent"]
