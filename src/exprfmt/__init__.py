"""
exprfmt: pretty-printer and highlighter for code-as-data expression trees

Renders a parsed expression tree in two forms: canonical indented plain
text, and a tagged document that flattens to syntax-highlighted HTML.
Both renderers are total: node kinds without a rendering rule show up as a
visible error sentinel instead of aborting the render.

Quick Start:
    >>> from exprfmt import render, render_html
    >>> from exprfmt.nodes import NodeKind, Symbol, expr
    >>> tree = expr(NodeKind.CONDITIONAL, Symbol("cond"), Symbol("A"), Symbol("B"))
    >>> print(render(tree))
    if cond
      A
    else
      B
    end

    >>> render_html(Symbol("x"))
    '<span class="variable">x</span>'

Configuration:
    >>> from exprfmt import RenderConfig, render_config_context
    >>> with render_config_context(RenderConfig(indent_width=4)):
    ...     text = render(tree)
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Literal

from exprfmt.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from exprfmt.document import Document, Run, Tagged
from exprfmt.errors import ExprfmtError, RenderError, UnsupportedNodeKindError
from exprfmt.flatten import flatten, parse_tag, text_content
from exprfmt.indent import indent_prefix, indented_line, raw_indent
from exprfmt.nodes import (
    Boolean,
    Character,
    Expr,
    Float,
    List,
    Mapping,
    Nil,
    Node,
    NodeKind,
    Pair,
    QuotedReference,
    Rational,
    SignedInteger,
    String,
    Symbol,
    Tuple,
    UnsignedInteger,
    expr,
    lift,
)
from exprfmt.renderers.html import HtmlRenderer
from exprfmt.renderers.markup import MarkupRenderer
from exprfmt.renderers.protocol import ExprRenderer
from exprfmt.renderers.text import TextRenderer
from exprfmt.tags import KIND_TAGS, TAGS, classify_symbol, symbol_tag

__version__ = "0.1.0"


def render(node: Expr, level: int = 0) -> str:
    """Render a tree to canonical plain text.

    Args:
        node: Atom, container literal or Node
        level: Nesting level of the first line

    Returns:
        Plain text, without a trailing newline
    """
    return TextRenderer().render(node, level)


def render_markup(node: Expr, level: int = 0) -> Document:
    """Render a tree to a tagged Document.

    Use this instead of render_html() to apply custom serialization or
    escaping; flatten() turns the result into HTML.
    """
    return MarkupRenderer().render(node, level)


def render_html(node: Expr, level: int = 0) -> str:
    """Render a tree to syntax-highlighted HTML."""
    return HtmlRenderer().render(node, level)


def render_many(
    nodes: Iterable[Expr],
    *,
    mode: Literal["text", "markup", "html"] = "text",
    max_workers: int | None = None,
) -> list:
    """Render independent trees concurrently.

    Configuration is read once in the calling context, so settings made
    with render_config_context() apply inside the worker threads too.
    Results are returned in input order.

    Example:
        >>> render_many([SignedInteger(1), UnsignedInteger(255)])
        ['1', '0xff']
    """
    renderer: TextRenderer | MarkupRenderer | HtmlRenderer
    match mode:
        case "text":
            renderer = TextRenderer()
        case "markup":
            renderer = MarkupRenderer()
        case "html":
            renderer = HtmlRenderer()
        case _:
            raise ValueError(f"Unknown render mode: {mode!r}")

    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        return list(ex.map(renderer.render, nodes))


# Grouped by category
__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "render",
    "render_markup",
    "render_html",
    "render_many",
    # Expression model
    "Expr",
    "Node",
    "NodeKind",
    "Nil",
    "Boolean",
    "SignedInteger",
    "UnsignedInteger",
    "Float",
    "Rational",
    "Character",
    "String",
    "Symbol",
    "QuotedReference",
    "Pair",
    "Tuple",
    "List",
    "Mapping",
    "expr",
    "lift",
    # Renderers
    "TextRenderer",
    "MarkupRenderer",
    "HtmlRenderer",
    "ExprRenderer",
    # Documents
    "Document",
    "Tagged",
    "Run",
    "flatten",
    "parse_tag",
    "text_content",
    # Indentation
    "indent_prefix",
    "indented_line",
    "raw_indent",
    # Tag taxonomy
    "TAGS",
    "KIND_TAGS",
    "classify_symbol",
    "symbol_tag",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Errors
    "ExprfmtError",
    "RenderError",
    "UnsupportedNodeKindError",
]
