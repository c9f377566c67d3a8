"""HTML renderer: markup rendering followed by flattening.

Produces syntax-highlighted HTML where every token is wrapped in a
``<span>`` whose classes come from the tag taxonomy.

Text is not escaped by default, matching the plain-text output exactly.
Pass ``escape=True`` (or set RenderConfig.escape_text) when the tree may
contain untrusted strings.

Example:
    >>> from exprfmt.nodes import SignedInteger
    >>> HtmlRenderer().render(SignedInteger(42))
    '<span class="constant number">42</span>'
"""

from __future__ import annotations

from exprfmt.config import get_render_config
from exprfmt.flatten import flatten
from exprfmt.nodes import Expr
from exprfmt.renderers.markup import MarkupRenderer


class HtmlRenderer:
    """Render an expression tree to highlighted HTML.

    Thread Safety:
        Holds only immutable settings; safe to share across threads.
    """

    __slots__ = ("_markup", "_escape")

    def __init__(
        self,
        indent_width: int | None = None,
        *,
        strict: bool | None = None,
        escape: bool | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            indent_width: Spaces per level (defaults to RenderConfig.indent_width)
            strict: Raise on unsupported kinds (defaults to RenderConfig.strict)
            escape: HTML-escape text fragments (defaults to RenderConfig.escape_text)
        """
        self._markup = MarkupRenderer(indent_width, strict=strict)
        self._escape = get_render_config().escape_text if escape is None else escape

    def render(self, node: Expr, level: int = 0) -> str:
        """Render a tree to an HTML string."""
        return flatten(self._markup.render(node, level), escape=self._escape)


def render_html(node: Expr, level: int = 0) -> str:
    """Render a tree to HTML with the active configuration."""
    return HtmlRenderer().render(node, level)
