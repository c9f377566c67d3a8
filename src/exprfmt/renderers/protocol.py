"""ExprRenderer protocol: stable interface for string-producing renderers.

Any renderer that implements ``render(node, level=0) -> str`` conforms.
``TextRenderer`` and ``HtmlRenderer`` are the built-in implementations.

Example:
    from exprfmt.renderers.protocol import ExprRenderer

    def show(renderer: ExprRenderer, tree: Expr) -> str:
        return renderer.render(tree)

"""

from typing import Protocol

from exprfmt.nodes import Expr


class ExprRenderer(Protocol):
    """Protocol for expression renderers that produce a string."""

    def render(self, node: Expr, level: int = 0) -> str:
        """Render a tree at a nesting level.

        Args:
            node: Atom, container literal or Node
            level: Nesting level of the first line

        Returns:
            Rendered string output.

        """
        ...
