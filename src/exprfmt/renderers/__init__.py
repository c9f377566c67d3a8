"""exprfmt renderers.

Renderers convert expression trees into output formats.

Available Renderers:
- TextRenderer: canonical indented plain text
- MarkupRenderer: tagged Document for custom serialization
- HtmlRenderer: MarkupRenderer output flattened to highlighted HTML

Thread Safety:
Renderers keep only immutable settings and build output locally in each
render() call. Safe for concurrent use from multiple threads.

"""

from exprfmt.renderers.html import HtmlRenderer
from exprfmt.renderers.markup import MarkupRenderer
from exprfmt.renderers.text import TextRenderer

__all__ = ["HtmlRenderer", "MarkupRenderer", "TextRenderer"]
