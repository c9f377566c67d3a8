"""Exception classes for exprfmt.

Rendering is total by default: unknown node kinds become a visible error
sentinel in the output. These exceptions surface only in strict mode or
when building trees from native values.
"""

from __future__ import annotations


class ExprfmtError(Exception):
    """Base exception for all exprfmt errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(ExprfmtError):
    """Error during rendering."""

    pass


class UnsupportedNodeKindError(RenderError):
    """A node kind has no rendering rule.

    Raised only in strict mode; otherwise the renderers emit
    ``ERROR: could not print ... :ERROR`` in place of the node.
    """

    def __init__(self, kind: str, fallback: str) -> None:
        """Initialize with the offending kind.

        Args:
            kind: The node kind (or value type name) that could not be rendered
            fallback: Fallback spelling of the offending value
        """
        self.kind = kind
        self.fallback = fallback
        super().__init__(f"Unsupported node kind '{kind}': {fallback}")


SENTINEL_PREFIX = "ERROR: could not print "
SENTINEL_SUFFIX = " :ERROR"


def error_sentinel(fallback: str) -> str:
    """Return the visible placeholder emitted for an unrenderable value.

    Example:
        >>> error_sentinel("(weird 1)")
        'ERROR: could not print (weird 1) :ERROR'
    """
    return f"{SENTINEL_PREFIX}{fallback}{SENTINEL_SUFFIX}"
