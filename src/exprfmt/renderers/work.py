"""Work items for the renderers' explicit stacks.

Renderers never recurse into subtrees. Expanding a form yields a flat list
of parts: finished output mixed with ``Pending`` subtrees. A driver loop pops
parts off a stack and expands each ``Pending`` in turn, so the depth of the
tree never touches the interpreter's recursion limit.

The markup renderer also needs ``Group``: a run of parts that becomes one
tagged (or untagged) unit once all of its pending subtrees are finished.
"""

from __future__ import annotations

from dataclasses import dataclass

from exprfmt.document import Document
from exprfmt.nodes import Expr


@dataclass(frozen=True, slots=True)
class Pending:
    """A subtree still to be rendered at the given nesting level."""

    node: Expr
    level: int


@dataclass(frozen=True, slots=True)
class Group:
    """Parts that close into ``Tagged(tag, ...)``, or a ``Run`` when tag is None."""

    tag: str | None
    parts: list[Part]


type Part = Document | Pending | Group


__all__ = ["Group", "Part", "Pending"]
