"""Typed expression model for exprfmt.

All values are frozen dataclasses with slots for:
- Immutability: a tree can be rendered from any number of threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: renderers dispatch with a single match statement

Model Hierarchy:
Expr
├── Atom
│   ├── Nil
│   ├── Boolean
│   ├── SignedInteger
│   ├── UnsignedInteger
│   ├── Float
│   ├── Rational
│   ├── Character
│   ├── String
│   ├── Symbol
│   └── QuotedReference
├── Pair
├── Tuple
├── List
├── Mapping
└── Node (kind + positional children)

"""

from __future__ import annotations

from collections.abc import Mapping as AbcMapping
from dataclasses import dataclass
from enum import StrEnum
from fractions import Fraction

# =============================================================================
# Atoms
# =============================================================================


@dataclass(frozen=True, slots=True)
class Nil:
    """The absent value. Rendered as ``nothing``."""


@dataclass(frozen=True, slots=True)
class Boolean:
    value: bool


@dataclass(frozen=True, slots=True)
class SignedInteger:
    value: int


@dataclass(frozen=True, slots=True)
class UnsignedInteger:
    """Unsigned integer, rendered in hexadecimal (``0xff``)."""

    value: int


@dataclass(frozen=True, slots=True)
class Float:
    value: float


@dataclass(frozen=True, slots=True)
class Rational:
    """Exact ratio, rendered as ``n//d``."""

    numerator: int
    denominator: int


@dataclass(frozen=True, slots=True)
class Character:
    value: str


@dataclass(frozen=True, slots=True)
class String:
    value: str


@dataclass(frozen=True, slots=True)
class Symbol:
    """Identifier or operator name, by its textual spelling."""

    name: str


@dataclass(frozen=True, slots=True)
class QuotedReference:
    """A referenced (not evaluated) name or form.

    Source: :name or :(form)

    """

    inner: Symbol | Node


# =============================================================================
# Container literals
# =============================================================================


@dataclass(frozen=True, slots=True)
class Pair:
    first: Expr
    second: Expr


@dataclass(frozen=True, slots=True)
class Tuple:
    items: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class List:
    items: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class Mapping:
    """Ordered key/value literal. Rendered as a ``Dict(...)`` constructor."""

    pairs: tuple[Pair, ...]


# =============================================================================
# Nodes
# =============================================================================


class NodeKind(StrEnum):
    """Closed set of syntactic forms the renderers understand.

    Values are the head spellings used by the source language's own
    expression objects.
    """

    RATIONAL = "//"
    PAIR = "=>"
    TUPLE = "tuple"
    LIST = "vect"
    MAPPING = "dict"
    QUOTE = "quote"
    UNQUOTE = "$"
    SPLAT = "..."
    BLOCK = "block"
    CONDITIONAL = "if"
    ELSEIF = "elseif"
    COMPARISON = "comparison"
    LET = "let"
    FUNCTION = "function"
    MACRO = "macro"
    LAMBDA = "->"
    ASSIGNMENT = "="
    INDEX = "ref"
    RANGE = ":"
    MODULE = "module"
    IMPORT = "import"
    USING = "using"
    EXPORT = "export"
    MEMBER_ACCESS = "."
    TYPE_ANNOTATION = "::"
    GENERIC = "curly"
    AND = "&&"
    OR = "||"
    CALL = "call"
    MACRO_CALL = "macrocall"
    TOPLEVEL = "toplevel"


@dataclass(frozen=True, slots=True)
class Node:
    """A syntactic form.

    ``kind`` is normally a NodeKind. Any other string is accepted so that
    forms the renderers do not model still reach their error sentinel.
    The meaning of each child position is fixed by ``kind``.

    """

    kind: str
    children: tuple[Expr, ...] = ()


# PEP 695 type aliases
type Atom = (
    Nil
    | Boolean
    | SignedInteger
    | UnsignedInteger
    | Float
    | Rational
    | Character
    | String
    | Symbol
    | QuotedReference
)

type Expr = Atom | Pair | Tuple | List | Mapping | Node

_MODEL_TYPES = (
    Nil,
    Boolean,
    SignedInteger,
    UnsignedInteger,
    Float,
    Rational,
    Character,
    String,
    Symbol,
    QuotedReference,
    Pair,
    Tuple,
    List,
    Mapping,
    Node,
)


def expr(kind: str, *children: Expr) -> Node:
    """Build a Node from positional children.

    Example:
        >>> expr(NodeKind.CALL, Symbol("f"), SignedInteger(1))
        Node(kind=<NodeKind.CALL: 'call'>, children=(Symbol(name='f'), SignedInteger(value=1)))
    """
    return Node(kind, children)


def lift(value: object) -> Expr:
    """Convert a native Python value into the expression model.

    Model values pass through unchanged. Strings become String atoms;
    symbols have to be built explicitly.

    Raises:
        TypeError: if the value has no model counterpart
    """
    if isinstance(value, _MODEL_TYPES):
        return value  # type: ignore[return-value]
    match value:
        case None:
            return Nil()
        case bool():
            return Boolean(value)
        case int():
            return SignedInteger(value)
        case float():
            return Float(value)
        case Fraction():
            return Rational(value.numerator, value.denominator)
        case str():
            return String(value)
        case tuple():
            return Tuple(tuple(lift(v) for v in value))
        case list():
            return List(tuple(lift(v) for v in value))
        case AbcMapping():
            return Mapping(tuple(Pair(lift(k), lift(v)) for k, v in value.items()))
    raise TypeError(f"cannot lift {type(value).__name__} into an expression")


def is_kind(value: object, kind: str) -> bool:
    """Return True if value is a Node of the given kind."""
    return isinstance(value, Node) and value.kind == kind


# Fewest children each kind needs before its positional layout makes sense
MIN_CHILDREN: dict[str, int] = {
    NodeKind.RATIONAL: 2,
    NodeKind.PAIR: 2,
    NodeKind.QUOTE: 1,
    NodeKind.UNQUOTE: 1,
    NodeKind.SPLAT: 1,
    NodeKind.CONDITIONAL: 2,
    NodeKind.ELSEIF: 2,
    NodeKind.LET: 1,
    NodeKind.FUNCTION: 1,
    NodeKind.MACRO: 1,
    NodeKind.LAMBDA: 2,
    NodeKind.ASSIGNMENT: 2,
    NodeKind.INDEX: 1,
    NodeKind.MODULE: 1,
    NodeKind.MEMBER_ACCESS: 2,
    NodeKind.TYPE_ANNOTATION: 1,
    NodeKind.GENERIC: 1,
    NodeKind.CALL: 1,
    NodeKind.MACRO_CALL: 1,
}

# Most children a positional layout shows; absent kinds take any number
MAX_CHILDREN: dict[str, int] = {
    NodeKind.RATIONAL: 2,
    NodeKind.PAIR: 2,
    NodeKind.UNQUOTE: 1,
    NodeKind.SPLAT: 1,
    NodeKind.CONDITIONAL: 3,
    NodeKind.ELSEIF: 3,
    NodeKind.FUNCTION: 2,
    NodeKind.MACRO: 2,
    NodeKind.LAMBDA: 2,
    NodeKind.ASSIGNMENT: 2,
    NodeKind.MODULE: 2,
    NodeKind.MEMBER_ACCESS: 2,
    NodeKind.TYPE_ANNOTATION: 2,
}

_KINDS = frozenset(NodeKind)


def is_supported(node: Node) -> bool:
    """Return True if the renderers have a rule for this node's kind and shape.

    A known kind with too few or too many children is unsupported, so that
    no child is ever dropped from the output.
    """
    if node.kind not in _KINDS:
        return False
    n = len(node.children)
    return MIN_CHILDREN.get(node.kind, 0) <= n <= MAX_CHILDREN.get(node.kind, n)


def block_statements(body: Expr) -> tuple[Expr, ...]:
    """Statements of a body: a block's children, or the body itself."""
    if isinstance(body, Node) and body.kind == NodeKind.BLOCK:
        return body.children
    return (body,)
