"""Tag taxonomy for syntax-highlighted markup.

Maps semantic categories to tag paths. A tag path is a CSS-selector-like
string: an optional element name followed by ``#id`` and ``.class``
segments (``span.constant.number``). The flattener decomposes it into an
element with attributes.

Both tables are read-only views built once at import time.

Example:
    >>> TAGS["number"]
    'span.constant.number'
    >>> classify_symbol("+"), classify_symbol("Int"), classify_symbol("x")
    ('op-arithmetic', 'variable-type', 'variable')
"""

from __future__ import annotations

from types import MappingProxyType

from exprfmt.nodes import NodeKind

TAGS = MappingProxyType(
    {
        # Punctuation
        "paren": "span.punctuation.paren",
        "comma": "span.punctuation.comma",
        # Constants
        "nil": "span.constant.nil",
        "bool": "span.constant.bool",
        "number": "span.constant.number",
        "number-hex": "span.constant.number.hex",
        "number-decimal": "span.constant.number.decimal",
        "rational": "span.constant.rational",
        "char": "span.constant.char",
        "string": "span.constant.string",
        "keyword": "span.constant.keyword",
        # Names
        "variable": "span.variable",
        "variable-type": "span.variable.type",
        "reserved": "span.reserved",
        "quoted": "span.quoted",
        "unquoted": "span.unquoted",
        # Operators
        "op-dot": "span.operator.dot",
        "op-misc": "span.operator.misc",
        "op-arithmetic": "span.operator.arithmetic",
        "op-bitwise": "span.operator.bitmath",
        "op-comparison": "span.operator.comparison",
        # Collections
        "pair": "span.ds.pair",
        "tuple": "span.ds.tuple",
        "vect": "span.ds.vect",
        "dict": "span.ds.dict",
        # Structural forms
        "block": "span.block",
        "if": "span.if",
        "assignment": "span.def",
        "comparison": "span.comparison",
        "function": "span.function",
        "macro": "span.macro",
        "let": "span.let",
        "lambda": "span.lambda",
        "splat": "span.splat",
        "index": "span.ref",
        "range": "span.range",
        "module": "span.module",
        "import": "span.import",
        "export": "span.export",
        "member": "span.access",
        "type-annotation": "span.typestring",
        "generic": "span.curly",
        "logical": "span.logical",
        "call": "span.call",
        "macro-call": "span.macrocall",
        "toplevel": "span.toplevel",
        "error": "span.error",
    }
)

KIND_TAGS = MappingProxyType(
    {
        NodeKind.RATIONAL: "rational",
        NodeKind.PAIR: "pair",
        NodeKind.TUPLE: "tuple",
        NodeKind.LIST: "vect",
        NodeKind.MAPPING: "dict",
        NodeKind.QUOTE: "quoted",
        NodeKind.UNQUOTE: "unquoted",
        NodeKind.SPLAT: "splat",
        NodeKind.BLOCK: "block",
        NodeKind.CONDITIONAL: "if",
        NodeKind.ELSEIF: "if",
        NodeKind.COMPARISON: "comparison",
        NodeKind.LET: "let",
        NodeKind.FUNCTION: "function",
        NodeKind.MACRO: "macro",
        NodeKind.LAMBDA: "lambda",
        NodeKind.ASSIGNMENT: "assignment",
        NodeKind.INDEX: "index",
        NodeKind.RANGE: "range",
        NodeKind.MODULE: "module",
        NodeKind.IMPORT: "import",
        NodeKind.USING: "import",
        NodeKind.EXPORT: "export",
        NodeKind.MEMBER_ACCESS: "member",
        NodeKind.TYPE_ANNOTATION: "type-annotation",
        NodeKind.GENERIC: "generic",
        NodeKind.AND: "logical",
        NodeKind.OR: "logical",
        NodeKind.CALL: "call",
        NodeKind.MACRO_CALL: "macro-call",
        NodeKind.TOPLEVEL: "toplevel",
    }
)

ARITHMETIC_OPERATORS = frozenset({"+", "-", "*", "/", "\\", "^", "%", "//"})
BITWISE_OPERATORS = frozenset({"~", "&", "|", "$", ">>", "<<", ">>>"})
COMPARISON_OPERATORS = frozenset({"==", "!=", "<", ">", "<=", ">="})
MISC_OPERATORS = frozenset({":", ".", "::", "=>", "..."})

# Checked in order; first match wins
_OPERATOR_CLASSES = (
    (ARITHMETIC_OPERATORS, "op-arithmetic"),
    (BITWISE_OPERATORS, "op-bitwise"),
    (COMPARISON_OPERATORS, "op-comparison"),
    (MISC_OPERATORS, "op-misc"),
)


def classify_symbol(name: str) -> str:
    """Return the taxonomy category for a bare symbol."""
    for operators, category in _OPERATOR_CLASSES:
        if name in operators:
            return category
    if name[:1].isupper():
        return "variable-type"
    return "variable"


def symbol_tag(name: str) -> str:
    """Return the tag path for a bare symbol."""
    return TAGS[classify_symbol(name)]


def kind_tag(kind: str) -> str:
    """Return the tag path for a node kind, or the error tag if unknown."""
    return TAGS[KIND_TAGS.get(kind, "error")]


__all__ = [
    "ARITHMETIC_OPERATORS",
    "BITWISE_OPERATORS",
    "COMPARISON_OPERATORS",
    "KIND_TAGS",
    "MISC_OPERATORS",
    "TAGS",
    "classify_symbol",
    "kind_tag",
    "symbol_tag",
]
