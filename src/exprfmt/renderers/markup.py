"""Markup renderer producing a tagged Document.

Makes the same layout decisions as the plain-text renderer, line for line,
but labels every meaningful unit with a tag from the taxonomy. Keywords,
operators, parens and commas are tagged units; newlines and indentation are
bare text fragments. The visible text of the result is therefore identical
to the plain-text rendering of the same tree at the same level.

Like the plain-text renderer it never recurses: forms expand into ``Group``
parts holding ``Pending`` subtrees, and ``_build`` closes each group into a
Tagged unit once its subtrees are finished.

Example:
    >>> from exprfmt.nodes import SignedInteger
    >>> MarkupRenderer().render(SignedInteger(42))
    Tagged(tag='span.constant.number', children=('42',))
"""

from __future__ import annotations

from collections.abc import Iterator

from exprfmt.config import get_render_config
from exprfmt.document import Document, Tagged, interpose, run, tagged
from exprfmt.errors import UnsupportedNodeKindError, error_sentinel
from exprfmt.indent import raw_indent
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
    block_statements,
    is_kind,
    is_supported,
)
from exprfmt.renderers.text import TextRenderer
from exprfmt.renderers.work import Group, Part, Pending
from exprfmt.tags import TAGS, kind_tag, symbol_tag
from exprfmt.utils.logger import get_logger
from exprfmt.utils.text import format_float

logger = get_logger(__name__)

_OPPOSITE = {NodeKind.AND: NodeKind.OR, NodeKind.OR: NodeKind.AND}


def _t(category: str, *children: Document) -> Tagged:
    return tagged(TAGS[category], *children)


def _group(category: str, *parts: Part) -> Group:
    return Group(TAGS[category], list(parts))


def _paren(text: str) -> Tagged:
    return _t("paren", text)


def _reserved(word: str) -> Tagged:
    return _t("reserved", word)


def _op(text: str) -> Tagged:
    return _t("op-misc", text)


def _inline(x: Expr) -> Pending:
    return Pending(x, 0)


_COMMA = (_t("comma", ","),)
_COMMA_SPACE = (_t("comma", ","), " ")


class MarkupRenderer:
    """Render an expression tree to a tagged Document.

    Thread Safety:
        Holds only immutable settings; safe to share across threads.
    """

    __slots__ = ("_width", "_strict", "_text")

    def __init__(self, indent_width: int | None = None, *, strict: bool | None = None) -> None:
        config = get_render_config()
        self._width = config.indent_width if indent_width is None else indent_width
        self._strict = config.strict if strict is None else strict
        # Spells the error sentinel exactly as plain-text mode does
        self._text = TextRenderer(self._width, strict=self._strict)

    def render(self, node: Expr, level: int = 0) -> Document:
        """Render a tree at the given nesting level.

        Returns:
            Document whose visible text equals the plain-text rendering
        """
        doc = self._build(node, level)
        prefix = self._indent(level)
        return run(prefix, doc) if prefix else doc

    def _indent(self, level: int) -> str:
        return raw_indent(level, 0, self._width)

    def _newline(self, level: int) -> list[Part]:
        return ["\n", self._indent(level)]

    def _build(self, node: Expr, level: int) -> Document:
        """Expand the tree with an explicit stack of open groups."""
        result: list[Document] = []
        # (tag, remaining parts, finished children) per open group
        frames: list[tuple[str | None, Iterator[Part], list[Document]]] = [
            (None, iter([Pending(node, level)]), result)
        ]
        while frames:
            tag, parts, done = frames[-1]
            part = next(parts, None)
            if part is None:
                frames.pop()
                if frames:
                    frames[-1][2].append(tagged(tag, *done) if tag else run(*done))
                continue
            if isinstance(part, Pending):
                part = self._expand(part.node, part.level)
            if isinstance(part, Group):
                frames.append((part.tag, iter(part.parts), []))
            else:
                done.append(part)
        return result[0]

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _expand(self, x: Expr, level: int) -> Document | Group:
        match x:
            case Nil():
                return _t("nil", "nothing")
            case Boolean(value=value):
                return _t("bool", "true" if value else "false")
            case SignedInteger(value=value):
                return _t("number", str(value))
            case UnsignedInteger(value=value):
                return _t("number-hex", f"0x{value:x}")
            case Float(value=value):
                return _t("number-decimal", format_float(value))
            case Rational(numerator=n, denominator=d):
                return _t("rational", f"{n}//{d}")
            case Character(value=value):
                return _t("char", f"'{value}'")
            case String(value=value):
                return _t("string", f'"{value}"')
            case Symbol(name=name):
                return self._symbol(name)
            case QuotedReference(inner=Symbol(name=name)):
                return _t("keyword", f":{name}")
            case QuotedReference(inner=inner):
                return _group("quoted", ":", _paren("("), _inline(inner), _paren(")"))
            case Pair(first=first, second=second):
                return self._pair(first, second)
            case Tuple(items=items):
                return _group("tuple", *self._seq("(", items, _COMMA, ")"))
            case List(items=items):
                return _group("vect", *self._seq("[", items, _COMMA, "]"))
            case Mapping(pairs=pairs):
                return self._mapping(pairs, level)
            case Node():
                return self._expand_node(x, level)
            case _:
                return self._unsupported(type(x).__name__, x)

    def _expand_node(self, node: Node, level: int) -> Document | Group:
        if not is_supported(node):
            return self._unsupported(str(node.kind), node)

        c = node.children
        parts: list[Part]
        match node.kind:
            case NodeKind.RATIONAL:
                parts = [_inline(c[0]), _t("op-arithmetic", "//"), _inline(c[1])]
            case NodeKind.PAIR:
                return self._pair(c[0], c[1])
            case NodeKind.TUPLE:
                parts = self._seq("(", c, _COMMA, ")")
            case NodeKind.LIST:
                parts = self._seq("[", c, _COMMA, "]")
            case NodeKind.MAPPING:
                return self._mapping(c, level)
            case NodeKind.QUOTE:
                if len(c) == 1 and isinstance(c[0], Symbol):
                    # Same text and tag as a quoted symbol atom
                    return _t("keyword", f":{c[0].name}")
                parts = [":", *self._seq("(", c, ("\n",), ")")]
            case NodeKind.UNQUOTE:
                if isinstance(c[0], Symbol):
                    parts = ["$", self._symbol(c[0].name)]
                else:
                    parts = ["$", _paren("("), _inline(c[0]), _paren(")")]
            case NodeKind.SPLAT:
                parts = [_inline(c[0]), _op("...")]
            case NodeKind.BLOCK:
                if len(c) == 1:
                    parts = [Pending(c[0], level)]
                else:
                    parts = [_reserved("begin"), *self._body(node, level + 1), *self._end(level)]
            case NodeKind.CONDITIONAL | NodeKind.ELSEIF:
                parts = self._conditional(node, level)
            case NodeKind.COMPARISON:
                parts = self._seq("(", c, (" ",), ")")
            case NodeKind.LET:
                parts = [_reserved("let")]
                if len(c) > 1:
                    parts += [" ", *self._joined(c[1:], _COMMA_SPACE)]
                parts += [*self._body(c[0], level + 1), *self._end(level)]
            case NodeKind.FUNCTION | NodeKind.MACRO:
                parts = [_reserved(str(node.kind)), " ", _inline(c[0])]
                if len(c) == 1:
                    parts += [" ", _reserved("end")]
                else:
                    parts += [*self._body(c[1], level + 1), *self._end(level)]
            case NodeKind.LAMBDA:
                parts = [_inline(c[0]), " ", _op("->"), " ", _inline(c[1])]
            case NodeKind.ASSIGNMENT:
                parts = [_inline(c[0]), " ", _op("="), " ", _inline(c[1])]
            case NodeKind.INDEX:
                parts = [_inline(c[0]), *self._seq("[", c[1:], _COMMA, "]")]
            case NodeKind.RANGE:
                parts = self._joined(c, (_op(":"),))
            case NodeKind.MODULE:
                parts = self._module(c, level)
            case NodeKind.IMPORT | NodeKind.USING:
                dot = (_t("op-dot", "."),)
                parts = [_reserved(str(node.kind)), " ", *self._joined(c, dot)]
            case NodeKind.EXPORT:
                parts = [_reserved("export"), " ", *self._joined(c, _COMMA)]
            case NodeKind.MEMBER_ACCESS:
                parts = [_inline(c[0]), _t("op-dot", "."), self._member(c[1])]
            case NodeKind.TYPE_ANNOTATION:
                parts = [_inline(c[0])] if len(c) > 1 else []
                parts += [_op("::"), _inline(c[-1])]
            case NodeKind.GENERIC:
                parts = [_inline(c[0]), *self._seq("{", c[1:], _COMMA_SPACE, "}")]
            case NodeKind.AND | NodeKind.OR:
                parts = self._logical(node)
            case NodeKind.CALL | NodeKind.MACRO_CALL:
                if node.kind == NodeKind.CALL and c[0] == Symbol("Dict"):
                    return self._mapping(c[1:], level)
                parts = [_inline(c[0]), *self._seq("(", c[1:], _COMMA_SPACE, ")")]
            case NodeKind.TOPLEVEL:
                parts = interpose(tuple(self._newline(level)), [Pending(x, level) for x in c])
            case _:
                return self._unsupported(str(node.kind), node)
        return Group(kind_tag(node.kind), parts)

    # =========================================================================
    # Shared layouts
    # =========================================================================

    def _symbol(self, name: str) -> Tagged:
        return tagged(symbol_tag(name), name)

    def _joined(self, items: tuple[Expr, ...], sep: tuple[Part, ...]) -> list[Part]:
        return interpose(sep, [_inline(item) for item in items])

    def _seq(
        self, open_: str, items: tuple[Expr, ...], sep: tuple[Part, ...], close: str
    ) -> list[Part]:
        return [_paren(open_), *self._joined(items, sep), _paren(close)]

    def _pair(self, first: Expr, second: Expr) -> Group:
        return _group("pair", _inline(first), " ", _op("=>"), " ", _inline(second))

    def _mapping(self, pairs: tuple[Expr, ...], level: int) -> Group:
        entries = [Group(None, [self._indent(level + 1), Pending(p, level + 1)]) for p in pairs]
        return _group(
            "dict",
            self._symbol("Dict"),
            _paren("("),
            "\n",
            *interpose((_t("comma", ","), "\n"), entries),
            _paren(")"),
        )

    def _body(self, body: Expr, level: int) -> list[Part]:
        parts: list[Part] = []
        for statement in block_statements(body):
            parts += [*self._newline(level), Pending(statement, level)]
        return parts

    def _end(self, level: int) -> list[Part]:
        return [*self._newline(level), _reserved("end")]

    def _conditional(self, node: Node, level: int) -> list[Part]:
        keyword = "if" if node.kind == NodeKind.CONDITIONAL else "elseif"
        parts: list[Part] = []
        while True:
            cond, then, *rest = node.children
            parts += [_reserved(keyword), " ", _inline(cond), *self._body(then, level + 1)]
            if not rest:
                break
            alternative = rest[0]
            parts += self._newline(level)
            if is_kind(alternative, NodeKind.ELSEIF) and is_supported(alternative):
                keyword = "elseif"
                node = alternative
                continue
            parts += [_reserved("else"), *self._body(alternative, level + 1)]
            break
        return parts + self._end(level)

    def _module(self, c: tuple[Expr, ...], level: int) -> list[Part]:
        parts: list[Part] = [_reserved("module"), " ", _inline(c[0])]
        forms = block_statements(c[1]) if len(c) > 1 else ()
        for i, form in enumerate(forms):
            if i:
                parts.append("\n")
            parts += [*self._newline(level + 1), Pending(form, level + 1)]
        return parts + self._end(level)

    def _member(self, member: Expr) -> Part:
        if isinstance(member, QuotedReference) and isinstance(member.inner, Symbol):
            return self._symbol(member.inner.name)
        return _inline(member)

    def _logical(self, node: Node) -> list[Part]:
        opposite = _OPPOSITE[NodeKind(node.kind)]
        operands: list[Part] = []
        for operand in node.children:
            if is_kind(operand, opposite):
                operands.append(Group(None, [_paren("("), _inline(operand), _paren(")")]))
            else:
                operands.append(_inline(operand))
        return interpose((" ", _op(str(node.kind)), " "), operands)

    # =========================================================================
    # Errors
    # =========================================================================

    def _unsupported(self, kind: str, x: Expr) -> Tagged:
        fallback = self._text.fallback(x)
        if self._strict:
            raise UnsupportedNodeKindError(kind, fallback)
        logger.warning("No markup rule for %r; emitting error sentinel", kind)
        return _t("error", error_sentinel(fallback))


def render_markup(node: Expr, level: int = 0) -> Document:
    """Render a tree to a tagged Document with the active configuration."""
    return MarkupRenderer().render(node, level)
