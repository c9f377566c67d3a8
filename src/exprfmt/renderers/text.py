"""Plain-text renderer using StringBuilder pattern.

Renders an expression tree to canonical, indented source text.

Layout protocol:
``render(x, level)`` writes the indentation for ``level`` and then the form.
Internally every ``_expand*`` method assumes the cursor already sits at
that indentation; any further lines it starts carry their own absolute
indentation. Block bodies are expanded at ``level + 1``; inline positions
(call arguments, collection elements, right-hand sides) at 0.

Expansion never recurses: each form becomes a list of text fragments and
``Pending`` subtrees, and ``_drive`` works through them with an explicit
stack. Arbitrarily deep trees render without hitting the recursion limit.

Thread Safety:
Renderers hold only immutable settings. Each render() call uses its own
StringBuilder and stack, so one instance can be shared across threads.
"""

from __future__ import annotations

from exprfmt.config import get_render_config
from exprfmt.errors import SENTINEL_PREFIX, SENTINEL_SUFFIX, UnsupportedNodeKindError
from exprfmt.indent import indent_prefix
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
from exprfmt.renderers.work import Pending
from exprfmt.stringbuilder import StringBuilder
from exprfmt.utils.logger import get_logger
from exprfmt.utils.text import format_float

logger = get_logger(__name__)

_OPPOSITE = {NodeKind.AND: NodeKind.OR, NodeKind.OR: NodeKind.AND}

type _Part = str | Pending


def _inline(x: Expr) -> Pending:
    return Pending(x, 0)


class TextRenderer:
    """Render an expression tree to plain text.

    Usage:
        >>> from exprfmt.nodes import NodeKind, Symbol, expr
        >>> tree = expr(NodeKind.CONDITIONAL, Symbol("cond"), Symbol("A"), Symbol("B"))
        >>> print(TextRenderer().render(tree))
        if cond
          A
        else
          B
        end

    Unsupported node kinds render as ``ERROR: could not print ... :ERROR``
    at their position unless ``strict`` is set.
    """

    __slots__ = ("_width", "_strict")

    def __init__(self, indent_width: int | None = None, *, strict: bool | None = None) -> None:
        """Initialize renderer.

        Args:
            indent_width: Spaces per level (defaults to RenderConfig.indent_width)
            strict: Raise on unsupported kinds (defaults to RenderConfig.strict)
        """
        config = get_render_config()
        self._width = config.indent_width if indent_width is None else indent_width
        self._strict = config.strict if strict is None else strict

    def render(self, node: Expr, level: int = 0) -> str:
        """Render a tree at the given nesting level.

        Args:
            node: Atom, container literal or Node
            level: Nesting level of the first line

        Returns:
            Rendered text, without a trailing newline
        """
        sb = StringBuilder()
        self._drive([self._indent(level), Pending(node, level)], sb, self._strict)
        return sb.build()

    def fallback(self, x: Expr) -> str:
        """Spell an unsupported node as ``(kind child ...)``; other values use repr.

        Nested unsupported children show as sentinels and never raise.
        """
        sb = StringBuilder()
        self._drive(self._fallback_parts(x), sb, False)
        return sb.build()

    def _indent(self, level: int) -> str:
        return indent_prefix(level, self._width)

    def _newline(self, level: int) -> list[_Part]:
        return ["\n", self._indent(level)]

    def _drive(self, parts: list[_Part], sb: StringBuilder, strict: bool) -> None:
        stack = parts[::-1]
        while stack:
            part = stack.pop()
            if isinstance(part, str):
                sb.append(part)
            else:
                stack.extend(reversed(self._expand(part.node, part.level, strict)))

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _expand(self, x: Expr, level: int, strict: bool) -> list[_Part]:
        match x:
            case Nil():
                return ["nothing"]
            case Boolean(value=value):
                return ["true" if value else "false"]
            case SignedInteger(value=value):
                return [str(value)]
            case UnsignedInteger(value=value):
                return [f"0x{value:x}"]
            case Float(value=value):
                return [format_float(value)]
            case Rational(numerator=n, denominator=d):
                return [f"{n}//{d}"]
            case Character(value=value):
                return [f"'{value}'"]
            case String(value=value):
                return [f'"{value}"']
            case Symbol(name=name):
                return [name]
            case QuotedReference(inner=Symbol(name=name)):
                return [f":{name}"]
            case QuotedReference(inner=inner):
                return [":(", _inline(inner), ")"]
            case Pair(first=first, second=second):
                return self._pair(first, second)
            case Tuple(items=items):
                return self._seq("(", items, ",", ")")
            case List(items=items):
                return self._seq("[", items, ",", "]")
            case Mapping(pairs=pairs):
                return self._mapping(pairs, level)
            case Node():
                return self._expand_node(x, level, strict)
            case _:
                return self._unsupported(type(x).__name__, x, strict)

    def _expand_node(self, node: Node, level: int, strict: bool) -> list[_Part]:
        if not is_supported(node):
            return self._unsupported(str(node.kind), node, strict)

        c = node.children
        match node.kind:
            case NodeKind.RATIONAL:
                return [_inline(c[0]), "//", _inline(c[1])]
            case NodeKind.PAIR:
                return self._pair(c[0], c[1])
            case NodeKind.TUPLE:
                return self._seq("(", c, ",", ")")
            case NodeKind.LIST:
                return self._seq("[", c, ",", "]")
            case NodeKind.MAPPING:
                return self._mapping(c, level)
            case NodeKind.QUOTE:
                if len(c) == 1 and isinstance(c[0], Symbol):
                    return [f":{c[0].name}"]
                return [":", *self._seq("(", c, "\n", ")")]
            case NodeKind.UNQUOTE:
                if isinstance(c[0], Symbol):
                    return [f"${c[0].name}"]
                return ["$(", _inline(c[0]), ")"]
            case NodeKind.SPLAT:
                return [_inline(c[0]), "..."]
            case NodeKind.BLOCK:
                if len(c) == 1:
                    return [Pending(c[0], level)]
                return ["begin", *self._body(node, level + 1), *self._end(level)]
            case NodeKind.CONDITIONAL | NodeKind.ELSEIF:
                return self._conditional(node, level)
            case NodeKind.COMPARISON:
                return self._seq("(", c, " ", ")")
            case NodeKind.LET:
                parts: list[_Part] = ["let"]
                if len(c) > 1:
                    parts += [" ", *self._joined(c[1:], ", ")]
                return [*parts, *self._body(c[0], level + 1), *self._end(level)]
            case NodeKind.FUNCTION | NodeKind.MACRO:
                parts = [f"{node.kind} ", _inline(c[0])]
                if len(c) == 1:
                    return [*parts, " end"]
                return [*parts, *self._body(c[1], level + 1), *self._end(level)]
            case NodeKind.LAMBDA:
                return [_inline(c[0]), " -> ", _inline(c[1])]
            case NodeKind.ASSIGNMENT:
                return [_inline(c[0]), " = ", _inline(c[1])]
            case NodeKind.INDEX:
                return [_inline(c[0]), *self._seq("[", c[1:], ",", "]")]
            case NodeKind.RANGE:
                return self._joined(c, ":")
            case NodeKind.MODULE:
                return self._module(c, level)
            case NodeKind.IMPORT | NodeKind.USING:
                return [f"{node.kind} ", *self._joined(c, ".")]
            case NodeKind.EXPORT:
                return ["export ", *self._joined(c, ",")]
            case NodeKind.MEMBER_ACCESS:
                return [_inline(c[0]), ".", self._member(c[1])]
            case NodeKind.TYPE_ANNOTATION:
                owner = [_inline(c[0])] if len(c) > 1 else []
                return [*owner, "::", _inline(c[-1])]
            case NodeKind.GENERIC:
                return [_inline(c[0]), *self._seq("{", c[1:], ", ", "}")]
            case NodeKind.AND | NodeKind.OR:
                return self._logical(node)
            case NodeKind.CALL | NodeKind.MACRO_CALL:
                if node.kind == NodeKind.CALL and c[0] == Symbol("Dict"):
                    return self._mapping(c[1:], level)
                return [_inline(c[0]), *self._seq("(", c[1:], ", ", ")")]
            case NodeKind.TOPLEVEL:
                parts = []
                for i, child in enumerate(c):
                    if i:
                        parts += self._newline(level)
                    parts.append(Pending(child, level))
                return parts
        return self._unsupported(str(node.kind), node, strict)

    # =========================================================================
    # Shared layouts
    # =========================================================================

    def _joined(self, items: tuple[Expr, ...], sep: str) -> list[_Part]:
        parts: list[_Part] = []
        for i, item in enumerate(items):
            if i:
                parts.append(sep)
            parts.append(_inline(item))
        return parts

    def _seq(self, open_: str, items: tuple[Expr, ...], sep: str, close: str) -> list[_Part]:
        return [open_, *self._joined(items, sep), close]

    def _pair(self, first: Expr, second: Expr) -> list[_Part]:
        return [_inline(first), " => ", _inline(second)]

    def _mapping(self, pairs: tuple[Expr, ...], level: int) -> list[_Part]:
        parts: list[_Part] = ["Dict(\n"]
        for i, pair in enumerate(pairs):
            if i:
                parts.append(",\n")
            parts += [self._indent(level + 1), Pending(pair, level + 1)]
        parts.append(")")
        return parts

    def _body(self, body: Expr, level: int) -> list[_Part]:
        """One line per statement at level; block bodies are unwrapped."""
        parts: list[_Part] = []
        for statement in block_statements(body):
            parts += [*self._newline(level), Pending(statement, level)]
        return parts

    def _end(self, level: int) -> list[_Part]:
        return [*self._newline(level), "end"]

    def _conditional(self, node: Node, level: int) -> list[_Part]:
        keyword = "if" if node.kind == NodeKind.CONDITIONAL else "elseif"
        parts: list[_Part] = []
        while True:
            cond, then, *rest = node.children
            parts += [f"{keyword} ", _inline(cond), *self._body(then, level + 1)]
            if not rest:
                break
            alternative = rest[0]
            parts += self._newline(level)
            if is_kind(alternative, NodeKind.ELSEIF) and is_supported(alternative):
                keyword = "elseif"
                node = alternative
                continue
            parts += ["else", *self._body(alternative, level + 1)]
            break
        return parts + self._end(level)

    def _module(self, c: tuple[Expr, ...], level: int) -> list[_Part]:
        parts: list[_Part] = ["module ", _inline(c[0])]
        forms = block_statements(c[1]) if len(c) > 1 else ()
        for i, form in enumerate(forms):
            if i:
                parts.append("\n")
            parts += [*self._newline(level + 1), Pending(form, level + 1)]
        return parts + self._end(level)

    def _member(self, member: Expr) -> _Part:
        if isinstance(member, QuotedReference) and isinstance(member.inner, Symbol):
            return member.inner.name
        return _inline(member)

    def _logical(self, node: Node) -> list[_Part]:
        opposite = _OPPOSITE[NodeKind(node.kind)]
        parts: list[_Part] = []
        for i, operand in enumerate(node.children):
            if i:
                parts.append(f" {node.kind} ")
            if is_kind(operand, opposite):
                parts += ["(", _inline(operand), ")"]
            else:
                parts.append(_inline(operand))
        return parts

    # =========================================================================
    # Errors
    # =========================================================================

    def _fallback_parts(self, x: Expr) -> list[_Part]:
        if not isinstance(x, Node):
            return [repr(x)]
        parts: list[_Part] = [f"({x.kind}"]
        for child in x.children:
            parts += [" ", _inline(child)]
        parts.append(")")
        return parts

    def _unsupported(self, kind: str, x: Expr, strict: bool) -> list[_Part]:
        if strict:
            raise UnsupportedNodeKindError(kind, self.fallback(x))
        logger.warning("No rendering rule for %r; emitting error sentinel", kind)
        return [SENTINEL_PREFIX, *self._fallback_parts(x), SENTINEL_SUFFIX]


def render_text(node: Expr, level: int = 0) -> str:
    """Render a tree to plain text with the active configuration."""
    return TextRenderer().render(node, level)
