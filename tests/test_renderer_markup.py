"""Tests for MarkupRenderer and HtmlRenderer."""

from __future__ import annotations

import pytest

from exprfmt.document import Run, Tagged
from exprfmt.errors import error_sentinel
from exprfmt.flatten import flatten, text_content
from exprfmt.nodes import (
    Node,
    NodeKind,
    Pair,
    QuotedReference,
    SignedInteger,
    String,
    Symbol,
    Tuple,
    UnsignedInteger,
    expr,
)
from exprfmt.renderers.html import HtmlRenderer, render_html
from exprfmt.renderers.markup import MarkupRenderer, render_markup
from exprfmt.renderers.text import render_text
from exprfmt.tags import TAGS, kind_tag

S = Symbol
I = SignedInteger  # noqa: E741


def call(name: str, *args) -> Node:
    return expr(NodeKind.CALL, S(name), *args)


def tags_in(doc) -> list[str]:
    """Every tag path in a document, depth first."""
    found: list[str] = []
    stack = [doc]
    while stack:
        item = stack.pop()
        if isinstance(item, Tagged):
            found.append(item.tag)
            stack.extend(reversed(item.children))
        elif isinstance(item, Run):
            stack.extend(reversed(item.children))
    return found


# One well-formed sample per kind
SAMPLES: dict[NodeKind, Node] = {
    NodeKind.RATIONAL: expr(NodeKind.RATIONAL, I(1), I(2)),
    NodeKind.PAIR: expr(NodeKind.PAIR, S("a"), I(1)),
    NodeKind.TUPLE: expr(NodeKind.TUPLE, I(1), I(2)),
    NodeKind.LIST: expr(NodeKind.LIST, I(1), I(2)),
    NodeKind.MAPPING: expr(NodeKind.MAPPING, expr(NodeKind.PAIR, String("k"), I(1))),
    NodeKind.QUOTE: expr(NodeKind.QUOTE, call("f", S("x"))),
    NodeKind.UNQUOTE: expr(NodeKind.UNQUOTE, S("x")),
    NodeKind.SPLAT: expr(NodeKind.SPLAT, S("xs")),
    NodeKind.BLOCK: expr(NodeKind.BLOCK, S("a"), S("b")),
    NodeKind.CONDITIONAL: expr(NodeKind.CONDITIONAL, S("c"), S("a"), S("b")),
    NodeKind.ELSEIF: expr(NodeKind.ELSEIF, S("c"), S("a")),
    NodeKind.COMPARISON: expr(NodeKind.COMPARISON, S("a"), S("<"), S("b")),
    NodeKind.LET: expr(NodeKind.LET, S("x"), expr(NodeKind.ASSIGNMENT, S("x"), I(1))),
    NodeKind.FUNCTION: expr(NodeKind.FUNCTION, call("f", S("x")), S("x")),
    NodeKind.MACRO: expr(NodeKind.MACRO, call("m", S("ex")), S("ex")),
    NodeKind.LAMBDA: expr(NodeKind.LAMBDA, S("x"), S("x")),
    NodeKind.ASSIGNMENT: expr(NodeKind.ASSIGNMENT, S("x"), I(1)),
    NodeKind.INDEX: expr(NodeKind.INDEX, S("a"), I(1)),
    NodeKind.RANGE: expr(NodeKind.RANGE, I(1), I(10)),
    NodeKind.MODULE: expr(NodeKind.MODULE, S("M"), expr(NodeKind.BLOCK, S("x"), S("y"))),
    NodeKind.IMPORT: expr(NodeKind.IMPORT, S("Base"), S("Math")),
    NodeKind.USING: expr(NodeKind.USING, S("Foo")),
    NodeKind.EXPORT: expr(NodeKind.EXPORT, S("f"), S("g")),
    NodeKind.MEMBER_ACCESS: expr(NodeKind.MEMBER_ACCESS, S("a"), QuotedReference(S("b"))),
    NodeKind.TYPE_ANNOTATION: expr(NodeKind.TYPE_ANNOTATION, S("x"), S("Int")),
    NodeKind.GENERIC: expr(NodeKind.GENERIC, S("Vector"), S("Int")),
    NodeKind.AND: expr(NodeKind.AND, S("a"), S("b")),
    NodeKind.OR: expr(NodeKind.OR, S("a"), S("b")),
    NodeKind.CALL: call("f", S("x"), I(1)),
    NodeKind.MACRO_CALL: expr(NodeKind.MACRO_CALL, S("@m"), S("x")),
    NodeKind.TOPLEVEL: expr(NodeKind.TOPLEVEL, S("x"), S("y")),
}


class TestMarkupAtoms:
    """Atoms become single tagged units."""

    def test_integer(self) -> None:
        doc = render_markup(I(42))
        assert doc == Tagged("span.constant.number", ("42",))

    def test_hex(self) -> None:
        assert render_markup(UnsignedInteger(255)) == Tagged("span.constant.number.hex", ("0xff",))

    def test_symbol_classification(self) -> None:
        assert render_markup(S("x")) == Tagged("span.variable", ("x",))
        assert render_markup(S("Int")) == Tagged("span.variable.type", ("Int",))
        assert render_markup(S("+")) == Tagged("span.operator.arithmetic", ("+",))

    def test_quoted_symbol_is_keyword(self) -> None:
        assert render_markup(QuotedReference(S("a"))) == Tagged("span.constant.keyword", (":a",))

    def test_level_adds_indent_fragment(self) -> None:
        doc = render_markup(I(42), 1)
        assert doc == Run(("  ", Tagged("span.constant.number", ("42",))))


class TestMarkupForms:
    """Node kinds carry their structural tag."""

    @pytest.mark.parametrize("kind", list(NodeKind))
    def test_every_kind_has_its_tag(self, kind: NodeKind) -> None:
        doc = render_markup(SAMPLES[kind])
        assert isinstance(doc, Tagged)
        assert doc.tag == kind_tag(kind)

    @pytest.mark.parametrize("kind", list(NodeKind))
    def test_every_kind_matches_plain_text(self, kind: NodeKind) -> None:
        node = SAMPLES[kind]
        for level in (0, 1, 3):
            assert text_content(render_markup(node, level)) == render_text(node, level)

    def test_tuple_html(self) -> None:
        html = render_html(Tuple((I(1), I(2))))
        assert html == (
            '<span class="ds tuple">'
            '<span class="punctuation paren">(</span>'
            '<span class="constant number">1</span>'
            '<span class="punctuation comma">,</span>'
            '<span class="constant number">2</span>'
            '<span class="punctuation paren">)</span>'
            "</span>"
        )

    def test_conditional_keywords_are_reserved(self) -> None:
        doc = render_markup(SAMPLES[NodeKind.CONDITIONAL])
        reserved = [t for t in tags_in(doc) if t == TAGS["reserved"]]
        assert len(reserved) == 3  # if, else, end

    def test_call_punctuation(self) -> None:
        tags = tags_in(render_markup(call("f", S("x"), S("y"))))
        assert tags.count(TAGS["paren"]) == 2
        assert tags.count(TAGS["comma"]) == 1

    def test_comparison_operators_classified(self) -> None:
        tags = tags_in(render_markup(SAMPLES[NodeKind.COMPARISON]))
        assert TAGS["op-comparison"] in tags

    def test_mixed_logical_gets_paren_tags(self) -> None:
        node = expr(NodeKind.AND, expr(NodeKind.OR, S("a"), S("b")), S("c"))
        doc = render_markup(node)
        assert text_content(doc) == "(a || b) && c"
        assert tags_in(doc).count(TAGS["paren"]) == 2

    def test_same_logical_has_no_parens(self) -> None:
        node = expr(NodeKind.AND, S("a"), expr(NodeKind.AND, S("b"), S("c")))
        assert TAGS["paren"] not in tags_in(render_markup(node))

    def test_member_access_decomposed(self) -> None:
        inner = expr(NodeKind.MEMBER_ACCESS, S("a"), QuotedReference(S("b")))
        node = expr(NodeKind.MEMBER_ACCESS, inner, QuotedReference(S("c")))
        doc = render_markup(node)
        assert text_content(doc) == "a.b.c"
        assert tags_in(doc).count(TAGS["op-dot"]) == 2

    def test_mapping_entries_indented(self) -> None:
        node = expr(NodeKind.MAPPING, Pair(S("a"), I(1)), Pair(S("b"), I(2)))
        assert text_content(render_markup(node, 1)) == "  Dict(\n    a => 1,\n    b => 2)"


class TestMarkupErrors:
    """Unsupported kinds become tagged sentinels."""

    def test_unsupported_kind(self) -> None:
        doc = render_markup(Node("weird", (I(1),)))
        assert doc == Tagged(TAGS["error"], (error_sentinel("(weird 1)"),))

    def test_unsupported_inside_call(self) -> None:
        doc = render_markup(call("f", Node("weird")))
        assert text_content(doc) == "f(ERROR: could not print (weird) :ERROR)"


class TestHtmlRenderer:
    """HtmlRenderer settings."""

    def test_symbol(self) -> None:
        assert HtmlRenderer().render(S("x")) == '<span class="variable">x</span>'

    def test_no_escaping_by_default(self) -> None:
        html = HtmlRenderer().render(String("<b>"))
        assert '"<b>"' in html

    def test_escaping(self) -> None:
        html = HtmlRenderer(escape=True).render(String("<b>"))
        assert html == '<span class="constant string">&quot;&lt;b&gt;&quot;</span>'

    def test_indent_width(self) -> None:
        renderer = MarkupRenderer(4)
        doc = renderer.render(SAMPLES[NodeKind.BLOCK])
        assert text_content(doc) == "begin\n    a\n    b\nend"


class TestMarkupDeepTrees:
    """Deep trees build and flatten without recursion."""

    def test_nested_calls_match_text(self) -> None:
        tree = S("x")
        for _ in range(2000):
            tree = call("f", tree)
        assert text_content(render_markup(tree)) == render_text(tree)

    def test_nested_calls_html(self) -> None:
        tree = S("x")
        for _ in range(2000):
            tree = call("f", tree)
        html = render_html(tree)
        assert html.count('<span class="punctuation paren">(</span>') == 2000
        assert html.count('<span class="call">') == 2000

    def test_nested_logical(self) -> None:
        tree = S("x")
        for i in range(1000):
            tree = expr(NodeKind.AND if i % 2 else NodeKind.OR, tree, S("y"))
        assert text_content(render_markup(tree)) == render_text(tree)


class TestQuoteTags:
    """Equal text gets equal highlighting."""

    def test_quoted_symbol_node_is_keyword(self) -> None:
        node = expr(NodeKind.QUOTE, S("x"))
        assert render_markup(node) == render_markup(QuotedReference(S("x")))
        assert render_markup(node) == Tagged(TAGS["keyword"], (":x",))
