"""Tests for the top-level exprfmt API."""

from __future__ import annotations

import pytest

import exprfmt
from exprfmt import (
    RenderConfig,
    Tagged,
    render,
    render_config_context,
    render_html,
    render_many,
    render_markup,
)
from exprfmt.nodes import (
    NodeKind,
    QuotedReference,
    SignedInteger,
    String,
    Symbol,
    Tuple,
    UnsignedInteger,
    expr,
)


class TestScenarios:
    """End-to-end rendering examples."""

    def test_integer(self) -> None:
        assert render(SignedInteger(42)) == "42"

    def test_unsigned(self) -> None:
        assert render(UnsignedInteger(255)) == "0xff"

    def test_string(self) -> None:
        assert render(String("hi")) == '"hi"'

    def test_symbol(self) -> None:
        assert render(Symbol("x")) == "x"
        assert render_markup(Symbol("x")) == Tagged("span.variable", ("x",))

    def test_tuple(self) -> None:
        assert render(Tuple((SignedInteger(1), SignedInteger(2)))) == "(1,2)"

    def test_conditional(self) -> None:
        tree = expr(NodeKind.CONDITIONAL, Symbol("cond"), Symbol("A"), Symbol("B"))
        assert render(tree) == "if cond\n  A\nelse\n  B\nend"

    def test_unsupported(self) -> None:
        text = render(expr("weird", Symbol("x")))
        assert "ERROR: could not print" in text
        assert text.endswith(":ERROR")

    def test_html_function(self) -> None:
        tree = expr(NodeKind.ASSIGNMENT, Symbol("x"), QuotedReference(Symbol("a")))
        assert render_html(tree) == (
            '<span class="def">'
            '<span class="variable">x</span> '
            '<span class="operator misc">=</span> '
            '<span class="constant keyword">:a</span>'
            "</span>"
        )


class TestRenderMany:
    TREES = [SignedInteger(i) for i in range(50)] + [UnsignedInteger(255)]

    def test_text_order_preserved(self) -> None:
        results = render_many(self.TREES, max_workers=4)
        assert results == [str(i) for i in range(50)] + ["0xff"]

    def test_html_mode(self) -> None:
        results = render_many([Symbol("x")], mode="html")
        assert results == ['<span class="variable">x</span>']

    def test_markup_mode(self) -> None:
        assert render_many([SignedInteger(1)], mode="markup") == [
            Tagged("span.constant.number", ("1",))
        ]

    def test_config_reaches_workers(self) -> None:
        tree = expr(NodeKind.BLOCK, Symbol("a"), Symbol("b"))
        with render_config_context(RenderConfig(indent_width=4)):
            results = render_many([tree, tree], max_workers=2)
        assert results == ["begin\n    a\n    b\nend"] * 2

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError, match="Unknown render mode"):
            render_many([], mode="pdf")  # type: ignore[arg-type]


class TestExports:
    def test_all_names_resolve(self) -> None:
        for name in exprfmt.__all__:
            assert hasattr(exprfmt, name), name

    def test_version(self) -> None:
        assert isinstance(exprfmt.__version__, str)
