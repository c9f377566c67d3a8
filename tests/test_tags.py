"""Tests for the tag taxonomy and symbol classification."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from exprfmt.nodes import NodeKind
from exprfmt.tags import (
    ARITHMETIC_OPERATORS,
    BITWISE_OPERATORS,
    COMPARISON_OPERATORS,
    KIND_TAGS,
    MISC_OPERATORS,
    TAGS,
    classify_symbol,
    kind_tag,
    symbol_tag,
)

OPERATORS = ARITHMETIC_OPERATORS | BITWISE_OPERATORS | COMPARISON_OPERATORS | MISC_OPERATORS


class TestTaxonomy:
    """Static tables."""

    def test_spec_categories_present(self) -> None:
        for category in (
            "paren", "comma", "nil", "bool", "number", "number-hex", "number-decimal",
            "rational", "char", "string", "keyword", "variable", "variable-type",
            "reserved", "quoted", "unquoted", "op-dot", "op-misc", "op-arithmetic",
            "op-bitwise", "op-comparison", "pair", "tuple", "vect", "dict", "block",
            "if", "assignment", "comparison", "function", "macro",
        ):  # fmt: skip
            assert category in TAGS

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            TAGS["paren"] = "span.other"  # type: ignore[index]

    def test_every_kind_has_one_tag(self) -> None:
        assert set(KIND_TAGS) == set(NodeKind)
        for category in KIND_TAGS.values():
            assert category in TAGS

    def test_kind_tag_plain_string(self) -> None:
        assert kind_tag("call") == TAGS["call"]

    def test_unknown_kind_gets_error_tag(self) -> None:
        assert kind_tag("weird") == TAGS["error"]

    def test_tag_paths_are_spans(self) -> None:
        assert all(path.startswith("span.") for path in TAGS.values())


class TestClassifySymbol:
    """Symbol coloring."""

    @pytest.mark.parametrize(
        ("name", "category"),
        [
            ("+", "op-arithmetic"),
            ("//", "op-arithmetic"),
            ("\\", "op-arithmetic"),
            ("$", "op-bitwise"),
            (">>>", "op-bitwise"),
            ("==", "op-comparison"),
            ("<=", "op-comparison"),
            ("::", "op-misc"),
            ("...", "op-misc"),
            ("=>", "op-misc"),
            ("Int", "variable-type"),
            ("x", "variable"),
            ("_private", "variable"),
            ("", "variable"),
        ],
    )
    def test_classify(self, name: str, category: str) -> None:
        assert classify_symbol(name) == category

    def test_operator_sets_are_disjoint(self) -> None:
        sets = [ARITHMETIC_OPERATORS, BITWISE_OPERATORS, COMPARISON_OPERATORS, MISC_OPERATORS]
        assert sum(len(s) for s in sets) == len(OPERATORS)

    def test_symbol_tag(self) -> None:
        assert symbol_tag("x") == "span.variable"
        assert symbol_tag("Vector") == "span.variable.type"

    @given(st.text(min_size=1, max_size=8))
    def test_non_operators_are_variables(self, name: str) -> None:
        if name in OPERATORS:
            return
        assert classify_symbol(name) in {"variable", "variable-type"}
