"""Render one expression tree as text and as highlighted HTML."""

from exprfmt import render, render_html
from exprfmt.nodes import NodeKind, SignedInteger, Symbol, expr

tree = expr(
    NodeKind.FUNCTION,
    expr(NodeKind.CALL, Symbol("double"), Symbol("x")),
    expr(NodeKind.CALL, Symbol("*"), SignedInteger(2), Symbol("x")),
)
print(render(tree))
print(render_html(tree))
