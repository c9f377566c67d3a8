"""Free-threading safe: render 1000 trees in parallel."""

from exprfmt import render_many
from exprfmt.nodes import NodeKind, SignedInteger, Symbol, expr

trees = [
    expr(NodeKind.ASSIGNMENT, Symbol(f"x{i}"), expr(NodeKind.RANGE, SignedInteger(1), SignedInteger(i)))
    for i in range(1000)
]

results = render_many(trees, max_workers=8)

print(f"Rendered {len(results)} trees in parallel")
print("First:", results[0])
print("Last:", results[-1])
