"""Traversal adapter over parser ASTs."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


def ast_nodes(ast: Any) -> Iterator[Any]:
    """Yield every node of *ast* in pre-order.

    Accepts a tree-sitter ``Tree`` or ``Node``, or a plain sequence of
    nodes produced by a custom parser.
    """
    if isinstance(ast, (list, tuple)):
        yield from ast
        return

    root = getattr(ast, "root_node", ast)
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
