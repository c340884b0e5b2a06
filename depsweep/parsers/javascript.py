"""Parser for JavaScript sources (ES modules, CommonJS, JSX) via tree-sitter."""

from __future__ import annotations

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Parser, Tree

from depsweep.exceptions import SourceParseError
from depsweep.nodes import ast_nodes
from depsweep.registry import OutputKind, ParserKind, register_parser

JS_LANGUAGE = Language(tsjs.language())


def ensure_valid_syntax(tree: Tree, file_path: str) -> Tree:
    """Raise ``SourceParseError`` at the first error or missing node of *tree*."""
    if not tree.root_node.has_error:
        return tree
    for node in ast_nodes(tree):
        if node.is_error or node.is_missing:
            row, column = node.start_point
            raise SourceParseError(file_path, row + 1, column + 1)
    raise SourceParseError(file_path, 1, 1)


class JavaScriptParser:
    name = "javascript"
    kind = ParserKind.JAVASCRIPT
    output = OutputKind.AST

    def __init__(self) -> None:
        self._parser = Parser(JS_LANGUAGE)

    def parse(
        self, content: str, file_path: str, deps: tuple[str, ...], root_dir: str
    ) -> Tree:
        tree = self._parser.parse(content.encode("utf-8"))
        return ensure_valid_syntax(tree, file_path)


register_parser(JavaScriptParser())
