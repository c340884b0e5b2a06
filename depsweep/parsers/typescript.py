"""Parser for TypeScript sources; ``.tsx`` files use the TSX grammar."""

from __future__ import annotations

from pathlib import Path

import tree_sitter_typescript as tsts
from tree_sitter import Language, Parser, Tree

from depsweep.parsers.javascript import ensure_valid_syntax
from depsweep.registry import OutputKind, ParserKind, register_parser

TS_LANGUAGE = Language(tsts.language_typescript())
TSX_LANGUAGE = Language(tsts.language_tsx())


class TypeScriptParser:
    name = "typescript"
    kind = ParserKind.TYPESCRIPT
    output = OutputKind.AST

    def __init__(self) -> None:
        self._ts = Parser(TS_LANGUAGE)
        self._tsx = Parser(TSX_LANGUAGE)

    def parse(
        self, content: str, file_path: str, deps: tuple[str, ...], root_dir: str
    ) -> Tree:
        parser = self._tsx if Path(file_path).suffix.lower() == ".tsx" else self._ts
        tree = parser.parse(content.encode("utf-8"))
        return ensure_valid_syntax(tree, file_path)


register_parser(TypeScriptParser())
