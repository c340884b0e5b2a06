"""Detectors for ES module syntax: import/export statements and import()."""

from __future__ import annotations

from typing import Any

from depsweep.detectors._nodes import first_argument, string_value
from depsweep.registry import register_detector


def _source_of(node: Any) -> list[str]:
    value = string_value(node.child_by_field_name("source"))
    return [value] if value else []


class ImportDeclarationDetector:
    """``import x from 'a'``, ``import 'a'``, ``import type { T } from 'a'``."""

    name = "import_declaration"

    def detect(self, node: Any, deps: tuple[str, ...]) -> list[str]:
        if node.type != "import_statement":
            return []
        return _source_of(node)


class ExportDeclarationDetector:
    """``export * from 'a'`` and ``export { x } from 'a'``."""

    name = "export_declaration"

    def detect(self, node: Any, deps: tuple[str, ...]) -> list[str]:
        if node.type != "export_statement":
            return []
        return _source_of(node)


class ImportCallDetector:
    """Dynamic ``import('a')`` with a literal specifier."""

    name = "import_call"

    def detect(self, node: Any, deps: tuple[str, ...]) -> list[str]:
        if node.type != "call_expression":
            return []
        fn = node.child_by_field_name("function")
        if fn is None or fn.type != "import":
            return []
        value = string_value(first_argument(node))
        return [value] if value else []


class TypeScriptImportEqualsDetector:
    """TypeScript ``import x = require('a')``."""

    name = "typescript_import_equals"

    def detect(self, node: Any, deps: tuple[str, ...]) -> list[str]:
        if node.type != "import_require_clause":
            return []
        source = node.child_by_field_name("source")
        if source is None:
            source = next((c for c in node.named_children if c.type == "string"), None)
        value = string_value(source)
        return [value] if value else []


register_detector(ImportDeclarationDetector())
register_detector(ExportDeclarationDetector())
register_detector(ImportCallDetector())
register_detector(TypeScriptImportEqualsDetector())
