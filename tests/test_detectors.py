"""Tests for the tree-sitter parsers and the built-in detectors."""

from __future__ import annotations

import pytest

from depsweep.exceptions import SourceParseError
from depsweep.extractor import detect
from depsweep.nodes import ast_nodes
from depsweep.registry import DEFAULT_DETECTORS, get_detector, get_parser


def _found(source: str, file_path: str = "/p/a.js", detectors: list[str] | None = None) -> list[str]:
    parser = get_parser("typescript" if file_path.endswith((".ts", ".tsx")) else "javascript")
    tree = parser.parse(source, file_path, (), "/p")
    chosen = [get_detector(n) for n in (detectors or DEFAULT_DETECTORS)]
    return [name for node in ast_nodes(tree) for name in detect(chosen, node, ())]


class TestJavaScriptDetectors:
    def test_import_declaration(self):
        assert _found("import x from 'lodash';\nimport 'side-effect';") == [
            "lodash",
            "side-effect",
        ]

    def test_import_named_and_namespace(self):
        src = 'import { a } from "alpha";\nimport * as b from "beta";\n'
        assert _found(src) == ["alpha", "beta"]

    def test_require_call(self):
        assert _found("const pad = require('left-pad');") == ["left-pad"]

    def test_require_with_variable_is_ignored(self):
        assert _found("const name = 'x';\nrequire(name);") == []

    def test_require_resolve(self):
        src = "const p = require.resolve('some-plugin/path');"
        assert _found(src, detectors=["require_resolve_call"]) == ["some-plugin/path"]

    def test_export_from(self):
        src = "export * from 'reexported';\nexport { x } from 'named';\nexport const y = 1;"
        assert _found(src) == ["reexported", "named"]

    def test_dynamic_import(self):
        assert _found("async function f() { await import('lazy-lib'); }") == ["lazy-lib"]

    def test_grunt_load_tasks(self):
        src = "module.exports = function (grunt) { grunt.loadNpmTasks('grunt-contrib-copy'); };"
        assert _found(src, detectors=["grunt_load_task"]) == ["grunt-contrib-copy"]

    def test_jsx(self):
        src = "import React from 'react';\nconst App = () => <div className='x'>hi</div>;\n"
        assert _found(src, "/p/App.jsx") == ["react"]

    def test_template_literal_require(self):
        assert _found("require(`tpl-lib`);") == ["tpl-lib"]

    def test_syntax_error_raises(self):
        with pytest.raises(SourceParseError) as exc_info:
            _found("const = ;")
        assert exc_info.value.file_path == "/p/a.js"
        assert exc_info.value.line == 1


class TestTypeScriptDetectors:
    def test_import_type(self):
        src = "import type { Foo } from 'foo-types';\nimport bar from 'bar';\n"
        assert _found(src, "/p/a.ts") == ["foo-types", "bar"]

    def test_import_equals_require(self):
        src = "import fs = require('fs-extra');\n"
        assert _found(src, "/p/a.ts") == ["fs-extra"]

    def test_tsx(self):
        src = "import * as React from 'react';\nexport const A = () => <span>{1 as number}</span>;\n"
        assert _found(src, "/p/a.tsx") == ["react"]

    def test_type_annotations_parse(self):
        src = "import { x } from 'x';\nfunction f(a: string): number { return 1; }\n"
        assert _found(src, "/p/a.ts") == ["x"]


class TestDetectorIsolation:
    def test_failing_detector_yields_nothing(self):
        class Boom:
            name = "boom"

            def detect(self, node, deps):
                raise RuntimeError("boom")

        parser = get_parser("javascript")
        tree = parser.parse("require('ok');", "/p/a.js", (), "/p")
        detectors = [Boom(), get_detector("require_call")]
        found = [n for node in ast_nodes(tree) for n in detect(detectors, node, ())]
        assert found == ["ok"]
