"""Detectors for CommonJS-style loading: require(), require.resolve(), grunt tasks."""

from __future__ import annotations

from typing import Any

from depsweep.detectors._nodes import first_argument, is_member_call, node_text, string_value
from depsweep.registry import register_detector


class RequireCallDetector:
    name = "require_call"

    def detect(self, node: Any, deps: tuple[str, ...]) -> list[str]:
        if node.type != "call_expression":
            return []
        fn = node.child_by_field_name("function")
        if fn is None or fn.type != "identifier" or node_text(fn) != "require":
            return []
        value = string_value(first_argument(node))
        return [value] if value else []


class RequireResolveCallDetector:
    name = "require_resolve_call"

    def detect(self, node: Any, deps: tuple[str, ...]) -> list[str]:
        if not is_member_call(node, "require", "resolve"):
            return []
        value = string_value(first_argument(node))
        return [value] if value else []


class GruntLoadTaskDetector:
    """``grunt.loadNpmTasks('grunt-contrib-x')``."""

    name = "grunt_load_task"

    def detect(self, node: Any, deps: tuple[str, ...]) -> list[str]:
        if not is_member_call(node, "grunt", "loadNpmTasks"):
            return []
        value = string_value(first_argument(node))
        return [value] if value else []


register_detector(RequireCallDetector())
register_detector(RequireResolveCallDetector())
register_detector(GruntLoadTaskDetector())
