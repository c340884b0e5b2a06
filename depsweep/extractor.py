"""Dependency extractor — one parser over one file, detectors, peer/optional closure."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Any

import structlog

from depsweep.content import load_file_content
from depsweep.manifest import load_module_data
from depsweep.names import at_types_name, is_builtin, to_package_root_name
from depsweep.nodes import ast_nodes
from depsweep.registry import DependencyDetector, DependencyParser, OutputKind, ParserKind

log = structlog.get_logger("depsweep.extractor")

_CLOSURE_PROPERTIES = ("peerDependencies", "optionalDependencies")


def _unique(names: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(names))


def detect(detectors: list[DependencyDetector], node: Any, deps: tuple[str, ...]) -> list[str]:
    """Run every detector over *node*; a failing detector contributes nothing."""
    found: list[str] = []
    for detector in detectors:
        try:
            found.extend(detector.detect(node, deps))
        except Exception:
            log.debug("extractor.detector_failed", detector=detector.name, exc_info=True)
    return found


def discover_property_deps(
    root_dir: str, deps: tuple[str, ...], prop: str, dep_name: str
) -> list[str]:
    """Declared deps that *dep_name* lists under its own *prop* manifest key."""
    metadata = load_module_data(dep_name, root_dir).metadata
    if not metadata:
        return []
    declared_by_dep = metadata.get(prop) or {}
    return [d for d in deps if d in declared_by_dep]


async def extract_dependencies(
    root_dir: str,
    file_path: str,
    deps: tuple[str, ...],
    parser: DependencyParser,
    detectors: list[DependencyDetector],
) -> list[str]:
    """Normalized dependency names referenced by *file_path* according to *parser*.

    Content-load and parse errors propagate to the caller.
    """
    content = await load_file_content(file_path)
    parsed = parser.parse(content, file_path, deps, root_dir)

    if parser.output is OutputKind.NAMES:
        dependencies = list(parsed)
    else:
        raw = _unique(name for node in ast_nodes(parsed) for name in detect(detectors, node, deps))
        dependencies = [to_package_root_name(name) for name in raw]
        if parser.kind is ParserKind.TYPESCRIPT:
            # importing foo also uses @types/foo, but only if it is declared
            augmented: list[str] = []
            for dependency in dependencies:
                augmented.append(dependency)
                types_name = at_types_name(dependency)
                if types_name in deps:
                    augmented.append(types_name)
            dependencies = augmented

    closure: list[str] = []
    for prop in _CLOSURE_PROPERTIES:
        for dependency in dependencies:
            closure.extend(
                await asyncio.to_thread(discover_property_deps, root_dir, deps, prop, dependency)
            )

    return _unique(
        dep
        for dep in dependencies + closure
        if dep and dep not in (".", "..") and not is_builtin(dep)
    )
