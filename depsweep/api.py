"""Project-level entry point — manifest reading, ignore rules, plugin resolution.

Typical usage::

    report = await depcheck("/path/to/project", CheckOptions(skip_missing=True))
    print(report.dependencies)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

# Ensure built-in plugins are registered before names are resolved.
import depsweep.detectors  # noqa: F401
import depsweep.parsers  # noqa: F401
import depsweep.specials  # noqa: F401
from depsweep.check import check
from depsweep.config import DEFAULT_IGNORE_DIRS, CheckOptions
from depsweep.globs import glob_match
from depsweep.manifest import load_module_data, read_manifest
from depsweep.models import CheckReport
from depsweep.registry import (
    DEFAULT_DETECTORS,
    DEFAULT_PARSER_GLOBS,
    DEFAULT_SPECIALS,
    SPECIALS_GLOB,
    DependencyDetector,
    ParserRegistry,
    get_detector,
    get_parser,
    get_special,
)

log = structlog.get_logger("depsweep.api")


def is_ignored(ignore_matches: list[str], dependency: str) -> bool:
    return bool(ignore_matches) and glob_match(dependency, ignore_matches)


def has_bin(root_dir: str, dependency: str) -> bool:
    metadata = load_module_data(dependency, root_dir).metadata
    return bool(metadata) and "bin" in metadata


def filter_dependencies(
    root_dir: str,
    ignore_bin_package: bool,
    ignore_matches: list[str],
    dependencies: dict[str, Any],
) -> list[str]:
    """Dependency names minus ignored ones and, optionally, CLI-tool packages."""
    return [
        dep
        for dep in dependencies
        if not (is_ignored(ignore_matches, dep) or (ignore_bin_package and has_bin(root_dir, dep)))
    ]


def build_parser_registry(
    parsers: dict[str, list[str]], specials: list[str]
) -> ParserRegistry:
    registry = ParserRegistry()
    for glob, names in parsers.items():
        registry.add(glob, *(get_parser(name) for name in names))
    registry.add(SPECIALS_GLOB, *(get_special(name) for name in specials))
    return registry


def build_detectors(names: list[str]) -> list[DependencyDetector]:
    return [get_detector(name) for name in names]


def _keys(mapping: Any) -> dict[str, Any]:
    return mapping if isinstance(mapping, dict) else {}


async def depcheck(root_dir: str | Path, options: CheckOptions | None = None) -> CheckReport:
    """Check the npm project at *root_dir*.

    Raises ``ManifestError`` when no usable package.json is available and
    ``ConfigurationError`` for unknown plugin names; every other problem
    is reported inside the returned ``CheckReport``.
    """
    options = options or CheckOptions()
    root = str(Path(root_dir).resolve())

    ignore_bin_package = bool(options.ignore_bin_package)
    ignore_matches = options.ignore_matches or []
    ignore_dirs = list(dict.fromkeys(DEFAULT_IGNORE_DIRS + (options.ignore_dirs or [])))
    registry = build_parser_registry(
        options.parsers if options.parsers is not None else DEFAULT_PARSER_GLOBS,
        options.specials if options.specials is not None else DEFAULT_SPECIALS,
    )
    detectors = build_detectors(
        options.detectors if options.detectors is not None else DEFAULT_DETECTORS
    )

    metadata = options.package if options.package is not None else read_manifest(root)
    deps = filter_dependencies(
        root, ignore_bin_package, ignore_matches, _keys(metadata.get("dependencies"))
    )
    dev_deps = filter_dependencies(
        root, ignore_bin_package, ignore_matches, _keys(metadata.get("devDependencies"))
    )
    log.debug("api.declared", deps=deps, dev_deps=dev_deps)

    report = await check(
        root_dir=root,
        ignore_dirs=ignore_dirs,
        prod_dependency_matches=options.prod_dependency_matches or [],
        skip_missing=bool(options.skip_missing),
        deps=deps,
        dev_deps=dev_deps,
        peer_deps=list(_keys(metadata.get("peerDependencies"))),
        optional_deps=list(_keys(metadata.get("optionalDependencies"))),
        parsers=registry,
        detectors=detectors,
    )

    kept = set(filter_dependencies(root, ignore_bin_package, ignore_matches, report.missing))
    report.missing = {dep: files for dep, files in report.missing.items() if dep in kept}
    return report
