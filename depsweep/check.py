"""Walk a project tree and build the categorized report."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from depsweep.aggregator import build_report
from depsweep.models import CheckReport, DeclaredDependencySets
from depsweep.registry import DependencyDetector, ParserRegistry
from depsweep.walker import DEFAULT_MAX_CONCURRENCY, walk

log = structlog.get_logger("depsweep.check")


async def check(
    *,
    root_dir: str,
    ignore_dirs: Sequence[str],
    prod_dependency_matches: Sequence[str],
    skip_missing: bool,
    deps: Sequence[str],
    dev_deps: Sequence[str],
    peer_deps: Sequence[str],
    optional_deps: Sequence[str],
    parsers: ParserRegistry,
    detectors: Sequence[DependencyDetector],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> CheckReport:
    """Classify declared dependencies of the project at *root_dir* by usage.

    Per-file and per-directory failures end up in the report's
    ``invalid_files``/``invalid_dirs``; they never fail the run.
    """
    declared = DeclaredDependencySets(
        deps=tuple(deps),
        dev_deps=tuple(dev_deps),
        peer_deps=tuple(peer_deps),
        optional_deps=tuple(optional_deps),
    )
    log.info(
        "check.start",
        root_dir=root_dir,
        deps=len(declared.deps),
        dev_deps=len(declared.dev_deps),
    )

    result = await walk(
        root_dir,
        root_dir,
        frozenset(ignore_dirs),
        declared.declared_union,
        parsers,
        list(detectors),
        max_concurrency=max_concurrency,
    )
    report = build_report(
        result, declared, root_dir, list(prod_dependency_matches), skip_missing
    )

    log.info(
        "check.done",
        files=len(result.using),
        unused=len(report.dependencies),
        unused_dev=len(report.dev_dependencies),
        missing=len(report.missing),
        invalid_files=len(report.invalid_files),
        invalid_dirs=len(report.invalid_dirs),
    )
    return report
