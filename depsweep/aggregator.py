"""Usage index inversion and unused/missing computation."""

from __future__ import annotations

import os

from depsweep.globs import glob_match
from depsweep.models import CheckReport, DeclaredDependencySets, DetectionResult


def map_to_dependencies(using: dict[str, list[str]]) -> dict[str, list[str]]:
    """Invert ``{file: [deps]}`` into ``{dep: sorted files}``, keys sorted."""
    index: dict[str, set[str]] = {}
    for file_path, deps in using.items():
        for dep in deps:
            index.setdefault(dep, set()).add(file_path)
    return {dep: sorted(index[dep]) for dep in sorted(index)}


def filter_production_files(
    using: dict[str, list[str]], root_dir: str, prod_dependency_matches: list[str]
) -> dict[str, list[str]]:
    """Files whose root-relative path matches a production pattern.

    An empty pattern list places no restriction.
    """
    if not prod_dependency_matches:
        return dict(using)
    return {
        file_path: deps
        for file_path, deps in using.items()
        if glob_match(
            os.path.relpath(file_path, root_dir).replace(os.sep, "/"), prod_dependency_matches
        )
    }


def build_report(
    result: DetectionResult,
    declared: DeclaredDependencySets,
    root_dir: str,
    prod_dependency_matches: list[str],
    skip_missing: bool,
) -> CheckReport:
    using_prod = map_to_dependencies(
        filter_production_files(result.using, root_dir, prod_dependency_matches)
    )
    using_all = map_to_dependencies(result.using)

    missing: dict[str, list[str]] = {}
    if not skip_missing:
        all_declared = declared.all_declared
        missing = {dep: files for dep, files in using_all.items() if dep not in all_declared}

    return CheckReport(
        dependencies=[d for d in declared.deps if d not in using_prod],
        dev_dependencies=[d for d in declared.dev_deps if d not in using_all],
        missing=missing,
        using=using_all,
        invalid_files=dict(result.invalid_files),
        invalid_dirs=dict(result.invalid_dirs),
    )
