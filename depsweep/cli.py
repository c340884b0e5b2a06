"""CLI entry point: depsweep.

Usage:
    depsweep                              # check the current directory
    depsweep /path/to/project --json      # machine-readable report
    depsweep . --ignores "eslint-*,@types/*" --skip-missing
    depsweep . --parsers "**/*.js:javascript,**/*.ts:typescript&javascript"
"""

from __future__ import annotations

import asyncio
import json
import os
import sys

import click

from depsweep.api import depcheck
from depsweep.config import CheckOptions, load_rc_options
from depsweep.core.logging import setup_logging
from depsweep.exceptions import ConfigurationError, ManifestError
from depsweep.models import CheckReport

EXIT_CLEAN = 0
EXIT_ISSUES = 1
EXIT_USAGE = 2


def parse_csv(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_parsers(value: str | None) -> dict[str, list[str]] | None:
    """``"glob:p1&p2,glob2:p3"`` -> ``{"glob": ["p1", "p2"], "glob2": ["p3"]}``."""
    pairs = parse_csv(value)
    if pairs is None:
        return None
    parsers: dict[str, list[str]] = {}
    for pair in pairs:
        glob, sep, names = pair.rpartition(":")
        if not sep or not glob:
            raise click.BadParameter(f"expected glob:parser, got '{pair}'", param_hint="--parsers")
        parsers[glob] = [n for n in names.split("&") if n]
    return parsers


def _relative(path: str, root: str) -> str:
    return os.path.relpath(path, root)


def format_report(report: CheckReport, root: str) -> str:
    if not report.has_issues and not report.invalid_files and not report.invalid_dirs:
        return "No depsweep issue"

    lines: list[str] = []
    if report.dependencies:
        lines.append("Unused dependencies")
        lines.extend(f"* {dep}" for dep in report.dependencies)
    if report.dev_dependencies:
        lines.append("Unused devDependencies")
        lines.extend(f"* {dep}" for dep in report.dev_dependencies)
    if report.missing:
        lines.append("Missing dependencies")
        for dep, files in report.missing.items():
            lines.append(f"* {dep}: {', '.join(_relative(f, root) for f in files)}")
    if report.invalid_files:
        lines.append("Invalid files")
        for path, error in report.invalid_files.items():
            lines.append(f"* {_relative(path, root)}: {error}")
    if report.invalid_dirs:
        lines.append("Invalid directories")
        for path, error in report.invalid_dirs.items():
            lines.append(f"* {_relative(path, root)}: {error}")
    return "\n".join(lines)


@click.command()
@click.argument(
    "directory",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
)
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
@click.option("--ignores", default=None, help="Comma separated package list to ignore")
@click.option("--ignore-dirs", default=None, help="Comma separated folder names to ignore")
@click.option(
    "--ignore-bin-package", is_flag=True, default=None, help="Ignore packages with a bin entry"
)
@click.option(
    "--skip-missing", is_flag=True, default=None, help="Skip calculation of missing dependencies"
)
@click.option(
    "--prod-dependency-matches",
    default=None,
    help="Comma separated globs selecting production source files",
)
@click.option("--parsers", default=None, help="Comma separated glob:parser pair list")
@click.option("--detectors", default=None, help="Comma separated detector list")
@click.option("--specials", default=None, help="Comma separated special parser list")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    directory: str,
    as_json: bool,
    ignores: str | None,
    ignore_dirs: str | None,
    ignore_bin_package: bool | None,
    skip_missing: bool | None,
    prod_dependency_matches: str | None,
    parsers: str | None,
    detectors: str | None,
    specials: str | None,
    verbose: bool,
) -> None:
    """Find unused and missing dependencies of the npm project in DIRECTORY."""
    setup_logging("DEBUG" if verbose else None)

    cli_options = CheckOptions(
        ignore_bin_package=ignore_bin_package or None,
        ignore_matches=parse_csv(ignores),
        ignore_dirs=parse_csv(ignore_dirs),
        prod_dependency_matches=parse_csv(prod_dependency_matches),
        skip_missing=skip_missing or None,
        parsers=parse_parsers(parsers),
        detectors=parse_csv(detectors),
        specials=parse_csv(specials),
    )

    try:
        options = load_rc_options(directory).merged_with(cli_options)
        report = asyncio.run(depcheck(directory, options))
    except ManifestError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_USAGE)
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_USAGE)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo(format_report(report, directory))

    sys.exit(EXIT_ISSUES if report.has_issues else EXIT_CLEAN)


if __name__ == "__main__":
    main()
