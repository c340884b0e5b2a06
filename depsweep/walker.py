"""Directory walker — recursive traversal with per-file extraction fan-out."""

from __future__ import annotations

import asyncio
import os
from functools import reduce

import structlog

from depsweep.extractor import extract_dependencies
from depsweep.manifest import is_sub_module
from depsweep.models import DetectionResult
from depsweep.registry import DependencyDetector, DependencyParser, ParserRegistry

log = structlog.get_logger("depsweep.walker")

DEFAULT_MAX_CONCURRENCY = 64


def _list_dir(directory: str) -> tuple[list[str], list[str]]:
    """Immediate (subdirectories, files) of *directory*, following symlinks."""
    dirs: list[str] = []
    files: list[str] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=True):
                dirs.append(entry.path)
            elif entry.is_file(follow_symlinks=True):
                files.append(entry.path)
    return sorted(dirs), sorted(files)


async def check_file(
    root_dir: str,
    file_path: str,
    deps: tuple[str, ...],
    parser: DependencyParser,
    detectors: list[DependencyDetector],
    sem: asyncio.Semaphore,
) -> DetectionResult:
    """Extract one (file, parser) pair into a partial result."""
    async with sem:
        try:
            using = await extract_dependencies(root_dir, file_path, deps, parser, detectors)
        except Exception as exc:
            log.debug("walker.file_error", file=file_path, parser=parser.name, error=str(exc))
            return DetectionResult(invalid_files={file_path: exc})

    if using:
        log.debug("walker.file_using", file=file_path, parser=parser.name, using=using)
    return DetectionResult(using={file_path: using})


async def check_directory(
    directory: str,
    root_dir: str,
    ignore_dirs: frozenset[str],
    deps: tuple[str, ...],
    registry: ParserRegistry,
    detectors: list[DependencyDetector],
    sem: asyncio.Semaphore,
    ancestors: frozenset[str] = frozenset(),
) -> DetectionResult:
    log.debug("walker.directory", directory=directory)
    try:
        subdirs, files = await asyncio.to_thread(_list_dir, directory)
    except OSError as exc:
        failing = exc.filename if isinstance(exc.filename, str) else directory
        log.debug("walker.dir_error", directory=failing, error=str(exc))
        return DetectionResult(invalid_dirs={failing: exc})

    lineage = ancestors | {os.path.realpath(directory)}
    tasks = []
    for subdir in subdirs:
        if os.path.basename(subdir) in ignore_dirs:
            continue
        if await asyncio.to_thread(is_sub_module, subdir):
            continue
        if os.path.realpath(subdir) in lineage:
            log.debug("walker.symlink_cycle", directory=subdir)
            continue
        tasks.append(
            check_directory(
                subdir, root_dir, ignore_dirs, deps, registry, detectors, sem, lineage
            )
        )
    for file_path in files:
        for parser in registry.classify(file_path):
            tasks.append(check_file(root_dir, file_path, deps, parser, detectors, sem))

    results = await asyncio.gather(*tasks)
    return reduce(DetectionResult.merge, results, DetectionResult())


async def walk(
    directory: str,
    root_dir: str,
    ignore_dirs: list[str] | frozenset[str],
    deps: tuple[str, ...],
    registry: ParserRegistry,
    detectors: list[DependencyDetector],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> DetectionResult:
    """Walk *directory* and return the merged detection result of the whole tree."""
    sem = asyncio.Semaphore(max_concurrency)
    return await check_directory(
        directory, root_dir, frozenset(ignore_dirs), deps, registry, detectors, sem
    )
