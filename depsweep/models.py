"""Data models for a dependency check run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DeclaredDependencySets:
    """Dependency names declared by the project manifest, after ignore rules."""

    deps: tuple[str, ...] = ()
    dev_deps: tuple[str, ...] = ()
    peer_deps: tuple[str, ...] = ()
    optional_deps: tuple[str, ...] = ()

    @property
    def declared_union(self) -> tuple[str, ...]:
        """Production and dev dependencies, in declaration order."""
        return tuple(dict.fromkeys(self.deps + self.dev_deps))

    @property
    def all_declared(self) -> frozenset[str]:
        return frozenset(self.deps + self.dev_deps + self.peer_deps + self.optional_deps)


@dataclass(frozen=True)
class DetectionResult:
    """Whole-tree detection output produced by the directory walker.

    Instances are never mutated; ``merge`` returns a new result so the
    fold over concurrently completed tasks is order-independent.
    """

    using: dict[str, list[str]] = field(default_factory=dict)
    invalid_files: dict[str, BaseException] = field(default_factory=dict)
    invalid_dirs: dict[str, BaseException] = field(default_factory=dict)

    def merge(self, other: DetectionResult) -> DetectionResult:
        using = dict(self.using)
        for path, names in other.using.items():
            existing = using.get(path, [])
            using[path] = existing + [n for n in names if n not in existing]
        return DetectionResult(
            using=using,
            invalid_files={**self.invalid_files, **other.invalid_files},
            invalid_dirs={**self.invalid_dirs, **other.invalid_dirs},
        )


@dataclass
class CheckReport:
    """Final categorized report of a dependency check."""

    dependencies: list[str] = field(default_factory=list)  # unused production deps
    dev_dependencies: list[str] = field(default_factory=list)  # unused dev deps
    missing: dict[str, list[str]] = field(default_factory=dict)  # dep -> files
    using: dict[str, list[str]] = field(default_factory=dict)  # dep -> files
    invalid_files: dict[str, BaseException] = field(default_factory=dict)
    invalid_dirs: dict[str, BaseException] = field(default_factory=dict)

    @property
    def has_issues(self) -> bool:
        return bool(self.dependencies or self.dev_dependencies or self.missing)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dependencies": list(self.dependencies),
            "devDependencies": list(self.dev_dependencies),
            "missing": {k: list(v) for k, v in self.missing.items()},
            "using": {k: list(v) for k, v in self.using.items()},
            "invalidFiles": {k: str(v) for k, v in self.invalid_files.items()},
            "invalidDirs": {k: str(v) for k, v in self.invalid_dirs.items()},
        }
