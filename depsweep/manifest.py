"""package.json loading — project manifests and installed dependency metadata."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NamedTuple

import structlog

from depsweep.exceptions import ManifestError, ManifestNotFoundError, ManifestParseError

log = structlog.get_logger("depsweep.manifest")

MANIFEST_NAME = "package.json"


class ModuleKey(NamedTuple):
    """Cache key for dependency metadata lookups."""

    directory: str
    name: str


@dataclass(frozen=True)
class ModuleData:
    """Resolved location and manifest of an installed dependency."""

    path: str | None
    metadata: dict[str, Any] | None


# Read-mostly; a race on first access only duplicates the lookup.
_MODULE_CACHE: dict[ModuleKey, ModuleData] = {}


def read_manifest(directory: str | Path) -> dict[str, Any]:
    """Load ``package.json`` from *directory*.

    Raises ``ManifestNotFoundError`` when the file is absent and
    ``ManifestParseError`` when it is not a JSON object.
    """
    path = Path(directory) / MANIFEST_NAME
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ManifestNotFoundError(str(path)) from None
    except OSError as exc:
        raise ManifestParseError(str(path), exc.strerror or str(exc)) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(str(path), exc.msg) from exc
    if not isinstance(data, dict):
        raise ManifestParseError(str(path), "top-level value is not an object")
    return data


def is_sub_module(directory: str | Path) -> bool:
    """Whether *directory* carries its own loadable manifest."""
    try:
        read_manifest(directory)
    except ManifestError:
        return False
    return True


def _resolve(name: str, from_dir: Path) -> Path | None:
    """Node-style lookup of ``node_modules/<name>/package.json`` up the tree."""
    for base in (from_dir, *from_dir.parents):
        candidate = base / "node_modules" / name / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    return None


def load_module_data(name: str, from_dir: str | Path) -> ModuleData:
    """Return the installed manifest of dependency *name* as seen from *from_dir*.

    Unresolvable or unreadable dependencies yield ``ModuleData(None, None)``.
    """
    key = ModuleKey(str(from_dir), name)
    cached = _MODULE_CACHE.get(key)
    if cached is not None:
        return cached

    data = ModuleData(path=None, metadata=None)
    manifest_file = _resolve(name, Path(from_dir).resolve())
    if manifest_file is not None:
        try:
            data = ModuleData(
                path=str(manifest_file.parent),
                metadata=read_manifest(manifest_file.parent),
            )
        except ManifestError as exc:
            log.debug("manifest.dependency_unreadable", dependency=name, error=str(exc))

    _MODULE_CACHE[key] = data
    return data


def clear_caches() -> None:
    _MODULE_CACHE.clear()
