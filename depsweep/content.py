"""File content loading and script extraction."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import yaml

# Reference: https://docs.travis-ci.com/user/job-lifecycle ("deploy" is ignored)
TRAVIS_COMMANDS = (
    "before_install",
    "install",
    "before_script",
    "script",
    "before_cache",
    "after_success",
    "after_failure",
    "before_deploy",
    "after_deploy",
    "after_script",
)

_SCRIPT_CACHE: dict[str, list[str]] = {}


async def load_file_content(path: str | Path) -> str:
    """Read a file as text off the event loop. ``OSError`` propagates."""
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8", errors="replace")


def _as_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


def get_scripts(file_path: str, content: str) -> list[str]:
    """Shell commands declared in ``package.json`` scripts or ``.travis.yml``.

    Results are cached per path for the lifetime of the process.
    """
    if file_path in _SCRIPT_CACHE:
        return _SCRIPT_CACHE[file_path]

    basename = Path(file_path).name
    scripts: list[str] = []
    if basename == "package.json":
        scripts = [str(s) for s in (json.loads(content).get("scripts") or {}).values()]
    elif basename == ".travis.yml":
        metadata = yaml.safe_load(content) or {}
        for cmd in TRAVIS_COMMANDS:
            scripts.extend(_as_list(metadata.get(cmd)))

    _SCRIPT_CACHE[file_path] = scripts
    return scripts


def clear_script_cache() -> None:
    _SCRIPT_CACHE.clear()
