"""Shared pytest fixtures for depsweep tests."""

import json
from pathlib import Path

import pytest

import depsweep.detectors  # noqa: F401
import depsweep.parsers  # noqa: F401
import depsweep.specials  # noqa: F401
from depsweep.content import clear_script_cache
from depsweep.manifest import clear_caches
from depsweep.specials.bin import clear_binary_cache


@pytest.fixture(autouse=True)
def _fresh_caches():
    clear_caches()
    clear_script_cache()
    clear_binary_cache()
    yield
    clear_caches()
    clear_script_cache()
    clear_binary_cache()


def write_files(root: Path, files: dict[str, str | dict]) -> Path:
    """Create *files* under *root*; dict values are written as JSON."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, dict):
            content = json.dumps(content)
        path.write_text(content)
    return root


@pytest.fixture
def project(tmp_path: Path):
    """Factory: ``project({"package.json": {...}, "src/a.js": "..."})`` -> root path."""

    def _make(files: dict[str, str | dict]) -> Path:
        return write_files(tmp_path, files)

    return _make
