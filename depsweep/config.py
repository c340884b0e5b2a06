"""Run configuration — options model, defaults and rc-file discovery."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import pydantic
import structlog
import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from depsweep.exceptions import ConfigurationError, ConfigurationParsingError

log = structlog.get_logger("depsweep.config")

MODULE_NAME = "depsweep"

DEFAULT_IGNORE_DIRS: list[str] = [
    ".git",
    ".svn",
    ".hg",
    ".idea",
    "node_modules",
    "dist",
    "build",
    "bower_components",
]

# Searched in order; the first one present wins.
RC_FILES: list[str] = [
    f".{MODULE_NAME}rc",
    f".{MODULE_NAME}rc.json",
    f".{MODULE_NAME}rc.yml",
    f".{MODULE_NAME}rc.yaml",
]

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


class CheckOptions(BaseModel):
    """User options for a check; ``None`` means "use the default"."""

    model_config = ConfigDict(extra="forbid")

    ignore_bin_package: bool | None = None
    ignore_matches: list[str] | None = None
    ignore_dirs: list[str] | None = None
    prod_dependency_matches: list[str] | None = None
    skip_missing: bool | None = None
    parsers: dict[str, list[str]] | None = None
    detectors: list[str] | None = None
    specials: list[str] | None = None
    package: dict[str, Any] | None = None

    @field_validator("parsers", mode="before")
    @classmethod
    def _wrap_single_parser(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {glob: [names] if isinstance(names, str) else names for glob, names in v.items()}
        return v

    def merged_with(self, overrides: CheckOptions) -> CheckOptions:
        """Return a copy where every option set in *overrides* wins."""
        data = self.model_dump()
        data.update(overrides.model_dump(exclude_none=True))
        return CheckOptions.model_validate(data)


def to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub(r"_\1", key).replace("-", "_").lower()


def options_from_mapping(data: dict[str, Any], source: str) -> CheckOptions:
    normalized = {to_snake_case(k): v for k, v in data.items()}
    try:
        return CheckOptions.model_validate(normalized)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {source}: {exc}") from exc


def _load_rc_file(path: Path) -> dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationParsingError(str(path), str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationParsingError(str(path), "expected a mapping at top level")
    return data


def load_rc_options(root_dir: str | Path) -> CheckOptions:
    """Options from the ``depsweep`` key of package.json or an rc file in *root_dir*."""
    root = Path(root_dir)

    manifest = root / "package.json"
    if manifest.is_file():
        try:
            section = json.loads(manifest.read_text(encoding="utf-8")).get(MODULE_NAME)
        except (json.JSONDecodeError, AttributeError):
            section = None
        if isinstance(section, dict):
            log.debug("config.loaded", source=str(manifest))
            return options_from_mapping(section, str(manifest))

    for name in RC_FILES:
        path = root / name
        if path.is_file():
            log.debug("config.loaded", source=str(path))
            return options_from_mapping(_load_rc_file(path), str(path))

    return CheckOptions()
