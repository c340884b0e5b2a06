"""Special parser: nyc/istanbul configs that ``extends`` a shared package config."""

from __future__ import annotations

import json
import re
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any

import structlog
import yaml

from depsweep.registry import OutputKind, ParserKind, register_special

log = structlog.get_logger("depsweep.specials.istanbul")

_CONFIG_NAME_RE = re.compile(r"^\.nycrc(\.(json|yml|yaml))?$")

# Executable configs; not evaluated.
_SCRIPT_CONFIG_NAMES = frozenset({".nycrc.js", "nyc.config.js"})


def _is_absolute(path: str) -> bool:
    return PurePosixPath(path).is_absolute() or PureWindowsPath(path).is_absolute()


def extends_dependencies(extend_config: Any, deps: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    if isinstance(extend_config, list):
        for extend in extend_config:
            found.extend(extends_dependencies(extend, deps))
    elif isinstance(extend_config, str) and not _is_absolute(extend_config):
        parts = extend_config.split("/")
        name = "/".join(parts[:2]) if parts[0].startswith("@") else parts[0]
        if name in deps:
            found.append(name)
    return found


class IstanbulSpecialParser:
    name = "istanbul"
    kind = ParserKind.SPECIAL
    output = OutputKind.NAMES

    def parse(
        self, content: str, file_path: str, deps: tuple[str, ...], root_dir: str
    ) -> list[str]:
        basename = PurePosixPath(file_path.replace("\\", "/")).name
        if basename in _SCRIPT_CONFIG_NAMES:
            log.debug("istanbul.script_config_skipped", file=file_path)
            return []
        if _CONFIG_NAME_RE.match(basename):
            config = yaml.safe_load(content)
        elif basename == "package.json":
            config = json.loads(content).get("nyc")
        else:
            return []

        if not isinstance(config, dict) or not config.get("extends"):
            return []
        return extends_dependencies(config["extends"], deps)


register_special(IstanbulSpecialParser())
