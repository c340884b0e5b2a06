"""Special parser: dependencies used through their executables in scripts."""

from __future__ import annotations

import posixpath

from depsweep.content import get_scripts
from depsweep.manifest import ModuleKey, load_module_data
from depsweep.registry import OutputKind, ParserKind, register_special

_BINARY_CACHE: dict[ModuleKey, dict[str, str] | str] = {}


def get_binaries(dep: str, directory: str) -> list[tuple[str, str]]:
    """``(command, relative path)`` pairs from the ``bin`` entry of *dep*."""
    key = ModuleKey(directory, dep)
    if key not in _BINARY_CACHE:
        metadata = load_module_data(dep, directory).metadata or {}
        _BINARY_CACHE[key] = metadata.get("bin") or {}

    bin_metadata = _BINARY_CACHE[key]
    if isinstance(bin_metadata, str):
        return [(dep, bin_metadata)]
    return list(bin_metadata.items())


def binary_features(dep: str, command: str, bin_path: str) -> list[str]:
    """Spellings under which a script may invoke *command*."""
    module_path = posixpath.normpath(posixpath.join("node_modules", dep, bin_path.replace("\\", "/")))
    return [
        command,
        f"--require {command}",
        f"--require {command}/register",
        f"$(npm bin)/{command}",
        f"node_modules/.bin/{command}",
        f"./node_modules/.bin/{command}",
        module_path,
        f"./{module_path}",
    ]


def is_binary_in_use(dep: str, scripts: list[str], directory: str) -> bool:
    padded = [f" {script} " for script in scripts]
    return any(
        f" {feature} " in script
        for command, bin_path in get_binaries(dep, directory)
        for feature in binary_features(dep, command, bin_path)
        for script in padded
    )


class BinSpecialParser:
    name = "bin"
    kind = ParserKind.SPECIAL
    output = OutputKind.NAMES

    def parse(
        self, content: str, file_path: str, deps: tuple[str, ...], root_dir: str
    ) -> list[str]:
        scripts = get_scripts(file_path, content)
        if not scripts:
            return []
        return [dep for dep in deps if is_binary_in_use(dep, scripts, root_dir)]


def clear_binary_cache() -> None:
    _BINARY_CACHE.clear()


register_special(BinSpecialParser())
