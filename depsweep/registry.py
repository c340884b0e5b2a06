"""Parser and detector registries — plugin interfaces and file classification."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from depsweep.exceptions import UnknownPluginError
from depsweep.globs import glob_match


class ParserKind(Enum):
    """Built-in parser families; user parsers are CUSTOM."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    SPECIAL = "special"
    CUSTOM = "custom"


class OutputKind(Enum):
    """What a parser's ``parse`` returns."""

    AST = "ast"  # opaque tree handed to the detectors
    NAMES = "names"  # dependency names, detectors are skipped


@runtime_checkable
class DependencyParser(Protocol):
    """Interface that every parser must satisfy."""

    name: str
    kind: ParserKind
    output: OutputKind

    def parse(
        self, content: str, file_path: str, deps: tuple[str, ...], root_dir: str
    ) -> Any: ...


@runtime_checkable
class DependencyDetector(Protocol):
    """Interface that every detector must satisfy."""

    name: str

    def detect(self, node: Any, deps: tuple[str, ...]) -> list[str]: ...


PARSER_REGISTRY: dict[str, DependencyParser] = {}
SPECIAL_REGISTRY: dict[str, DependencyParser] = {}
DETECTOR_REGISTRY: dict[str, DependencyDetector] = {}

DEFAULT_PARSER_GLOBS: dict[str, list[str]] = {
    "**/*.js": ["javascript"],
    "**/*.mjs": ["javascript"],
    "**/*.cjs": ["javascript"],
    "**/*.jsx": ["javascript"],
    "**/*.ts": ["typescript"],
    "**/*.mts": ["typescript"],
    "**/*.cts": ["typescript"],
    "**/*.tsx": ["typescript"],
}

DEFAULT_DETECTORS: list[str] = [
    "import_declaration",
    "require_call",
    "require_resolve_call",
    "export_declaration",
    "grunt_load_task",
    "import_call",
    "typescript_import_equals",
]

DEFAULT_SPECIALS: list[str] = ["bin", "istanbul"]

SPECIALS_GLOB = "*"


def register_parser(parser: DependencyParser) -> None:
    PARSER_REGISTRY[parser.name] = parser


def register_special(parser: DependencyParser) -> None:
    SPECIAL_REGISTRY[parser.name] = parser


def register_detector(detector: DependencyDetector) -> None:
    DETECTOR_REGISTRY[detector.name] = detector


def _lookup(registry: dict[str, Any], kind: str, name: str) -> Any:
    try:
        return registry[name]
    except KeyError:
        raise UnknownPluginError(kind, name, list(registry)) from None


def get_parser(name: str) -> DependencyParser:
    return _lookup(PARSER_REGISTRY, "parser", name)


def get_special(name: str) -> DependencyParser:
    return _lookup(SPECIAL_REGISTRY, "special", name)


def get_detector(name: str) -> DependencyDetector:
    return _lookup(DETECTOR_REGISTRY, "detector", name)


class ParserRegistry:
    """Ordered glob -> parsers mapping used to classify files."""

    def __init__(self, entries: dict[str, list[DependencyParser]] | None = None) -> None:
        self._entries: dict[str, list[DependencyParser]] = {}
        for glob, parsers in (entries or {}).items():
            self.add(glob, *parsers)

    def add(self, glob: str, *parsers: DependencyParser) -> None:
        """Append *parsers* to *glob*, keeping first-registration order of globs."""
        self._entries.setdefault(glob, []).extend(parsers)

    @property
    def globs(self) -> list[str]:
        return list(self._entries)

    def classify(self, filename: str | Path) -> list[DependencyParser]:
        """Parsers whose glob matches the basename of *filename*."""
        basename = Path(filename).name
        targets: list[DependencyParser] = []
        for glob, parsers in self._entries.items():
            if glob_match(basename, glob, dot=True):
                targets.extend(parsers)
        return targets
