"""depsweep: find unused and missing dependencies of npm projects."""

__version__ = "0.1.0"

from depsweep.api import depcheck
from depsweep.check import check
from depsweep.config import CheckOptions
from depsweep.models import CheckReport, DeclaredDependencySets, DetectionResult
from depsweep.registry import (
    DependencyDetector,
    DependencyParser,
    OutputKind,
    ParserKind,
    ParserRegistry,
    register_detector,
    register_parser,
    register_special,
)

__all__ = [
    "CheckOptions",
    "CheckReport",
    "DeclaredDependencySets",
    "DependencyDetector",
    "DependencyParser",
    "DetectionResult",
    "OutputKind",
    "ParserKind",
    "ParserRegistry",
    "check",
    "depcheck",
    "register_detector",
    "register_parser",
    "register_special",
]
