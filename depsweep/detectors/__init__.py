"""Dependency-reference detectors, registered on import."""

from depsweep.detectors import (
    commonjs,  # noqa: F401
    modules,  # noqa: F401
)
