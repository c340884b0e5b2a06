"""Source parsers, registered on import."""

from depsweep.parsers import (
    javascript,  # noqa: F401
    typescript,  # noqa: F401
)
