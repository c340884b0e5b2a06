"""Special parsers for tool configs and scripts."""

from depsweep.specials import (
    bin,  # noqa: F401
    istanbul,  # noqa: F401
)
