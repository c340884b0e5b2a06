"""Structured logging for the depsweep CLI — structlog rendered through stdlib logging.

Environment:
    DEPSWEEP_LOG_LEVEL   level name (default: WARNING); an explicit *level* wins
    DEPSWEEP_LOG_FORMAT  console | json (default: console)

Everything goes to stderr so a ``--json`` report on stdout stays parseable.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

LEVEL_ENV = "DEPSWEEP_LOG_LEVEL"
FORMAT_ENV = "DEPSWEEP_LOG_FORMAT"
DEFAULT_LEVEL = "WARNING"


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time (it may be swapped by runners)."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(level: str | None = None) -> None:
    """Route structlog and stdlib records from ``depsweep.*`` to stderr."""
    log_level = (level or os.environ.get(LEVEL_ENV, DEFAULT_LEVEL)).upper()
    log_format = os.environ.get(FORMAT_ENV, "console").lower()

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.format_exc_info,
    ]
    if log_format == "json":
        pre_chain.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = _StderrHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    logger = logging.getLogger("depsweep")
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(log_level)
    logger.propagate = False
