"""Tests for structlog setup."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from depsweep.core.logging import FORMAT_ENV, LEVEL_ENV, setup_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    logger = logging.getLogger("depsweep")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TestSetupLogging:
    def test_default_level_is_warning(self, monkeypatch):
        monkeypatch.delenv(LEVEL_ENV, raising=False)
        setup_logging()
        assert logging.getLogger("depsweep").level == logging.WARNING

    def test_explicit_level_wins_over_env(self, monkeypatch):
        monkeypatch.setenv(LEVEL_ENV, "ERROR")
        setup_logging("debug")
        assert logging.getLogger("depsweep").level == logging.DEBUG

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("depsweep").handlers) == 1

    def test_events_go_to_stderr(self, capsys):
        setup_logging()
        structlog.get_logger("depsweep.walker").warning("walker.dir_error", directory="/x")
        captured = capsys.readouterr()
        assert "walker.dir_error" in captured.err
        assert captured.out == ""

    def test_below_level_is_dropped(self, capsys):
        setup_logging()
        structlog.get_logger("depsweep.walker").debug("walker.directory", directory="/x")
        assert capsys.readouterr().err == ""

    def test_json_format(self, monkeypatch, capsys):
        monkeypatch.setenv(FORMAT_ENV, "json")
        setup_logging()
        structlog.get_logger("depsweep.check").warning("check.done", files=3)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["event"] == "check.done"
        assert data["level"] == "warning"
        assert data["files"] == 3
        assert "timestamp" in data
