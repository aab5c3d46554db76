"""
Tests for observability — logging setup.
"""

import logging
from pathlib import Path

import pytest

from buildplan.core.observability.logging_config import parse_level, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    raise_exceptions = logging.raiseExceptions
    yield
    logging.raiseExceptions = raise_exceptions
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestParseLevel:
    def test_known_names(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level("ERROR") == logging.ERROR

    def test_unknown_falls_back_to_warning(self):
        assert parse_level("chatty") == logging.WARNING
        assert parse_level(None) == logging.WARNING


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_handler_lowers_root_level(self, tmp_path: Path):
        log_file = tmp_path / "buildplan.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("buildplan.test").debug("planner trace")
        for h in root.handlers:
            h.flush()
        assert "planner trace" in log_file.read_text()
