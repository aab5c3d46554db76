"""
Logging setup for the ``buildplan`` CLI.

Called once by ``main.cli``; modules log through
``logging.getLogger(__name__)``. Level precedence:
    --debug / --verbose / --quiet  >  BUILDPLAN_LOG_LEVEL  >  WARNING

BUILDPLAN_LOG_FILE adds a file handler, at BUILDPLAN_LOG_FILE_LEVEL
or the console level.
"""

from __future__ import annotations

import logging
import sys

LOG_LEVEL_ENV = "BUILDPLAN_LOG_LEVEL"
LOG_FILE_ENV = "BUILDPLAN_LOG_FILE"
LOG_FILE_LEVEL_ENV = "BUILDPLAN_LOG_FILE_LEVEL"

# Plain messages for warnings and errors; module context once -v is on
_FMT_PLAIN = "%(message)s"
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s — %(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root handlers with a stderr handler and optional file handler."""
    console_level = parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter(_FMT_DETAIL if console_level <= logging.INFO else _FMT_PLAIN)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL))
        root.addHandler(fh)

    root.setLevel(root_level)

    # CliRunner closes its streams between invocations
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown or empty names give WARNING."""
    numeric = getattr(logging, level.upper(), None) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
