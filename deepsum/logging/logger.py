"""
Logger factory and text formatter.

Warnings go to standard output next to the scan results, which is where
classic *deep tools print them.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

ROOT_LOGGER = "deepsum"


class TextFormatter(logging.Formatter):
    """Plain "<LEVEL>: <message>" lines."""

    def format(self, record: logging.LogRecord) -> str:
        message = f"{record.levelname}: {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Configuration is applied by setup_logging()."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(level: str = "WARNING", stream: TextIO | None = None) -> None:
    """
    Configure the root deepsum logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        stream: Destination stream (defaults to the current stdout).
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Remove existing handlers to avoid duplicates on re-init
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(TextFormatter())
    root_logger.addHandler(handler)
