"""Logging setup for programs built on todor."""
from __future__ import annotations

import logging
import sys


class TodorFormatter(logging.Formatter):
    """Formats records as ``[module LEVEL]: message``."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"[{record.name} {record.levelname}]: {message}"


def init_logger(verbose: bool = False) -> logging.Logger:
    """Send todor's log records to stderr.

    Parameters
    ----------
    verbose : bool
        Log at INFO level when True, only errors otherwise.
    """
    logger = logging.getLogger("todor")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TodorFormatter())

    logger.handlers[:] = [handler]
    logger.setLevel(logging.INFO if verbose else logging.ERROR)
    logger.propagate = False
    return logger
