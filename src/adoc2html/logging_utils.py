#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/logging_utils.py
"""Logging setup for the adoc2html command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

#: Console format; rule warnings read as "WARNING: Unhandled inline_quoted ..."
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

#: File format, with timestamps and the emitting module
FILE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


def resolve_level(log_level: int | str) -> int:
    """Return the numeric level for a level name or number, INFO if unknown."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_level: int | str, log_file: Optional[str] = None) -> logging.Logger:
    """Route log records to standard error and, optionally, a file.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "DEBUG")
    log_file : str, optional
        Path of a file that receives the same records, appended to

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    level = resolve_level(log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
