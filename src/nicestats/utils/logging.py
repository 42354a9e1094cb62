"""
Logging for nicestats.

Every module logs to a child of the ``nicestats`` logger via
``get_logger(__name__)``. What gets logged:

- DEBUG: batch ingestion and marker placement summaries
  (``nicestats.plot_layout.distribution_layout``), median finalization
  (``nicestats.stats.incremental_stats``), figure construction.
- WARNING: ignored or inconsistent keys in ``PlotSpans.from_dict``.

The package installs only a NullHandler, so nothing is printed unless the
host application configures logging or a script calls configure_logging():

    from nicestats.utils.logging import configure_logging
    configure_logging("DEBUG")          # or NICESTATS_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "nicestats"

# Read by configure_logging() when called without a level
LOG_LEVEL_ENV = "NICESTATS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    # getLevelName() echoes back "Level X" for names it does not know
    return resolved if isinstance(resolved, int) else logging.INFO


def _stderr_handler(logger: logging.Logger) -> Optional[logging.StreamHandler]:
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr:
            return handler
    return None


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Send nicestats log records to stderr. Intended for scripts and notebooks;
    the root logger is never touched.

    Parameters
    ----------
    level:
        Name or number of the level. None reads NICESTATS_LOG_LEVEL, falling
        back to INFO; unrecognized names also mean INFO.
    fmt, datefmt:
        Formatter strings, DEFAULT_FMT / DEFAULT_DATEFMT when None.
    force:
        Drop all current handlers on the nicestats logger first. Without it a
        repeated call keeps the existing stderr handler and only changes its level.

    Returns
    -------
    The ``nicestats`` logger.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    if force:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
    else:
        existing = _stderr_handler(logger)
        if existing is not None:
            existing.setLevel(resolved)
            return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FMT, datefmt or DEFAULT_DATEFMT))
    logger.addHandler(handler)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger ``name``, or the package logger when name is None."""
    return logging.getLogger(name or LOGGER_NAME)
