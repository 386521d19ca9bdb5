"""
Logging for nicetable.

Library modules only ever call ``get_logger(__name__)``; every logger they get
is a child of the ``nicetable`` logger, which carries a NullHandler until an
application decides otherwise. Demo apps call ``configure_logging()`` to print
nicetable records to stderr. The root logger is never touched and no log files
are written.

    from nicetable.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.debug("filter applied")

Demo entry point:

    from nicetable.utils.logging import configure_logging
    configure_logging(level="DEBUG")   # or NICETABLE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "nicetable"
LOG_LEVEL_ENV = "NICETABLE_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    """Level from the argument, else $NICETABLE_LOG_LEVEL, else INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _stderr_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr]


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Send nicetable records to stderr.

    Parameters
    ----------
    level:
        "DEBUG", "INFO", ... or a logging int. Unset: $NICETABLE_LOG_LEVEL, then INFO.
    fmt, datefmt:
        Formatter strings, DEFAULT_FMT / DEFAULT_DATEFMT when unset.
    force:
        Replace existing stderr handlers. Without it a second call only
        updates the level.

    Returns the configured ``nicetable`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    resolved = _resolve_level(level)
    logger.setLevel(resolved)

    existing = _stderr_handlers(logger)
    if existing and not force:
        for h in existing:
            h.setLevel(resolved)
        return logger

    for h in existing:
        logger.removeHandler(h)
        h.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(console)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for ``name`` (usually ``__name__``), or the package logger."""
    return logging.getLogger(name or PACKAGE_LOGGER)
