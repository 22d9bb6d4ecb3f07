# === FILE: play_scout/logger.py ===
"""Logging setup for play_scout.

Library modules never add handlers themselves; they ask for the project
logger by name::

    logger = logging.getLogger(LOGGER_NAME)
    logger.debug("GET %s", url)

The CLI calls :func:`init_logging` once per invocation with the level and
log file given on the command line.  Console output goes to stderr so that
the JSON printed on stdout stays parseable.  Importing this module installs
a WARNING-level console handler and never opens a file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "PlayScout"
LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# rotation of --log-file: 5 MiB, three backups
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

LevelT = Union[int, str]


def _build_handlers(log_file: str | Path | None, fmt: str) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file),
                maxBytes=_MAX_LOG_BYTES,
                backupCount=_LOG_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = LOG_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the scraper logger.

    With ``replace_handlers=False`` the new handlers are added next to the
    existing ones.  The logger does not propagate to the root logger, so an
    application embedding play_scout keeps its own output untouched.
    """
    scraper_logger = logging.getLogger(LOGGER_NAME)
    scraper_logger.setLevel(level)
    if replace_handlers:
        for handler in list(scraper_logger.handlers):
            scraper_logger.removeHandler(handler)
            handler.close()
    for handler in _build_handlers(log_file, log_format):
        scraper_logger.addHandler(handler)
    scraper_logger.propagate = False
    return scraper_logger


def init_logging(
    level: LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = LOG_FORMAT,
) -> logging.Logger:
    """Fresh configuration for one CLI run."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging(level="WARNING")

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "LOG_FORMAT"]
