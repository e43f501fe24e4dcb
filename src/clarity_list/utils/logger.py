"""Rotating file log for the clarity CLI.

Modules log through ``logging.getLogger(__name__)``. Their records propagate
to the ``clarity_list`` package logger, which writes them to ``clarity.log``
in the platform log directory. :func:`get_logger` installs the file handler
once per process and :func:`set_level` applies the ``logging.level`` setting.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

PACKAGE_LOGGER = "clarity_list"
LOG_FILE_NAME = "clarity.log"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
MAX_LOG_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_BACKUPS = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Path of the active log file."""
    return Path(user_log_dir(PACKAGE_LOGGER)) / LOG_FILE_NAME


def _file_handler(path: Path) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def _has_file_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h, RotatingFileHandler) for h in logger.handlers)


def get_logger() -> logging.Logger:
    """Return the package logger, attaching the rotating file handler on first call.

    Handlers installed by someone else (a test harness, a NullHandler) do not
    stop the file handler from being added.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(PACKAGE_LOGGER)
        if not _has_file_handler(logger):
            logger.addHandler(_file_handler(log_file_path()))
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        _logger = logger
    return _logger


def set_level(level: str | int) -> None:
    """Set the package log level from a name such as ``"INFO"`` or a number."""
    get_logger().setLevel(level)
