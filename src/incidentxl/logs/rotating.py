"""Process-wide rotating log under the application home directory."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from incidentxl.fs.exports import app_home

LOG_NAME = "incidentxl.log"
MAX_BYTES = 1_500_000
BACKUP_COUNT = 5


def log_dir() -> Path:
    path = app_home() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def log_path() -> Path:
    return log_dir() / LOG_NAME


def _rotating_handlers(logger: logging.Logger):
    return [
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.handlers.RotatingFileHandler)
    ]


def get_logger(name: str = "incidentxl") -> logging.Logger:
    """Return the package logger with a rotating file handler at :func:`log_path`.

    A handler left over from a different application home is replaced.
    """

    logger = logging.getLogger(name)
    target = os.path.abspath(log_path())
    existing = _rotating_handlers(logger)
    if any(handler.baseFilename == target for handler in existing):
        return logger
    for handler in existing:
        logger.removeHandler(handler)
        handler.close()

    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    handler = logging.handlers.RotatingFileHandler(
        target, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["get_logger", "log_dir", "log_path"]
