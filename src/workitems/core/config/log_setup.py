"""Logging setup for workitems sessions."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "workitems"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_STREAM_FORMAT = "%(name)s %(message)s"
_FILE_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: str | int = logging.INFO,
    *,
    log_path: Path | None = None,
    stream: bool = True,
) -> logging.Logger:
    """Install handlers on the ``workitems`` logger.

    *stream* adds a stderr handler; *log_path* adds a rotating file handler.
    Calling it again replaces the handlers installed by a previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if stream:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter(_STREAM_FORMAT))
        logger.addHandler(stream_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        logger.addHandler(file_handler)
        logger.info("log file located at: %s", log_path)

    return logger
