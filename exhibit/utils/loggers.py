"""
Application and SQL loggers.

Both loggers write to files configured under ``loggers`` only when their
``log`` flag is on; otherwise the application logger gets a NullHandler and
SQL statements are not recorded.
"""
from __future__ import annotations

import logging
from pathlib import Path

from exhibit.config import logger_settings

APPLICATION_LOGGER = "exhibit.application"
SQL_LOGGER = "sqlalchemy.engine"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    target = str(path.resolve())
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def configure_application_logger(config) -> logging.Logger:
    settings = logger_settings(config, "application")
    logger = logging.getLogger(APPLICATION_LOGGER)
    if settings.log:
        if not _has_file_handler(logger, settings.path):
            logger.addHandler(_file_handler(settings.path))
    elif not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def configure_sql_logger(config) -> logging.Logger | None:
    settings = logger_settings(config, "sql")
    if not settings.log:
        return None
    logger = logging.getLogger(SQL_LOGGER)
    logger.setLevel(logging.INFO)
    if not _has_file_handler(logger, settings.path):
        logger.addHandler(_file_handler(settings.path))
    return logger


def logger_factory(services) -> logging.Logger:
    return configure_application_logger(services.config)
