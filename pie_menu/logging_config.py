"""Logging configuration for the server."""

from __future__ import annotations

import logging

from .config import AppConfig

LOGGER_NAME = "pie_menu"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
FILE_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(module)s:%(lineno)d | "
    "%(funcName)s | %(message)s"
)

# Library loggers whose records only go to the log file.
FILE_ONLY_LOGGERS = ("py.warnings", "asyncio")


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(config: AppConfig) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    _reset_handlers(logger)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
    file_handler.setLevel(config.file_log_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    logging.captureWarnings(True)
    for name in FILE_ONLY_LOGGERS:
        library_logger = logging.getLogger(name)
        library_logger.setLevel(logging.DEBUG)
        library_logger.propagate = False
        _reset_handlers(library_logger)
        library_logger.addHandler(file_handler)
    return logger
