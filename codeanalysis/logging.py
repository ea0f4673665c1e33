"""Logging utilities for the codeanalysis service and CLI.

Analyses run on the service's ``codeanalysis`` worker pool, so records carry
the thread name to tell concurrent requests apart.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "codeanalysis"

CONSOLE_FORMAT = "[codeanalysis] %(levelname)s %(message)s"
VERBOSE_CONSOLE_FORMAT = "[codeanalysis] %(levelname)s [%(threadName)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the codeanalysis hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the codeanalysis logger.

    Console output is always installed; ``verbose`` switches it to DEBUG and
    adds the worker thread and logger name. ``log_file`` adds a file sink,
    creating its directory when needed.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_format = VERBOSE_CONSOLE_FORMAT if verbose else CONSOLE_FORMAT
    logger.addHandler(_handler(logging.StreamHandler(), level, console_format))

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT)
        )

    return logger


__all__ = ["configure_logging", "get_logger"]
