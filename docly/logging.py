"""Logging setup for the ``docly`` logger tree."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT = "docly"
_CONSOLE_FORMAT = "[docly] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``docly`` or a child such as ``docly.orchestrator``."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def _handler(handler: logging.Handler, fmt: str, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Route docly records to stderr and, when ``log_file`` is given, to that file.

    The file sink always records at DEBUG so a run can be diagnosed after the
    fact without re-running with ``--verbose``. Calling this again replaces
    the previously installed handlers.
    """
    logger = logging.getLogger(_ROOT)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    console_level = logging.DEBUG if verbose else logging.INFO
    logger.addHandler(_handler(logging.StreamHandler(), _CONSOLE_FORMAT, console_level))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT, logging.DEBUG)
        )

    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False
    return logger


__all__ = ["configure_logging", "get_logger"]
