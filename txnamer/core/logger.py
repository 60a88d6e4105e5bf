"""Package logger configuration."""

from __future__ import annotations

import logging
import sys
from typing import Literal

LogLevel = Literal["silent", "error", "warn", "info", "debug"]

PACKAGE_LOGGER_NAME = "txnamer"

_LEVELS: dict[str, int] = {
    "silent": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_current_level: LogLevel = "info"
_handler: logging.Handler | None = None


def configure_logger(log_level: LogLevel = "info", prefix: str = "TxNamer") -> None:
    """Attach a single stream handler to the package logger and set its level.

    Safe to call more than once; the handler is replaced, not duplicated.
    """
    global _handler

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(f"[{prefix}] %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(_handler)
    package_logger.propagate = False

    set_log_level(log_level)


def set_log_level(log_level: LogLevel) -> None:
    global _current_level

    if log_level not in _LEVELS:
        raise ValueError(f"Invalid log level '{log_level}', expected one of: {', '.join(_LEVELS)}")
    _current_level = log_level
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(_LEVELS[log_level])


def get_log_level() -> LogLevel:
    return _current_level
