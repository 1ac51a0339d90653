"""Logging helpers for tiny-qsim.

All package loggers live under the ``tiny_qsim`` namespace and write to
stderr. They are quiet (WARNING) unless the level is lowered.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a package logger.

    Args:
        name: Logger name, typically ``__name__``. Names outside the
            ``tiny_qsim`` namespace are prefixed with it.

    Returns:
        Configured logger instance.

    Example:
        >>> from tiny_qsim.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("expanding gate")
    """
    if name is None:
        name = "tiny_qsim"
    logger_name = name if name.startswith("tiny_qsim") else f"tiny_qsim.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every tiny-qsim logger, current and future.

    Args:
        level: ``logging.DEBUG`` etc., or a level name such as ``"INFO"``.
    """
    global _DEFAULT_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _DEFAULT_LEVEL = level
