"""Logging configuration for ragllm.

Library modules only call ``logging.getLogger(__name__)``. Applications
call ``configure_logging`` once at startup, usually with the configured
``log_level``.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "ragllm"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Module-level state
_handler: Optional[logging.Handler] = None


def parse_level(level: str | int) -> int:
    """Convert a level name such as ``"debug"`` to its number.

    Unknown names fall back to INFO.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    level: str | int = "INFO",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Install a single formatted handler on the ``ragllm`` logger.

    Calling it again replaces the previous handler rather than stacking a
    second one.

    Args:
        level: Level name or number.
        stream: Output stream (default stderr).

    Returns:
        The package logger.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(parse_level(level))
    return logger


def reset_logging() -> None:
    """Remove the handler installed by ``configure_logging``."""
    global _handler

    if _handler is not None:
        logging.getLogger(LOGGER_NAME).removeHandler(_handler)
        _handler.close()
        _handler = None
