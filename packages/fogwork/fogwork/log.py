"""Sink setup for hosts that want fogwork's log output."""
from __future__ import annotations

import sys

from loguru import logger

_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <7}</level> | "
    "<cyan>{name}</cyan> - {message}"
)


def configure_logging(level: str = "INFO") -> int:
    """Replace loguru's default sink with a stderr sink at ``level``.

    Returns the sink id so callers can remove it again.
    """
    logger.remove()
    return logger.add(sys.stderr, level=level.upper(), format=_FORMAT)
