"""Loguru configuration for the CLI.

Diagnostic logs always go to stderr; stdout is reserved for the lines
build scripts rely on.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_LEVELS: tuple[str, ...] = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_LOG_LEVEL: str = "WARNING"

_LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Replace loguru's default handler with a stderr sink at *level*."""
    logger.remove()
    logger.add(sink=sys.stderr, level=level.upper(), format=_LOG_FORMAT)
