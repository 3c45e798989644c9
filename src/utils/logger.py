"""Centralised loguru logger shared by every layer of the project."""
from __future__ import annotations

import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Replace the default loguru sink with a single stderr sink at ``level``."""

    logger.remove()
    logger.add(sys.stderr, level=str(level).upper())


__all__ = ["configure_logging", "logger"]
