"""Loguru sink setup for the command-line front end.

The library itself only emits records; it is disabled on import and
turned on here.
"""

from __future__ import annotations

import sys

from loguru import logger

_FORMAT = "<green>{time:HH:mm:ss}</green> <level>[{level}]</level> {message}"


def configure_logging(level: str = "WARNING") -> None:
    logger.remove()
    logger.add(sink=sys.stderr, level=level.upper(), format=_FORMAT, colorize=None)
    logger.enable("dnsstamp")
