"""Loguru setup for the command line tools."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
) -> None:
    """Replace loguru's default handler with a stderr sink and an optional file."""

    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=True, backtrace=True)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            format=LOG_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            backtrace=True,
        )
