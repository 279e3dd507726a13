"""Logger configuration."""

import sys
from pathlib import Path

from loguru import logger

from .config import Settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> "
    "<cyan>{name}</cyan> {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} {level: <7} {name}:{line} {message}"


def setup_logger(settings: Settings) -> None:
    """Route loguru output to stderr, plus ``settings.log_file`` when set.

    Safe to call more than once: existing sinks are replaced.
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=settings.log_level, colorize=True)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=settings.log_level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
        )

    logger.debug(f"Logging at {settings.log_level} (file: {settings.log_file or 'none'})")
