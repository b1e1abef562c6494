import sys
from typing import Optional

from loguru import logger

from bind_manager.core.constants import LOG_FILE, LOG_LEVEL

STDERR_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(level: str = LOG_LEVEL, log_file: Optional[str] = LOG_FILE) -> None:
    """Configure loguru sinks for a CLI run."""
    logger.remove()  # Remove default handler

    # Add stderr handler only if available
    if sys.stderr:
        logger.add(sys.stderr, format=STDERR_FORMAT, level=level.upper())

    if log_file:
        logger.add(
            log_file,
            rotation="1 MB",
            retention="10 days",
            format=FILE_FORMAT,
            level="DEBUG",
        )
