"""Logging configuration"""
import logging
import sys
from typing import Optional

from breadmade.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("breadmade")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach the stdout handler once and apply the level

    Args:
        level: Level name such as ``INFO``; defaults to ``LOG_LEVEL``

    Returns:
        The application logger
    """
    numeric_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(numeric_level)
    return logger


configure_logging()
