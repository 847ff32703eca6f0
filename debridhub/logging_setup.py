"""
Logging configuration
"""
import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level: Optional[str] = None) -> int:
    """Replace loguru's default sink with a formatted stdout sink, returns the sink id"""
    if level is None:
        from debridhub.config import get_settings
        level = get_settings().log_level

    logger.remove()
    return logger.add(sys.stdout, format=LOG_FORMAT, level=level.upper())
