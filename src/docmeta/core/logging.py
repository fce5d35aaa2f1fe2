"""Loguru sink configuration for command-line use.

Library modules log through ``loguru.logger`` directly and never add
sinks themselves; applications decide where output goes.
"""

import sys

from loguru import logger

_VERBOSE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
_COMPACT_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"


def configure_logging(level: str = "WARNING", verbose: bool = False) -> int:
    """Replace loguru's default sink with a stderr sink.

    Args:
        level: Minimum level name (e.g. "DEBUG", "INFO").
        verbose: Force DEBUG level and include source locations.

    Returns:
        The id of the added sink.
    """
    logger.remove()
    if verbose:
        return logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    return logger.add(sys.stderr, level=level.upper(), format=_COMPACT_FORMAT)
