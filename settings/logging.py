"""Logging configuration."""

import os
import sys

from loguru import logger

from settings import LOG_DIR

LOG_LEVEL = os.getenv("CANVASS_LOG_LEVEL", "INFO")


def setup_logging(level: str | None = None, to_file: bool = True, serialize: bool = False):
    """Configure loguru sinks.

    Console output is colorized and terse. The optional file sink keeps a
    daily log with call-site info; ``serialize`` writes it as JSON lines so
    seed/clear runs can be audited by other tools.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>",
        level=level or LOG_LEVEL,
        colorize=True,
    )

    if to_file:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(
            LOG_DIR / "canvass_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="00:00",
            retention="14 days",
            compression="gz",
            serialize=serialize,
        )
        logger.info("Logging to {}", LOG_DIR)

    return logger
