"""Logging configuration using loguru."""

import sys

from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(json_logs: bool = False, log_level: str = "INFO") -> None:
    """Configure loguru for the application.

    Args:
        json_logs: If True, output logs as JSON
        log_level: Minimum log level to output
    """
    # Remove default handler
    logger.remove()
    logger.enable("sheet_selection")

    if json_logs:
        logger.add(sys.stderr, format="{message}", level=log_level, serialize=True)
    else:
        logger.add(sys.stderr, format=_FORMAT, level=log_level, colorize=True)


# Re-export logger for convenience
__all__ = ["logger", "setup_logging"]
