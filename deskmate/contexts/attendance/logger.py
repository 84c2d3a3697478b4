"""
Attendance context logger.

Provides logging interface for the attendance context with automatic [attendance] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[attendance]"


def _log_info(message: str) -> None:
    """Log info message with [attendance] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [attendance] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
