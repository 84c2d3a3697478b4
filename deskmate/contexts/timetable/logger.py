"""
Timetable context logger.

Provides logging interface for the timetable context with automatic [timetable] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[timetable]"


def _log_info(message: str) -> None:
    """Log info message with [timetable] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [timetable] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
