"""
Skills context logger.

Provides logging interface for the skills context with automatic [skills] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[skills]"


def _log_info(message: str) -> None:
    """Log info message with [skills] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [skills] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [skills] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
