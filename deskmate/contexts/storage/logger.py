"""
Storage context logger.

Provides logging interface for the storage context with automatic [storage] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[storage]"


def _log_info(message: str) -> None:
    """Log info message with [storage] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [storage] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [storage] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [storage] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
