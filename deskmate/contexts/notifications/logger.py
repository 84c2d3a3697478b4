"""
Notifications context logger.

Provides logging interface for the notifications context with automatic [notify] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[notify]"


def _log_info(message: str) -> None:
    """Log info message with [notify] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [notify] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [notify] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [notify] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [notify] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
