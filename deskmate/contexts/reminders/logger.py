"""
Reminders context logger.

Provides logging interface for the reminders context with automatic [monitor] prefix.
All reminders modules should import from this module, not from loguru directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from deskmate.utils.logger import session_log_dir
from deskmate.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[monitor]"


def describe_tier_window(tier_window: Optional[float]) -> str:
    """Header form of a tier window: "1 points" or "open (percent >= threshold)"."""
    if tier_window is None:
        return "open (percent >= threshold)"
    return f"{tier_window:g} points"


def setup_monitor_logger(
    logs_root: Path,
    interval_seconds: float,
    data_file: Path,
    tier_window: Optional[float],
) -> Path:
    """
    Setup logger for a deadline monitor session.

    Creates a fresh monitor_YYYYmmdd_HHMMSS directory under `logs_root` and
    records the document path, polling period and tier window in the header,
    so a log can be matched to the settings that produced its alerts.

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="monitor",
        log_dir=session_log_dir(logs_root, "monitor"),
        provenance={
            "Data file": data_file,
            "Check interval": f"{interval_seconds:g}s",
            "Tier window": describe_tier_window(tier_window),
        },
        rotation="10 MB",
    )


# Wrapper functions with automatic [monitor] prefix


def _log_info(message: str) -> None:
    """Log info message with [monitor] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [monitor] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [monitor] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [monitor] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [monitor] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level monitor-specific logging helpers


def log_check_summary(active: int, evaluated: int, events: list) -> None:
    """Log the outcome of one monitor pass."""
    if events:
        _log_info(f"Checked {evaluated}/{active} reminder(s): {len(events)} notification(s) fired")
        for event in events:
            _log_debug(f"  {event.reminder_id} {event.tier_label}: {event.message}")
    else:
        _log_debug(f"Checked {evaluated}/{active} reminder(s): nothing to fire")
