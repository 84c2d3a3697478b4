"""
Activity event logging utilities for DESKMATE (Tier 2 logging).

Provides uniform interfaces for logging activity events to activity_events.log.
Every command that mutates the document records what it did here, in JSON Lines
format (one JSON object per line), so the history of a reminder, skill or class
can be reconstructed without diffing document snapshots.

For detailed within-context logging (Tier 1), use deskmate.utils.logger instead.

Usage:
    from deskmate.utils.event_logging import log_activity_event, log_status_change

    log_activity_event(
        event_type="reminder_created",
        subject_id="5f1c...",
        source="cli",
        important=True,
    )

    log_status_change(
        subject_id="5f1c...",
        old_status="pending",
        new_status="done",
        source="reminders",
    )
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from deskmate.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
ACTIVITY_EVENTS_FILE = Path(
    os.getenv("ACTIVITY_EVENTS_FILE", str(LOGS_PATH / "activity_events.log"))
)


def log_activity_event(
    event_type: str,
    subject_id: Optional[str],
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> None:
    """
    Log an event to the activity event log.

    The event log is auxiliary: a write failure is reported through loguru and
    never interrupts the command that produced the event.

    Args:
        event_type: Type of event (e.g., "reminder_created", "notification_fired")
        subject_id: Identifier of the reminder/skill/class the event is about
        source: Event source (e.g., "reminders", "monitor", "cli")
        events_file: Override log location (defaults to ACTIVITY_EVENTS_FILE)
        **extra_fields: Additional event-specific fields
    """
    path = events_file or ACTIVITY_EVENTS_FILE

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "subject_id": subject_id,
        "source": source,
        **extra_fields,
    }

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, default=str) + "\n")
    except OSError as e:
        logger.warning(f"Could not write activity event '{event_type}' to {path}: {e}")


def log_status_change(
    subject_id: str, old_status: str, new_status: str, source: str, **extra_fields
) -> None:
    """
    Log status change event.

    Pure logging function - does NOT update the document.
    Called by command functions after they persist the change.
    """
    log_activity_event(
        event_type="status_change",
        subject_id=subject_id,
        source=source,
        old_status=old_status,
        new_status=new_status,
        **extra_fields,
    )


def get_recent_events(
    n: int = 10,
    subject_id: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> list[dict]:
    """
    Get the last n events from the activity log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        subject_id: Filter to only events about this reminder/skill/class (optional)
        event_type: Filter to only events of this type (optional)
        events_file: Override log location (defaults to ACTIVITY_EVENTS_FILE)

    Returns:
        List of event dicts (most recent last)

    Example:
        # Last 20 notifications
        events = get_recent_events(20, event_type="notification_fired")
    """
    path = events_file or ACTIVITY_EVENTS_FILE
    if not path.exists():
        return []

    events = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if subject_id:
        events = [e for e in events if e.get("subject_id") == subject_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
