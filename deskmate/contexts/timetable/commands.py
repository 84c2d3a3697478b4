"""
Timetable commands.

The "classes" collection is kept sorted by weekday then time after every write.
"""

from typing import Iterable, Optional, Union

from deskmate.contexts.storage.repository import DocumentRepository
from deskmate.contexts.timetable.logger import _log_debug, _log_info
from deskmate.contexts.timetable.models import WEEKDAYS, ClassEntry
from deskmate.utils.event_logging import log_activity_event
from deskmate.utils.validation import require_choice


def _sorted_dicts(entries: Iterable[ClassEntry]) -> list[dict]:
    return [entry.to_dict() for entry in sorted(entries, key=ClassEntry.sort_key)]


def _is_blank(item: dict) -> bool:
    return not str(item.get("time") or "").strip() or not str(item.get("activity") or "").strip()


def save_schedule(repo: DocumentRepository, entries: Iterable[Union[ClassEntry, dict]]) -> dict:
    """
    Replace the whole timetable.

    Rows with a blank time or activity are dropped; the rest are validated.

    Args:
        repo: Document repository
        entries: ClassEntry objects or {time, activity, day?, id?} dicts

    Returns:
        The updated document

    Raises:
        ValidationError: A non-blank row has a malformed time or unknown weekday
    """
    validated = []
    for entry in entries:
        item = entry.to_dict() if isinstance(entry, ClassEntry) else dict(entry)
        if _is_blank(item):
            continue
        checked = ClassEntry.create(item["time"], item["activity"], item.get("day"))
        if item.get("id"):
            checked.id = str(item["id"])
        validated.append(checked)

    document = repo.get()
    document["classes"] = _sorted_dicts(validated)
    repo.put(document)

    _log_info(f"Saved timetable with {len(validated)} class(es)")
    log_activity_event(
        event_type="schedule_saved", subject_id=None, source="timetable", count=len(validated)
    )
    return document


def save_class(
    repo: DocumentRepository, time: str, activity: str, day: Optional[str] = None
) -> ClassEntry:
    """
    Add one class to the timetable.

    Raises:
        ValidationError: Malformed time, empty activity or unknown weekday
    """
    entry = ClassEntry.create(time, activity, day)

    document = repo.get()
    entries = [ClassEntry.from_dict(c) for c in document["classes"]] + [entry]
    document["classes"] = _sorted_dicts(entries)
    repo.put(document)

    log_activity_event(
        event_type="class_added",
        subject_id=entry.id,
        source="timetable",
        day=entry.day,
        time=entry.time,
    )
    return entry


def delete_class(repo: DocumentRepository, class_id: str) -> dict:
    """Remove a class by id. Returns the updated document."""
    document = repo.get()
    before = len(document["classes"])
    document["classes"] = [c for c in document["classes"] if c.get("id") != class_id]

    if len(document["classes"]) != before:
        repo.put(document)
        log_activity_event(event_type="class_deleted", subject_id=class_id, source="timetable")
    else:
        _log_debug(f"No class with id {class_id}")
    return document


def classes_for_day(document: dict, day: str) -> list[ClassEntry]:
    """
    Classes held on a weekday, including every-day slots, ordered by time.

    Raises:
        ValidationError: Unknown weekday
    """
    day = require_choice(day, WEEKDAYS, "day")
    entries = [ClassEntry.from_dict(c) for c in document.get("classes", [])]
    return sorted((e for e in entries if e.day in (None, day)), key=lambda e: e.time)
