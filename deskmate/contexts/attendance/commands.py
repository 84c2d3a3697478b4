"""
Subjects and attendance.

Document collections:

    subjects    [{"id": "...", "name": "Physics"}]
    attendance  [{"id": "...", "subjectId": "...", "subjectName": "Physics",
                  "day": "monday", "date": "2025-11-17", "timestamp": "..."}]

The subject name is copied into each attendance record, so deleting a subject
keeps its past records readable. Statistics only cover current subjects.
"""

import uuid
from datetime import date as date_type
from datetime import datetime
from typing import Iterable, Optional, Union

from deskmate.contexts.attendance.logger import _log_debug, _log_info
from deskmate.contexts.storage.repository import DocumentRepository
from deskmate.contexts.timetable.models import WEEKDAYS
from deskmate.utils.event_logging import log_activity_event
from deskmate.utils.timestamp import utc_now
from deskmate.utils.validation import ValidationError, require_choice, require_text


# =============================================================================
# SUBJECTS
# =============================================================================


def save_subjects(repo: DocumentRepository, subjects: Iterable[Union[str, dict]]) -> dict:
    """
    Replace the subject list.

    Args:
        repo: Document repository
        subjects: Subject dicts ({id?, name}) or bare names; blank names are dropped

    Returns:
        The updated document
    """
    cleaned = []
    for subject in subjects:
        item = {"name": subject} if isinstance(subject, str) else dict(subject)
        name = str(item.get("name") or "").strip()
        if name:
            cleaned.append({"id": str(item.get("id") or uuid.uuid4().hex), "name": name})

    document = repo.get()
    document["subjects"] = cleaned
    repo.put(document)

    log_activity_event(
        event_type="subjects_saved", subject_id=None, source="attendance", count=len(cleaned)
    )
    return document


def add_subject(repo: DocumentRepository, name: str) -> dict:
    """
    Add a subject.

    Returns:
        The new subject record

    Raises:
        ValidationError: Empty name
    """
    name = require_text(name, "subject name")
    subject = {"id": uuid.uuid4().hex, "name": name}

    document = repo.get()
    document["subjects"].append(subject)
    repo.put(document)

    _log_info(f"Added subject '{name}'")
    log_activity_event(event_type="subject_added", subject_id=subject["id"], source="attendance")
    return subject


def delete_subject(repo: DocumentRepository, subject_id: str) -> dict:
    """Remove a subject. Its attendance records are kept. Returns the updated document."""
    document = repo.get()
    before = len(document["subjects"])
    document["subjects"] = [s for s in document["subjects"] if s.get("id") != subject_id]

    if len(document["subjects"]) != before:
        repo.put(document)
        log_activity_event(event_type="subject_deleted", subject_id=subject_id, source="attendance")
    else:
        _log_debug(f"No subject with id {subject_id}")
    return document


# =============================================================================
# ATTENDANCE
# =============================================================================


def mark_attendance(
    repo: DocumentRepository,
    subject_id: str,
    day: str,
    date: str,
    now: Optional[datetime] = None,
) -> dict:
    """
    Record attendance of one class.

    Args:
        repo: Document repository
        subject_id: Subject attended
        day: Weekday name
        date: Calendar date, "YYYY-MM-DD"
        now: Recording time (defaults to current UTC time)

    Returns:
        The new attendance record

    Raises:
        ValidationError: Missing field, unknown weekday, malformed date or unknown subject
    """
    if not subject_id or not day or not date:
        raise ValidationError("Please fill in all fields")

    day = require_choice(day, WEEKDAYS, "day")
    try:
        date = date_type.fromisoformat(str(date).strip()).isoformat()
    except ValueError as e:
        raise ValidationError(f"Invalid date '{date}' (expected YYYY-MM-DD)", field="date") from e

    document = repo.get()
    subject = next((s for s in document["subjects"] if s.get("id") == subject_id), None)
    if subject is None:
        raise ValidationError("Subject not found", field="subject")

    record = {
        "id": uuid.uuid4().hex,
        "subjectId": subject_id,
        "subjectName": subject.get("name", ""),
        "day": day,
        "date": date,
        "timestamp": (now or utc_now()).isoformat(),
    }
    document["attendance"].append(record)
    repo.put(document)

    _log_info(f"Marked attendance for {record['subjectName']} on {date}")
    log_activity_event(
        event_type="attendance_marked", subject_id=subject_id, source="attendance", date=date
    )
    return record


def attendance_stats(document: dict) -> dict[str, int]:
    """
    Classes attended per current subject, keyed by subject name.

    Subjects with no records count zero.
    """
    counts = {}
    for record in document.get("attendance", []):
        counts[record.get("subjectId")] = counts.get(record.get("subjectId"), 0) + 1

    return {s.get("name", ""): counts.get(s.get("id"), 0) for s in document.get("subjects", [])}


def recent_attendance(document: dict, n: int = 10) -> list[dict]:
    """The n most recently recorded attendance records, newest first."""
    records = sorted(document.get("attendance", []), key=lambda r: str(r.get("timestamp", "")))
    return list(reversed(records))[:n]
