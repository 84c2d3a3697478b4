"""
Reminder commands.

Every command re-reads the document, validates its input, mutates the document in
memory and writes it back whole, then records an activity event.

Lifecycle:
    pending --done/cancelled--> moved from "reminders" to the append-only "history"
    Completing a reminder ("done") also teaches the skills inventory whatever
    skills its text mentions.
"""

import uuid
from datetime import datetime
from typing import Optional

from deskmate.contexts.reminders.logger import _log_info, _log_success, _log_warning
from deskmate.contexts.reminders.models import Reminder, ReminderStatus
from deskmate.contexts.skills.commands import union_learned_skills
from deskmate.contexts.skills.extractor import extract
from deskmate.contexts.skills.vocabulary import SkillVocabulary
from deskmate.contexts.storage.repository import DocumentRepository
from deskmate.utils.event_logging import log_activity_event, log_status_change
from deskmate.utils.timestamp import parse_timestamp, utc_now
from deskmate.utils.validation import ValidationError, require_choice, require_text


def create_reminder(
    repo: DocumentRepository,
    text: str,
    deadline,
    important: bool = False,
    description: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Reminder:
    """
    Create a pending reminder.

    Args:
        repo: Document repository
        text: What to be reminded of
        deadline: datetime or ISO 8601 string (naive values are taken as UTC)
        important: Use the important escalation policy (50/80/95%)
        description: Optional longer text, also scanned for skills on completion
        now: Creation time (defaults to current UTC time)

    Returns:
        The stored reminder

    Raises:
        ValidationError: Missing text or deadline, or malformed deadline
    """
    text = require_text(text, "reminder text")
    if deadline is None or (isinstance(deadline, str) and not deadline.strip()):
        raise ValidationError("Please enter a deadline", field="deadline")
    try:
        deadline = parse_timestamp(deadline)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid deadline '{deadline}'", field="deadline") from e

    reminder = Reminder(
        id=uuid.uuid4().hex,
        text=text,
        description=(description or "").strip() or None,
        deadline=deadline,
        created_at=now or utc_now(),
        important=bool(important),
    )
    if reminder.deadline <= reminder.created_at:
        _log_warning(f"Reminder '{text}' has a deadline in the past; it will never escalate")

    document = repo.get()
    document["reminders"].append(reminder.to_dict())
    repo.put(document)

    _log_info(f"Created reminder {reminder.id}: {text}")
    log_activity_event(
        event_type="reminder_created",
        subject_id=reminder.id,
        source="reminders",
        important=reminder.important,
        deadline=reminder.deadline.isoformat(),
    )
    return reminder


def update_reminder_status(
    repo: DocumentRepository,
    reminder_id: str,
    status: str,
    vocabulary: Optional[SkillVocabulary] = None,
    now: Optional[datetime] = None,
) -> dict:
    """
    Change a reminder's status.

    "done" and "cancelled" move the reminder into history with a completion time;
    "done" additionally unions the skills mentioned in its text and description
    into learnedSkills.

    Args:
        repo: Document repository
        reminder_id: Reminder to update
        status: "pending", "done" or "cancelled"
        vocabulary: Skill vocabulary for extraction (defaults to the configured one)
        now: Completion time (defaults to current UTC time)

    Returns:
        The updated document (unchanged if no active reminder has that id)

    Raises:
        ValidationError: Unknown status
    """
    new_status = ReminderStatus(require_choice(status, ReminderStatus.values(), "status"))
    now = now or utc_now()

    document = repo.get()
    index = next(
        (
            i
            for i, r in enumerate(document["reminders"])
            if isinstance(r, dict) and r.get("id") == reminder_id
        ),
        None,
    )
    if index is None:
        _log_warning(f"No active reminder with id {reminder_id}")
        return document

    reminder = Reminder.from_dict(document["reminders"][index])
    old_status = reminder.status
    reminder.status = new_status

    learned = []
    if new_status == ReminderStatus.PENDING:
        document["reminders"][index] = reminder.to_dict()
    else:
        reminder.completed_at = now
        document["history"].append(reminder.to_dict())
        del document["reminders"][index]

        if new_status == ReminderStatus.DONE:
            found = extract(reminder.extraction_text(), vocabulary)
            learned = union_learned_skills(document, found, reminder_id=reminder.id, now=now)

    repo.put(document)

    _log_info(f"Reminder {reminder_id}: {old_status.value} -> {new_status.value}")
    log_status_change(
        subject_id=reminder_id,
        old_status=old_status.value,
        new_status=new_status.value,
        source="reminders",
    )
    if learned:
        _log_success(f"Learned from reminder: {', '.join(learned)}")
        log_activity_event(
            event_type="skills_learned", subject_id=reminder_id, source="reminders", skills=learned
        )
    return document


def delete_reminder(repo: DocumentRepository, reminder_id: str) -> dict:
    """Remove an active reminder without recording it in history."""
    document = repo.get()
    before = len(document["reminders"])
    document["reminders"] = [
        r for r in document["reminders"] if not (isinstance(r, dict) and r.get("id") == reminder_id)
    ]

    if len(document["reminders"]) != before:
        repo.put(document)
        _log_info(f"Deleted reminder {reminder_id}")
        log_activity_event(event_type="reminder_deleted", subject_id=reminder_id, source="reminders")
    else:
        _log_warning(f"No active reminder with id {reminder_id}")
    return document


def _parse_all(records: list) -> list[Reminder]:
    reminders = []
    for record in records:
        if not isinstance(record, dict):
            _log_warning(f"Skipping malformed reminder entry: {record!r}")
            continue
        try:
            reminders.append(Reminder.from_dict(record))
        except (ValueError, TypeError) as e:
            _log_warning(f"Skipping unreadable reminder {record.get('id')}: {e}")
    return reminders


def list_reminders(repo: DocumentRepository) -> list[Reminder]:
    """Active reminders in insertion order."""
    return _parse_all(repo.get()["reminders"])


def list_history(repo: DocumentRepository) -> list[Reminder]:
    """Completed and cancelled reminders, most recently completed first."""
    return list(reversed(_parse_all(repo.get()["history"])))
