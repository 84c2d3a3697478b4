"""
Skills inventory commands.

The document keeps two skill collections:

    resumeSkills   skills declared on the most recently uploaded resume
                   (replaced wholesale on every upload)
    learnedSkills  skills picked up from completed reminders or added by hand
                   (insert-if-absent, only shrinks through delete_skill)

Each record looks like:
    {"id": "...", "name": "React", "source": "reminder", "addedAt": "...",
     "level": null, "reminderId": "..."}

"New" skills are the learned ones the resume does not mention yet. That view is
recomputed on demand and never stored.
"""

import uuid
from datetime import datetime
from typing import Iterable, Optional

from deskmate.contexts.skills.extractor import extract, missing_from
from deskmate.contexts.skills.logger import _log_debug, _log_info, _log_success
from deskmate.contexts.skills.vocabulary import SkillVocabulary
from deskmate.contexts.storage.repository import DocumentRepository
from deskmate.utils.event_logging import log_activity_event
from deskmate.utils.timestamp import utc_now
from deskmate.utils.validation import require_choice, require_text

SKILL_LEVELS = ("beginner", "intermediate", "advanced", "expert")


def _skill_record(
    name: str,
    source: str,
    now: datetime,
    level: Optional[str] = None,
    reminder_id: Optional[str] = None,
) -> dict:
    record = {
        "id": uuid.uuid4().hex,
        "name": name,
        "source": source,
        "level": level,
        "addedAt": now.isoformat(),
    }
    if reminder_id:
        record["reminderId"] = reminder_id
    return record


def union_learned_skills(
    document: dict,
    names: Iterable[str],
    source: str = "reminder",
    reminder_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> list[str]:
    """
    Add names to the document's learnedSkills unless already present.

    Operates on an already-loaded document (no I/O), so it can run inside another
    command's read-modify-write cycle.

    Returns:
        Names actually added, in sorted order
    """
    now = now or utc_now()
    learned = document.setdefault("learnedSkills", [])
    added = missing_from(sorted(names), (s.get("name", "") for s in learned))

    for name in added:
        learned.append(_skill_record(name, source, now, reminder_id=reminder_id))
    return added


def record_learned_skills(
    repo: DocumentRepository,
    names: Iterable[str],
    source_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> list[str]:
    """
    Union skill names into the learned-skills collection.

    Returns:
        Newly added names (empty if all were already known)
    """
    document = repo.get()
    added = union_learned_skills(document, names, reminder_id=source_id, now=now)

    if added:
        repo.put(document)
        _log_success(f"Learned {len(added)} new skill(s): {', '.join(added)}")
        log_activity_event(
            event_type="skills_learned", subject_id=source_id, source="skills", skills=added
        )
    else:
        _log_debug("No new skills learned")
    return added


def save_resume_skills(
    repo: DocumentRepository,
    text: str,
    vocabulary: Optional[SkillVocabulary] = None,
    now: Optional[datetime] = None,
) -> set[str]:
    """
    Extract skills from resume text and replace the resume-declared collection.

    The last uploaded resume wins: skills from earlier resumes are dropped.

    Returns:
        Canonical skill names found in the resume
    """
    now = now or utc_now()
    found = extract(text, vocabulary)

    document = repo.get()
    document["resumeSkills"] = [_skill_record(name, "resume", now) for name in sorted(found)]
    repo.put(document)

    _log_info(f"Resume declares {len(found)} skill(s)")
    log_activity_event(
        event_type="resume_skills_saved", subject_id=None, source="skills", skills=sorted(found)
    )
    return found


def create_skill(
    repo: DocumentRepository,
    name: str,
    level: str = "beginner",
    now: Optional[datetime] = None,
) -> dict:
    """
    Add a skill by hand to the learned-skills collection.

    Returns:
        The new record, or the existing record if a skill of that name exists

    Raises:
        ValidationError: Empty name or unknown level
    """
    name = require_text(name, "skill name")
    level = require_choice(level, SKILL_LEVELS, "skill level")

    document = repo.get()
    learned = document.setdefault("learnedSkills", [])
    for record in learned:
        if str(record.get("name", "")).lower() == name.lower():
            _log_debug(f"Skill '{name}' already tracked")
            return record

    record = _skill_record(name, "manual", now or utc_now(), level=level)
    learned.append(record)
    repo.put(document)

    log_activity_event(event_type="skill_created", subject_id=record["id"], source="skills", name=name)
    return record


def delete_skill(repo: DocumentRepository, skill_id: str) -> dict:
    """Remove a skill record from either collection. Returns the updated document."""
    document = repo.get()
    removed = False
    for key in ("learnedSkills", "resumeSkills"):
        before = len(document.get(key, []))
        document[key] = [s for s in document.get(key, []) if s.get("id") != skill_id]
        removed = removed or len(document[key]) != before

    if removed:
        repo.put(document)
        log_activity_event(event_type="skill_deleted", subject_id=skill_id, source="skills")
    else:
        _log_debug(f"No skill with id {skill_id}")
    return document


def skill_names(document: dict, collection: str) -> list[str]:
    """Names in one skill collection ("learnedSkills" or "resumeSkills")."""
    return [s.get("name", "") for s in document.get(collection, [])]


def new_skills(document: dict) -> list[str]:
    """
    Learned skills that the resume does not declare (case-insensitive).

    Returns:
        Sorted names
    """
    return sorted(missing_from(skill_names(document, "learnedSkills"), skill_names(document, "resumeSkills")))
