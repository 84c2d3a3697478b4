"""
Document schema and migrations for the Storage context.

The whole application state is one JSON object. Two shapes exist in the wild:

    Version 1 (no "schemaVersion" key):
        reminders, history, skills, schedule, subjects, attendance, emailConfig

    Version 2 (current):
        reminders, history, resumeSkills, learnedSkills, classes, subjects,
        attendance, emailConfig, schemaVersion

Migrations are applied sequentially in version order whenever a document is
loaded, so every caller only ever sees the current shape.
"""

import copy
import uuid
from typing import Callable, Dict

from deskmate.contexts.storage.logger import _log_debug, _log_info

SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schemaVersion"

# Collections present in every current document (key -> empty value)
COLLECTION_DEFAULTS = {
    "reminders": [],
    "history": [],
    "resumeSkills": [],
    "learnedSkills": [],
    "classes": [],
    "subjects": [],
    "attendance": [],
    "emailConfig": None,
}


def default_document() -> dict:
    """Return a fresh, empty document in the current schema."""
    document = copy.deepcopy(COLLECTION_DEFAULTS)
    document[SCHEMA_VERSION_KEY] = SCHEMA_VERSION
    return document


def document_version(document: dict) -> int:
    """
    Determine the schema version of a document.

    Documents without an explicit version are version 1.
    """
    try:
        return int(document.get(SCHEMA_VERSION_KEY, 1))
    except (TypeError, ValueError):
        return 1


def fill_missing_collections(document: dict) -> dict:
    """Add any missing (or null) collection with its empty default."""
    for key, default in COLLECTION_DEFAULTS.items():
        if document.get(key) is None:
            document[key] = copy.deepcopy(default)
    return document


def migrate_to_2(document: dict) -> None:
    """
    Migration to version 2: split skills, rename schedule to classes.

    - Manually tracked "skills" become "learnedSkills" (tagged source="manual").
      "resumeSkills" starts empty; it is filled by the next resume upload.
    - "schedule" items {time, activity} become "classes" entries with an id and
      no weekday.
    - Missing collections get their defaults. Unknown keys are left alone.
    """
    legacy_skills = document.pop("skills", None) or []
    learned = document.setdefault("learnedSkills", [])
    known = {str(s.get("name", "")).lower() for s in learned}
    for skill in legacy_skills:
        name = str(skill.get("name", "")).strip()
        if not name or name.lower() in known:
            continue
        learned.append(
            {
                "id": skill.get("id") or uuid.uuid4().hex,
                "name": name,
                "level": skill.get("level"),
                "source": "manual",
                "addedAt": skill.get("addedAt"),
            }
        )
        known.add(name.lower())

    legacy_schedule = document.pop("schedule", None) or []
    classes = document.setdefault("classes", [])
    for item in legacy_schedule:
        classes.append(
            {
                "id": item.get("id") or uuid.uuid4().hex,
                "day": item.get("day"),
                "time": item.get("time"),
                "activity": item.get("activity"),
            }
        )

    fill_missing_collections(document)

    _log_info(
        f"Migrated document to schema 2 ({len(legacy_skills)} skills, "
        f"{len(legacy_schedule)} schedule items)"
    )


# Migration registry: target version -> migration function
# Migrations are applied sequentially in version order
MIGRATIONS: Dict[int, Callable[[dict], None]] = {
    2: migrate_to_2,
}


def migrate_document(document: dict) -> dict:
    """
    Bring a document up to SCHEMA_VERSION.

    Applies every registered migration newer than the document's version, in
    order, stamping the version after each one. Already-current documents are
    returned unchanged.

    Args:
        document: Parsed document (mutated in place)

    Returns:
        The same document, now in the current schema
    """
    current = document_version(document)

    if current >= SCHEMA_VERSION:
        _log_debug(f"Document already at schema {current}, no migration needed")
        return fill_missing_collections(document)

    for version in sorted(v for v in MIGRATIONS if current < v <= SCHEMA_VERSION):
        MIGRATIONS[version](document)
        document[SCHEMA_VERSION_KEY] = version

    document[SCHEMA_VERSION_KEY] = SCHEMA_VERSION
    return document
