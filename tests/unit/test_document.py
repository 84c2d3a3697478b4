"""Unit tests for the document schema and its migrations."""

import copy

import pytest

from deskmate.contexts.storage.document import (
    COLLECTION_DEFAULTS,
    SCHEMA_VERSION,
    default_document,
    document_version,
    migrate_document,
)

LEGACY_DOCUMENT = {
    "reminders": [],
    "history": [],
    "skills": [
        {"id": "1699", "name": "Python", "level": "advanced", "addedAt": "2024-05-01T10:00:00"},
        {"id": "1700", "name": "python", "level": "beginner", "addedAt": "2024-05-02T10:00:00"},
        {"id": "1701", "name": "Figma", "level": "beginner", "addedAt": "2024-05-03T10:00:00"},
    ],
    "schedule": [
        {"time": "08:00", "activity": "Calculus"},
        {"time": "10:30", "activity": "Chemistry lab"},
    ],
    "subjects": [{"id": "s1", "name": "Calculus"}],
    "attendance": [],
    "emailConfig": None,
    "theme": "dark",
}


@pytest.mark.unit
def test_default_document_is_current_and_empty():
    document = default_document()

    assert document["schemaVersion"] == SCHEMA_VERSION
    for key in COLLECTION_DEFAULTS:
        assert key in document
    assert document["reminders"] == []
    assert document["emailConfig"] is None


@pytest.mark.unit
def test_default_documents_are_independent():
    first = default_document()
    first["reminders"].append({"id": "x"})
    assert default_document()["reminders"] == []


@pytest.mark.unit
def test_unversioned_document_is_version_1():
    assert document_version({"reminders": []}) == 1
    assert document_version({"schemaVersion": "garbage"}) == 1


class TestMigrationToV2:
    """Version 1 (skills/schedule) to version 2 (learnedSkills/classes)."""

    @pytest.mark.unit
    def test_skills_become_learned_skills(self):
        document = migrate_document(copy.deepcopy(LEGACY_DOCUMENT))

        assert "skills" not in document
        assert [s["name"] for s in document["learnedSkills"]] == ["Python", "Figma"]
        assert all(s["source"] == "manual" for s in document["learnedSkills"])
        assert document["learnedSkills"][0]["level"] == "advanced"
        assert document["resumeSkills"] == []

    @pytest.mark.unit
    def test_schedule_becomes_classes(self):
        document = migrate_document(copy.deepcopy(LEGACY_DOCUMENT))

        assert "schedule" not in document
        assert [(c["time"], c["activity"], c["day"]) for c in document["classes"]] == [
            ("08:00", "Calculus", None),
            ("10:30", "Chemistry lab", None),
        ]
        assert all(c["id"] for c in document["classes"])

    @pytest.mark.unit
    def test_unknown_keys_and_other_collections_preserved(self):
        document = migrate_document(copy.deepcopy(LEGACY_DOCUMENT))

        assert document["theme"] == "dark"
        assert document["subjects"] == [{"id": "s1", "name": "Calculus"}]
        assert document["schemaVersion"] == SCHEMA_VERSION

    @pytest.mark.unit
    def test_migration_is_idempotent(self):
        once = migrate_document(copy.deepcopy(LEGACY_DOCUMENT))
        twice = migrate_document(copy.deepcopy(once))

        assert twice == once

    @pytest.mark.unit
    def test_empty_legacy_document_gets_all_collections(self):
        document = migrate_document({})

        assert document == default_document()

    @pytest.mark.unit
    def test_current_document_missing_collection_is_filled(self):
        document = default_document()
        del document["attendance"]
        document["classes"] = None

        migrated = migrate_document(document)

        assert migrated["attendance"] == []
        assert migrated["classes"] == []
