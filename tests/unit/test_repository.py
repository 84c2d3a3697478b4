"""Unit tests for document repositories."""

import json

import pytest

from deskmate.contexts.storage.document import SCHEMA_VERSION, default_document
from deskmate.contexts.storage.exceptions import PersistenceError
from deskmate.contexts.storage.repository import (
    InMemoryDocumentRepository,
    JsonDocumentRepository,
)


class TestJsonDocumentRepository:
    """Whole-document JSON persistence."""

    @pytest.mark.unit
    def test_missing_file_returns_default(self, tmp_path):
        repo = JsonDocumentRepository(tmp_path / "deskmate.json")
        assert repo.get() == default_document()

    @pytest.mark.unit
    def test_put_then_get(self, tmp_path):
        path = tmp_path / "nested" / "deskmate.json"
        repo = JsonDocumentRepository(path)
        document = repo.get()
        document["subjects"].append({"id": "s1", "name": "Physics"})

        assert repo.put(document) is True
        assert repo.get() == document
        assert json.loads(path.read_text())["subjects"] == [{"id": "s1", "name": "Physics"}]

    @pytest.mark.unit
    def test_written_with_indent(self, tmp_path):
        path = tmp_path / "deskmate.json"
        JsonDocumentRepository(path).put(default_document())
        assert '\n  "reminders": []' in path.read_text()

    @pytest.mark.unit
    def test_no_temp_files_left_behind(self, tmp_path):
        repo = JsonDocumentRepository(tmp_path / "deskmate.json")
        repo.put(default_document())
        repo.put(default_document())
        assert [p.name for p in tmp_path.iterdir()] == ["deskmate.json"]

    @pytest.mark.unit
    def test_corrupt_file_falls_back_to_default(self, tmp_path):
        path = tmp_path / "deskmate.json"
        path.write_text("{not json")

        assert JsonDocumentRepository(path).get() == default_document()

    @pytest.mark.unit
    def test_invalid_utf8_falls_back_to_default(self, tmp_path):
        path = tmp_path / "deskmate.json"
        path.write_bytes(b'{"reminders": ["\xff\xfe"]}')

        assert JsonDocumentRepository(path).get() == default_document()

    @pytest.mark.unit
    def test_non_object_root_falls_back_to_default(self, tmp_path):
        path = tmp_path / "deskmate.json"
        path.write_text("[1, 2, 3]")

        assert JsonDocumentRepository(path).get() == default_document()

    @pytest.mark.unit
    def test_legacy_file_is_migrated_on_read(self, tmp_path):
        path = tmp_path / "deskmate.json"
        path.write_text(json.dumps({"skills": [{"name": "Python"}], "schedule": []}))

        document = JsonDocumentRepository(path).get()

        assert document["schemaVersion"] == SCHEMA_VERSION
        assert [s["name"] for s in document["learnedSkills"]] == ["Python"]

    @pytest.mark.unit
    def test_unwritable_location_returns_false(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        repo = JsonDocumentRepository(blocker / "deskmate.json")

        assert repo.put(default_document()) is False

    @pytest.mark.unit
    def test_unserializable_document_returns_false(self, tmp_path):
        path = tmp_path / "deskmate.json"
        document = default_document()
        document["reminders"].append({"circular": None})
        document["reminders"][0]["circular"] = document["reminders"]

        assert JsonDocumentRepository(path).put(document) is False
        assert not path.exists()


class TestInMemoryDocumentRepository:
    """Value semantics of the in-memory fake."""

    @pytest.mark.unit
    def test_get_returns_copies(self):
        repo = InMemoryDocumentRepository()
        document = repo.get()
        document["reminders"].append({"id": "x"})

        assert repo.get()["reminders"] == []

    @pytest.mark.unit
    def test_put_stores_copy(self):
        repo = InMemoryDocumentRepository()
        document = repo.get()
        repo.put(document)
        document["subjects"].append({"id": "late"})

        assert repo.get()["subjects"] == []
        assert repo.put_count == 1

    @pytest.mark.unit
    def test_initial_document_is_migrated(self):
        repo = InMemoryDocumentRepository({"skills": [{"name": "Go"}]})
        assert [s["name"] for s in repo.get()["learnedSkills"]] == ["Go"]

    @pytest.mark.unit
    def test_rejects_non_dict(self):
        assert InMemoryDocumentRepository().put(["not", "a", "document"]) is False


@pytest.mark.unit
def test_persistence_error_message():
    error = PersistenceError("Could not read document", path="/tmp/x.json", original_error=OSError("boom"))
    assert error.message == "Could not read document"
    assert "/tmp/x.json" in str(error)
    assert "boom" in str(error)
