"""Unit tests for subjects and attendance."""

from datetime import timedelta

import pytest

from deskmate.contexts.attendance import (
    add_subject,
    attendance_stats,
    delete_subject,
    mark_attendance,
    recent_attendance,
    save_subjects,
)
from deskmate.utils.validation import ValidationError


class TestSubjects:
    """Subject list maintenance."""

    @pytest.mark.unit
    def test_add_subject(self, repo):
        subject = add_subject(repo, " Physics ")

        assert subject["name"] == "Physics"
        assert repo.get()["subjects"] == [subject]

    @pytest.mark.unit
    def test_add_subject_requires_name(self, repo):
        with pytest.raises(ValidationError) as exc_info:
            add_subject(repo, "")
        assert exc_info.value.message == "Please enter a subject name"

    @pytest.mark.unit
    def test_save_subjects_replaces_list(self, repo):
        add_subject(repo, "Physics")

        document = save_subjects(repo, ["Chemistry", {"id": "m1", "name": "Maths"}, "  "])

        assert [s["name"] for s in document["subjects"]] == ["Chemistry", "Maths"]
        assert document["subjects"][1]["id"] == "m1"

    @pytest.mark.unit
    def test_delete_subject_keeps_records(self, repo, t0):
        subject = add_subject(repo, "Physics")
        mark_attendance(repo, subject["id"], "monday", "2025-11-03", now=t0)

        document = delete_subject(repo, subject["id"])

        assert document["subjects"] == []
        assert len(document["attendance"]) == 1


class TestMarkAttendance:
    """Recording attended classes."""

    @pytest.mark.unit
    def test_record_is_denormalized(self, repo, t0):
        subject = add_subject(repo, "Physics")

        record = mark_attendance(repo, subject["id"], "Monday", "2025-11-03", now=t0)

        assert record["subjectId"] == subject["id"]
        assert record["subjectName"] == "Physics"
        assert record["day"] == "monday"
        assert record["date"] == "2025-11-03"
        assert record["timestamp"] == t0.isoformat()
        assert repo.get()["attendance"] == [record]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "day, date", [("", "2025-11-03"), ("monday", ""), ("someday", "2025-11-03"), ("monday", "03/11/2025")]
    )
    def test_rejects_missing_or_malformed_fields(self, repo, t0, day, date):
        subject = add_subject(repo, "Physics")
        with pytest.raises(ValidationError):
            mark_attendance(repo, subject["id"], day, date, now=t0)
        assert repo.get()["attendance"] == []

    @pytest.mark.unit
    def test_rejects_unknown_subject(self, repo, t0):
        with pytest.raises(ValidationError) as exc_info:
            mark_attendance(repo, "missing", "monday", "2025-11-03", now=t0)
        assert exc_info.value.message == "Subject not found"


class TestStatistics:
    """Counts per subject and recent records."""

    @pytest.mark.unit
    def test_stats_include_zero_counts(self, repo, t0):
        physics = add_subject(repo, "Physics")
        add_subject(repo, "Chemistry")
        mark_attendance(repo, physics["id"], "monday", "2025-11-03", now=t0)
        mark_attendance(repo, physics["id"], "wednesday", "2025-11-05", now=t0)

        assert attendance_stats(repo.get()) == {"Physics": 2, "Chemistry": 0}

    @pytest.mark.unit
    def test_stats_ignore_deleted_subjects(self, repo, t0):
        physics = add_subject(repo, "Physics")
        mark_attendance(repo, physics["id"], "monday", "2025-11-03", now=t0)
        delete_subject(repo, physics["id"])

        assert attendance_stats(repo.get()) == {}

    @pytest.mark.unit
    def test_recent_most_recent_first(self, repo, t0):
        physics = add_subject(repo, "Physics")
        for i, day in enumerate(["2025-11-03", "2025-11-04", "2025-11-05"]):
            mark_attendance(repo, physics["id"], "monday", day, now=t0 + timedelta(days=i))

        records = recent_attendance(repo.get(), n=2)

        assert [r["date"] for r in records] == ["2025-11-05", "2025-11-04"]
