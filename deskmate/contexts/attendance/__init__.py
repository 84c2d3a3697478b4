"""
Attendance Context

Responsibilities:
- Maintains the subject list
- Records attended classes and summarizes counts per subject

Owns: "subjects" and "attendance" collections
"""

from deskmate.contexts.attendance.commands import (
    add_subject,
    attendance_stats,
    delete_subject,
    mark_attendance,
    recent_attendance,
    save_subjects,
)

__all__ = [
    "add_subject",
    "attendance_stats",
    "delete_subject",
    "mark_attendance",
    "recent_attendance",
    "save_subjects",
]
