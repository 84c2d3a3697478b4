"""
Timetable Context

Responsibilities:
- Stores the weekly class timetable (time, activity, optional weekday)
- Keeps entries ordered by weekday then time

Owns: "classes" collection
"""

from deskmate.contexts.timetable.commands import (
    classes_for_day,
    delete_class,
    save_class,
    save_schedule,
)
from deskmate.contexts.timetable.models import WEEKDAYS, ClassEntry

__all__ = [
    "classes_for_day",
    "delete_class",
    "save_class",
    "save_schedule",
    "ClassEntry",
    "WEEKDAYS",
]
