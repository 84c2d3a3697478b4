"""Data models for the Timetable context."""

import uuid
from dataclasses import dataclass, field
from typing import Optional

from deskmate.utils.validation import require_choice, require_text, require_time_of_day

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass
class ClassEntry:
    """
    One timetable slot.

    Attributes:
        time: "HH:MM" (24-hour)
        activity: What happens in the slot
        day: Lower-case weekday name, or None for a slot that repeats every day
        id: Identifier (generated when omitted)
    """

    time: str
    activity: str
    day: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def sort_key(self) -> tuple:
        # Every-day slots sort ahead of Monday
        day_index = WEEKDAYS.index(self.day) if self.day else -1
        return (day_index, self.time)

    @classmethod
    def create(cls, time: str, activity: str, day: Optional[str] = None) -> "ClassEntry":
        """
        Build a validated entry.

        Raises:
            ValidationError: Malformed time, empty activity or unknown weekday
        """
        return cls(
            time=require_time_of_day(time),
            activity=require_text(activity, "activity"),
            day=require_choice(day, WEEKDAYS, "day") if day else None,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "ClassEntry":
        return cls(
            id=str(data.get("id") or uuid.uuid4().hex),
            day=data.get("day") or None,
            time=str(data.get("time", "")),
            activity=str(data.get("activity", "")),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "day": self.day, "time": self.time, "activity": self.activity}
