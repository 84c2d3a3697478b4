"""
Data models for the Reminders context.

Reminders are stored in the document as camelCase JSON objects:

    {
      "id": "9b2f...",
      "text": "Submit lab report",
      "description": "React front end + nodejs API",
      "deadline": "2025-11-20T17:00:00+00:00",
      "createdAt": "2025-11-13T09:12:44+00:00",
      "important": true,
      "status": "pending",
      "notificationsSent": ["50%"],
      "completedAt": null
    }
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from deskmate.utils.timestamp import parse_timestamp

# JSON keys owned by the Reminder dataclass (everything else is carried in `extra`)
_KNOWN_KEYS = {
    "id",
    "text",
    "description",
    "deadline",
    "createdAt",
    "important",
    "status",
    "notificationsSent",
    "completedAt",
}


class ReminderStatus(Enum):
    """Lifecycle status of a reminder."""

    PENDING = "pending"
    DONE = "done"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


@dataclass
class Reminder:
    """
    A deadline-based reminder.

    `notifications_sent` is the sent-set: an unordered collection of tier labels
    that have already fired. It is stored as a list but never holds a label twice.
    """

    id: str
    text: str
    deadline: datetime
    created_at: datetime
    important: bool = False
    status: ReminderStatus = ReminderStatus.PENDING
    notifications_sent: list[str] = field(default_factory=list)
    description: Optional[str] = None
    completed_at: Optional[datetime] = None
    extra: dict = field(default_factory=dict)

    @property
    def is_pending(self) -> bool:
        return self.status == ReminderStatus.PENDING

    def mark_sent(self, tier_label: str) -> bool:
        """Add a tier label to the sent-set. Returns False if it was already there."""
        if tier_label in self.notifications_sent:
            return False
        self.notifications_sent.append(tier_label)
        return True

    def extraction_text(self) -> str:
        """Free text the skill extractor scans when this reminder is completed."""
        return "\n".join(part for part in (self.text, self.description) if part)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    @classmethod
    def from_dict(cls, data: dict) -> "Reminder":
        """
        Build a Reminder from its JSON representation.

        Raises:
            ValueError: If deadline or createdAt is missing or malformed
        """
        sent = []
        for label in data.get("notificationsSent") or []:
            if label not in sent:
                sent.append(label)

        completed_at = data.get("completedAt")

        return cls(
            id=str(data.get("id", "")),
            text=str(data.get("text", "")),
            description=data.get("description"),
            deadline=parse_timestamp(data.get("deadline")),
            created_at=parse_timestamp(data.get("createdAt")),
            important=bool(data.get("important", False)),
            status=ReminderStatus(data.get("status", ReminderStatus.PENDING.value)),
            notifications_sent=sent,
            completed_at=parse_timestamp(completed_at) if completed_at else None,
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> dict:
        """Serialize to the document's JSON representation."""
        data = {
            **self.extra,
            "id": self.id,
            "text": self.text,
            "deadline": self.deadline.isoformat(),
            "createdAt": self.created_at.isoformat(),
            "important": self.important,
            "status": self.status.value,
            "notificationsSent": list(self.notifications_sent),
        }
        if self.description:
            data["description"] = self.description
        if self.completed_at:
            data["completedAt"] = self.completed_at.isoformat()
        return data
