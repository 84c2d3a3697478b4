"""Custom exceptions for the reminders context."""

from datetime import datetime
from typing import Optional


class InvalidWindowError(ValueError):
    """
    Raised when a reminder's deadline is not after its creation time.

    The elapsed fraction of such a window is undefined, so the reminder is skipped
    by the deadline monitor instead of producing spurious notifications.

    Attributes:
        reminder_id: Offending reminder
        created_at: Creation timestamp
        deadline: Deadline timestamp
    """

    def __init__(
        self,
        reminder_id: Optional[str],
        created_at: datetime,
        deadline: datetime,
    ):
        self.reminder_id = reminder_id
        self.created_at = created_at
        self.deadline = deadline
        super().__init__(
            f"Reminder {reminder_id}: deadline {deadline.isoformat()} is not after "
            f"creation time {created_at.isoformat()}"
        )
