"""
Notification tier policies.

A reminder escalates through a fixed list of elapsed-time tiers chosen once from its
importance flag, plus the deadline itself:

    IMPORTANT: 50% -> 80% -> 95% -> deadline
    NORMAL:    50% -> 90% -> deadline
"""

from dataclasses import dataclass
from enum import Enum

DEADLINE_LABEL = "100%"
DEADLINE_MESSAGE = "Deadline reached!"
ALERT_TITLE = "Reminder Alert"


@dataclass(frozen=True)
class NotificationTier:
    """An elapsed-percentage threshold that fires at most once per reminder."""

    threshold: int
    reports_hours_left: bool = False

    @property
    def label(self) -> str:
        return f"{self.threshold}%"

    def message(self, hours_left: int) -> str:
        """Human-readable notification text for this tier."""
        if self.reports_hours_left:
            return f"{hours_left} hour(s) left"
        return f"{self.threshold}% time passed"


class Policy(Enum):
    """Tier set variant, selected by a reminder's importance flag."""

    IMPORTANT = (
        NotificationTier(50),
        NotificationTier(80),
        NotificationTier(95, reports_hours_left=True),
    )
    NORMAL = (
        NotificationTier(50),
        NotificationTier(90, reports_hours_left=True),
    )

    @property
    def tiers(self) -> tuple:
        """Tiers in ascending threshold order."""
        return tuple(sorted(self.value, key=lambda tier: tier.threshold))

    @property
    def urgency(self) -> str:
        return "critical" if self is Policy.IMPORTANT else "normal"

    @property
    def labels(self) -> set[str]:
        """Every label this policy can ever put in a sent-set."""
        return {tier.label for tier in self.value} | {DEADLINE_LABEL}

    @classmethod
    def for_reminder(cls, reminder) -> "Policy":
        return cls.IMPORTANT if reminder.important else cls.NORMAL


@dataclass(frozen=True)
class FiringEvent:
    """One notification to deliver for one reminder."""

    reminder_id: str
    reminder_text: str
    tier_label: str
    message: str
    urgency: str

    @property
    def title(self) -> str:
        return ALERT_TITLE

    @property
    def body(self) -> str:
        return f"{self.reminder_text}\n{self.message}"
