"""
Reminders Context

Responsibilities:
- Creates reminders and moves them through pending -> done/cancelled
- Evaluates elapsed time against deadlines and fires escalating notifications
- Schedules the periodic deadline check

Owns: Reminder lifecycle, notification tier policies, sent-sets
Never: Delivers notifications itself or reads/writes files directly
"""

from deskmate.contexts.reminders.commands import (
    create_reminder,
    delete_reminder,
    list_history,
    list_reminders,
    update_reminder_status,
)
from deskmate.contexts.reminders.exceptions import InvalidWindowError
from deskmate.contexts.reminders.models import Reminder, ReminderStatus
from deskmate.contexts.reminders.monitor import (
    DeadlineMonitor,
    describe_time_left,
    elapsed_percent,
    evaluate,
    has_already_fired,
)
from deskmate.contexts.reminders.policy import FiringEvent, NotificationTier, Policy
from deskmate.contexts.reminders.scheduler import (
    APSchedulerTicker,
    ManualClock,
    ManualTicker,
    Ticker,
    system_clock,
)

__all__ = [
    # Commands
    "create_reminder",
    "delete_reminder",
    "list_history",
    "list_reminders",
    "update_reminder_status",
    # Model
    "Reminder",
    "ReminderStatus",
    "InvalidWindowError",
    # Deadline monitor
    "DeadlineMonitor",
    "describe_time_left",
    "elapsed_percent",
    "evaluate",
    "has_already_fired",
    "FiringEvent",
    "NotificationTier",
    "Policy",
    # Scheduling
    "APSchedulerTicker",
    "ManualClock",
    "ManualTicker",
    "Ticker",
    "system_clock",
]
