"""
Deadline Monitor

Periodically evaluates every pending reminder against its deadline and fires each
notification tier at most once.

For a reminder created at C with deadline D, evaluated at time N:

    total   = D - C
    left    = D - N
    percent = (total - left) / total * 100

Tier t fires when percent falls inside its window [t, t + window) and its label is
not yet in the reminder's sent-set. The deadline tier ("100%") fires independently
once left <= 0.

Known gap: with the default one-point window a tier is silently skipped if
consecutive checks jump across it (e.g. a two-minute reminder polled every 60s goes
from 40% to 90%). Set DESKMATE_TIER_WINDOW=none to fire any tier whose threshold has
been passed instead.
"""

import math
import os
from datetime import datetime
from typing import Callable, Optional

from dotenv import load_dotenv

from deskmate.contexts.notifications.email import EmailConfig, EmailDispatcher
from deskmate.contexts.notifications.sinks import AlertSink
from deskmate.contexts.reminders.exceptions import InvalidWindowError
from deskmate.contexts.reminders.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_warning,
    log_check_summary,
)
from deskmate.contexts.reminders.models import Reminder
from deskmate.contexts.reminders.policy import (
    DEADLINE_LABEL,
    DEADLINE_MESSAGE,
    FiringEvent,
    Policy,
)
from deskmate.contexts.reminders.scheduler import Ticker, system_clock
from deskmate.contexts.storage.repository import DocumentRepository
from deskmate.utils.event_logging import log_activity_event

load_dotenv()


def parse_tier_window(raw: str) -> Optional[float]:
    if raw.strip().lower() in ("none", "open", ""):
        return None
    return float(raw)


CHECK_INTERVAL_SECONDS = float(os.getenv("DESKMATE_CHECK_INTERVAL", "60"))
TIER_WINDOW = parse_tier_window(os.getenv("DESKMATE_TIER_WINDOW", "1"))


# =============================================================================
# PURE EVALUATION
# =============================================================================


def elapsed_percent(reminder: Reminder, now: datetime) -> float:
    """
    Percentage of the reminder's window that has elapsed at `now`.

    May be negative (clock before creation) or above 100 (past the deadline).

    Raises:
        InvalidWindowError: If the deadline is not after the creation time
    """
    total = (reminder.deadline - reminder.created_at).total_seconds()
    if total <= 0:
        raise InvalidWindowError(reminder.id, reminder.created_at, reminder.deadline)

    left = (reminder.deadline - now).total_seconds()
    return (total - left) / total * 100


def has_already_fired(reminder: Reminder, tier_label: str) -> bool:
    """Check whether a tier label is already in the reminder's sent-set."""
    return tier_label in reminder.notifications_sent


def _in_window(percent: float, threshold: int, tier_window: Optional[float]) -> bool:
    if tier_window is None:
        return percent >= threshold
    return threshold <= percent < threshold + tier_window


def evaluate(
    reminder: Reminder,
    now: datetime,
    tier_window: Optional[float] = TIER_WINDOW,
) -> list[FiringEvent]:
    """
    Work out which notifications a reminder should fire at `now`.

    Marks every returned tier as sent on the reminder, so repeated calls at the
    same or a later `now` never return a tier twice.

    Args:
        reminder: Reminder to evaluate (its sent-set is updated in place)
        now: Evaluation time
        tier_window: Width of each tier's firing window in percentage points,
                     or None to fire any tier whose threshold has been passed

    Returns:
        Events to deliver, in ascending tier order with the deadline event last.
        Empty for non-pending reminders and for reminders with an invalid window.
    """
    if not reminder.is_pending:
        return []

    try:
        percent = elapsed_percent(reminder, now)
    except InvalidWindowError as e:
        _log_warning(f"Skipping reminder: {e}")
        return []

    policy = Policy.for_reminder(reminder)
    seconds_left = (reminder.deadline - now).total_seconds()
    hours_left = math.floor(seconds_left / 3600)

    events = []
    for tier in policy.tiers:
        if not _in_window(percent, tier.threshold, tier_window):
            continue
        if reminder.mark_sent(tier.label):
            events.append(
                FiringEvent(
                    reminder_id=reminder.id,
                    reminder_text=reminder.text,
                    tier_label=tier.label,
                    message=tier.message(hours_left),
                    urgency=policy.urgency,
                )
            )

    if seconds_left <= 0 and reminder.mark_sent(DEADLINE_LABEL):
        events.append(
            FiringEvent(
                reminder_id=reminder.id,
                reminder_text=reminder.text,
                tier_label=DEADLINE_LABEL,
                message=DEADLINE_MESSAGE,
                urgency=policy.urgency,
            )
        )

    return events


def describe_time_left(reminder: Reminder, now: datetime) -> tuple[str, str]:
    """
    Short status badge for listing a reminder.

    Returns:
        (text, level) where level is "green", "yellow" or "red"

    Examples:
        ("OVERDUE!", "red"), ("3h left", "red"), ("50% time passed", "yellow"),
        ("4 days left", "green")
    """
    seconds_left = (reminder.deadline - now).total_seconds()
    if seconds_left < 0:
        return "OVERDUE!", "red"

    try:
        percent = elapsed_percent(reminder, now)
    except InvalidWindowError:
        return "invalid window", "red"

    if percent >= 90:
        return f"{math.floor(seconds_left / 3600)}h left", "red"
    if percent >= 50:
        return "50% time passed", "yellow"
    return f"{math.floor(seconds_left / 86400)} days left", "green"


# =============================================================================
# MONITOR
# =============================================================================


class DeadlineMonitor:
    """
    Runs evaluate() over the document's active reminders and delivers the results.

    Each pass re-reads the document, persists updated sent-sets before delivering,
    then hands every event to the local alert sink and, when the stored email
    configuration is enabled, to the email dispatcher. Delivery failures are logged
    and never stop the pass.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        alert_sink: AlertSink,
        email_dispatcher: Optional[EmailDispatcher] = None,
        clock: Callable[[], datetime] = system_clock,
        tier_window: Optional[float] = TIER_WINDOW,
    ):
        self.repository = repository
        self.alert_sink = alert_sink
        self.email_dispatcher = email_dispatcher
        self.clock = clock
        self.tier_window = tier_window

    def check_reminders(self) -> list[FiringEvent]:
        """
        Evaluate all pending reminders once.

        Returns:
            Every event fired during this pass
        """
        document = self.repository.get()
        now = self.clock()

        fired = []
        fired_reminders = {}
        evaluated = 0
        active = document.get("reminders", [])

        for index, raw in enumerate(active):
            if not isinstance(raw, dict):
                _log_warning(f"Skipping malformed reminder entry at index {index}")
                continue
            try:
                reminder = Reminder.from_dict(raw)
            except (ValueError, TypeError) as e:
                _log_warning(f"Skipping unreadable reminder {raw.get('id')}: {e}")
                continue

            if not reminder.is_pending:
                continue
            evaluated += 1

            events = evaluate(reminder, now, self.tier_window)
            if events:
                active[index] = reminder.to_dict()
                fired.extend(events)
                fired_reminders[reminder.id] = reminder

        if fired:
            # Record sent tiers before delivery: a crash mid-delivery loses an alert
            # rather than repeating one.
            if not self.repository.put(document):
                _log_error("Could not persist sent notifications; they may fire again")

            email_config = EmailConfig.from_dict(document.get("emailConfig"))
            for event in fired:
                self._deliver(event, fired_reminders[event.reminder_id], email_config)

        log_check_summary(len(active), evaluated, fired)
        return fired

    def _deliver(self, event: FiringEvent, reminder: Reminder, email_config: EmailConfig) -> None:
        try:
            self.alert_sink.notify(event.title, event.body, event.urgency)
        except Exception as e:
            _log_error(f"Local alert failed for {event.reminder_id} ({event.tier_label}): {e}")

        if self.email_dispatcher is not None and email_config.enabled:
            try:
                self.email_dispatcher.dispatch(reminder, event.message, email_config)
            except Exception as e:
                _log_error(f"Email dispatch failed for {event.reminder_id} ({event.tier_label}): {e}")

        log_activity_event(
            event_type="notification_fired",
            subject_id=event.reminder_id,
            source="monitor",
            tier=event.tier_label,
            message=event.message,
            urgency=event.urgency,
        )

    def run_once_safely(self) -> None:
        """Timer callback: one pass, with any unexpected error logged, not raised."""
        try:
            self.check_reminders()
        except Exception as e:
            _log_error(f"Reminder check failed: {type(e).__name__}: {e}")

    def start(self, ticker: Ticker, interval_seconds: float = CHECK_INTERVAL_SECONDS) -> None:
        """
        Register the recurring check with a ticker and run one pass immediately.

        Args:
            ticker: Scheduler capability (APSchedulerTicker, ManualTicker, ...)
            interval_seconds: Polling period
        """
        _log_info(f"Deadline monitor starting (every {interval_seconds}s)")
        ticker.every(interval_seconds, self.run_once_safely)
        self.run_once_safely()
        _log_debug("Initial reminder check complete")
