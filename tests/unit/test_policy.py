"""Unit tests for notification tier policies."""

import pytest

from deskmate.contexts.reminders.policy import (
    DEADLINE_LABEL,
    FiringEvent,
    NotificationTier,
    Policy,
)


@pytest.mark.unit
def test_policy_selected_from_importance(make_reminder):
    assert Policy.for_reminder(make_reminder(important=True)) is Policy.IMPORTANT
    assert Policy.for_reminder(make_reminder(important=False)) is Policy.NORMAL


@pytest.mark.unit
def test_tier_thresholds_ascending():
    assert [t.threshold for t in Policy.IMPORTANT.tiers] == [50, 80, 95]
    assert [t.threshold for t in Policy.NORMAL.tiers] == [50, 90]


@pytest.mark.unit
def test_labels_include_deadline():
    assert Policy.NORMAL.labels == {"50%", "90%", DEADLINE_LABEL}
    assert Policy.IMPORTANT.labels == {"50%", "80%", "95%", DEADLINE_LABEL}


@pytest.mark.unit
def test_urgency():
    assert Policy.IMPORTANT.urgency == "critical"
    assert Policy.NORMAL.urgency == "normal"


@pytest.mark.unit
def test_tier_messages():
    assert NotificationTier(50).message(hours_left=30) == "50% time passed"
    assert NotificationTier(90, reports_hours_left=True).message(hours_left=9) == "9 hour(s) left"
    assert NotificationTier(95, reports_hours_left=True).label == "95%"


@pytest.mark.unit
def test_firing_event_title_and_body():
    event = FiringEvent(
        reminder_id="r1",
        reminder_text="Pay rent",
        tier_label="50%",
        message="50% time passed",
        urgency="normal",
    )
    assert event.title == "Reminder Alert"
    assert event.body == "Pay rent\n50% time passed"
