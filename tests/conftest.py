"""Shared fixtures: fixed clock origin, in-memory documents, recording sinks."""

from datetime import datetime, timedelta, timezone

import pytest

from deskmate.contexts.notifications.exceptions import EmailDeliveryError
from deskmate.contexts.reminders.models import Reminder
from deskmate.contexts.skills.vocabulary import PACKAGED_VOCABULARY, load_vocabulary
from deskmate.contexts.storage.repository import InMemoryDocumentRepository

T0 = datetime(2025, 11, 3, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def activity_log(tmp_path, monkeypatch):
    """Send activity events to a per-test file instead of outs/logs."""
    path = tmp_path / "activity_events.log"
    monkeypatch.setattr("deskmate.utils.event_logging.ACTIVITY_EVENTS_FILE", path)
    return path


@pytest.fixture
def t0():
    return T0


@pytest.fixture
def repo():
    return InMemoryDocumentRepository()


@pytest.fixture
def vocabulary():
    return load_vocabulary(PACKAGED_VOCABULARY)


@pytest.fixture
def make_reminder():
    """Factory for a pending reminder created at T0 with a deadline `hours` later."""

    def _make(hours: float = 100, important: bool = False, **kwargs) -> Reminder:
        return Reminder(
            id=kwargs.pop("id", "r1"),
            text=kwargs.pop("text", "Submit lab report"),
            created_at=T0,
            deadline=T0 + timedelta(hours=hours),
            important=important,
            **kwargs,
        )

    return _make


class RecordingAlertSink:
    def __init__(self):
        self.alerts = []

    def notify(self, title, body, urgency):
        self.alerts.append((title, body, urgency))


class FailingAlertSink:
    def __init__(self):
        self.calls = 0

    def notify(self, title, body, urgency):
        self.calls += 1
        raise RuntimeError("notification daemon unavailable")


class RecordingTransport:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def send(self, msg, config):
        if self.fail:
            raise EmailDeliveryError("Authentication failed", service=config.service)
        self.sent.append(msg)


@pytest.fixture
def alert_sink():
    return RecordingAlertSink()


@pytest.fixture
def failing_sink():
    return FailingAlertSink()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def failing_transport():
    return RecordingTransport(fail=True)
