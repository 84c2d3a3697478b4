"""
Reminder emails.

The stored email configuration names a mail service and the account's address and
(app) password; reminders are sent from that address to itself. Sending happens on
a dedicated single-worker executor so a slow or unreachable SMTP server never holds
up the deadline monitor. Failures are logged and dropped.
"""

from __future__ import annotations

import html
import os
import smtplib
import ssl
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from email.message import EmailMessage
from typing import TYPE_CHECKING, Optional

from dotenv import load_dotenv

from deskmate.contexts.notifications.exceptions import EmailDeliveryError
from deskmate.contexts.notifications.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_success,
)
from deskmate.utils.validation import ValidationError, require_choice

if TYPE_CHECKING:
    from deskmate.contexts.reminders.models import Reminder

load_dotenv()
SMTP_TIMEOUT = float(os.getenv("DESKMATE_SMTP_TIMEOUT", "15"))

# service -> (host, port, use_starttls)
SMTP_SERVICES = {
    "gmail": ("smtp.gmail.com", 465, False),
    "outlook": ("smtp.office365.com", 587, True),
    "yahoo": ("smtp.mail.yahoo.com", 465, False),
    "icloud": ("smtp.mail.me.com", 587, True),
}
DEFAULT_SERVICE = "gmail"


@dataclass
class EmailConfig:
    """The document's `emailConfig` record."""

    enabled: bool = False
    email: str = ""
    password: str = ""
    service: str = DEFAULT_SERVICE

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "EmailConfig":
        """Build from the stored record; a missing record means email is disabled."""
        if not data:
            return cls()
        return cls(
            enabled=bool(data.get("enabled", False)),
            email=str(data.get("email") or ""),
            password=str(data.get("password") or ""),
            service=str(data.get("service") or DEFAULT_SERVICE),
        )

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "email": self.email,
            "password": self.password,
            "service": self.service,
        }

    def validate(self) -> "EmailConfig":
        """
        Check the configuration before it is stored.

        Raises:
            ValidationError: If enabled without address/password, or unknown service
        """
        self.service = require_choice(self.service, SMTP_SERVICES, "email service")
        if self.enabled and (not self.email.strip() or not self.password):
            raise ValidationError("Please enter email and password", field="email")
        self.email = self.email.strip()
        return self


def build_reminder_email(reminder: "Reminder", message: str, config: EmailConfig) -> EmailMessage:
    """
    Compose the HTML reminder email.

    Args:
        reminder: Reminder the notification is about
        message: Tier message (e.g. "9 hour(s) left")
        config: Sender/recipient configuration

    Returns:
        EmailMessage ready for the transport
    """
    text = html.escape(reminder.text)
    msg = EmailMessage()
    msg["Subject"] = f"Reminder: {' '.join(reminder.text.split())}"
    msg["From"] = config.email
    msg["To"] = config.email

    deadline = reminder.deadline.strftime("%Y-%m-%d %H:%M %Z").strip()
    plain = "\n".join(
        [
            "Reminder Alert",
            message,
            reminder.text,
            f"Deadline: {deadline}",
            f"Important: {'Yes' if reminder.important else 'No'}",
        ]
    )
    msg.set_content(plain)
    msg.add_alternative(
        "\n".join(
            [
                "<h2>Reminder Alert</h2>",
                f"<p><strong>{html.escape(message)}</strong></p>",
                f"<p>{text}</p>",
                f"<p>Deadline: {html.escape(deadline)}</p>",
                f"<p>Important: {'Yes' if reminder.important else 'No'}</p>",
                "<hr>",
                f'<p>Mark as done: <a href="reminder://done/{html.escape(reminder.id)}">Done</a></p>',
            ]
        ),
        subtype="html",
    )
    return msg


class SmtpTransport:
    """Send an EmailMessage through the configured service's SMTP server."""

    def __init__(self, timeout: float = SMTP_TIMEOUT):
        self.timeout = timeout

    def send(self, msg: EmailMessage, config: EmailConfig) -> None:
        """
        Raises:
            EmailDeliveryError: Unknown service, connection, TLS or auth failure
        """
        if config.service not in SMTP_SERVICES:
            raise EmailDeliveryError("Unknown email service", service=config.service)

        host, port, use_starttls = SMTP_SERVICES[config.service]
        context = ssl.create_default_context()
        # App passwords are often copied with spaces every 4 chars
        password = config.password.replace(" ", "")

        try:
            if use_starttls:
                with smtplib.SMTP(host, port, timeout=self.timeout) as server:
                    server.starttls(context=context)
                    server.login(config.email, password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP_SSL(host, port, context=context, timeout=self.timeout) as server:
                    server.login(config.email, password)
                    server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(
                f"Could not send email via {host}:{port}", service=config.service, original_error=e
            ) from e


class EmailDispatcher:
    """
    Fire-and-forget email delivery.

    dispatch() queues the send on a single background worker and returns at once.
    Delivery errors are caught and logged inside the worker.
    """

    def __init__(self, transport=None, executor: Optional[ThreadPoolExecutor] = None):
        self.transport = transport or SmtpTransport()
        self.executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="deskmate-email"
        )

    def dispatch(self, reminder: "Reminder", message: str, config: EmailConfig) -> Optional[Future]:
        """
        Queue a reminder email.

        Returns:
            Future for the queued send (resolves to True/False), or None when email
            is disabled
        """
        if not config.enabled:
            _log_debug("Email disabled, not sending")
            return None

        return self.executor.submit(self._send, reminder, message, config)

    def _send(self, reminder: "Reminder", message: str, config: EmailConfig) -> bool:
        reminder_id = reminder.id
        try:
            msg = build_reminder_email(reminder, message, config)
            self.transport.send(msg, config)
        except EmailDeliveryError as e:
            _log_error(f"Email for reminder {reminder_id} failed: {e.message}")
            _log_debug(str(e))
            return False
        except Exception as e:
            _log_error(f"Email for reminder {reminder_id} failed unexpectedly: {e}")
            return False

        _log_success(f"Email sent for reminder {reminder_id} to {config.email}")
        return True

    def shutdown(self, wait: bool = True) -> None:
        _log_info("Stopping email dispatcher")
        self.executor.shutdown(wait=wait)
