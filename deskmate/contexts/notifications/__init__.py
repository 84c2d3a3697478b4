"""
Notifications Context

Responsibilities:
- Delivers local (desktop/console) alerts
- Builds and sends reminder emails using the stored email configuration
- Persists the email configuration

Owns: Alert sinks, SMTP transport, email configuration
Never: Decides when a reminder should notify
"""

from deskmate.contexts.notifications.commands import load_email_config, save_email_config
from deskmate.contexts.notifications.email import (
    EmailConfig,
    EmailDispatcher,
    SmtpTransport,
    build_reminder_email,
)
from deskmate.contexts.notifications.exceptions import EmailDeliveryError
from deskmate.contexts.notifications.sinks import AlertSink, ConsoleAlertSink, DesktopAlertSink

__all__ = [
    "load_email_config",
    "save_email_config",
    "EmailConfig",
    "EmailDispatcher",
    "SmtpTransport",
    "build_reminder_email",
    "EmailDeliveryError",
    "AlertSink",
    "ConsoleAlertSink",
    "DesktopAlertSink",
]
