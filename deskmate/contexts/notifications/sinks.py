"""
Local alert sinks.

A sink receives (title, body, urgency) and shows it to the user. Sinks are
fire-and-forget: they return nothing the caller depends on.
"""

import shutil
import subprocess
from datetime import datetime
from typing import Protocol

import typer

from deskmate.contexts.notifications.logger import _log_debug, _log_warning

URGENCY_LEVELS = ("low", "normal", "critical")


class AlertSink(Protocol):
    """Local alert capability used by the deadline monitor."""

    def notify(self, title: str, body: str, urgency: str) -> None:
        ...


class ConsoleAlertSink:
    """Print alerts to the terminal (always available)."""

    def notify(self, title: str, body: str, urgency: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        color = typer.colors.RED if urgency == "critical" else typer.colors.CYAN
        typer.secho(f"[{timestamp}] {title}: {body.replace(chr(10), ' - ')}", fg=color, bold=True)


class DesktopAlertSink:
    """
    Desktop notification via notify-send, falling back to the console.

    notify-send is looked up once; when it is missing or fails the alert is
    printed instead so it is never lost.
    """

    def __init__(self, command: str = "notify-send", timeout: float = 5):
        self.command = shutil.which(command)
        self.timeout = timeout
        self.fallback = ConsoleAlertSink()
        if not self.command:
            _log_debug(f"{command} not found, desktop alerts go to the console")

    def notify(self, title: str, body: str, urgency: str) -> None:
        if urgency not in URGENCY_LEVELS:
            urgency = "normal"

        if not self.command:
            self.fallback.notify(title, body, urgency)
            return

        try:
            subprocess.run(
                [self.command, "--urgency", urgency, "--app-name", "deskmate", title, body],
                timeout=self.timeout,
                capture_output=True,
                check=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            _log_warning(f"Desktop notification failed ({e}), printing instead")
            self.fallback.notify(title, body, urgency)
