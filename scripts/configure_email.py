#!/usr/bin/env python3
"""
Configure email notifications.

Commands:
    show    - Show the stored configuration (password hidden)
    enable  - Store an address/app password and turn email on
    disable - Turn email off (address kept)
    test    - Send a test reminder email now
"""

import uuid
from datetime import timedelta
from pathlib import Path
from typing import Optional

import typer

from deskmate.contexts.notifications import (
    EmailConfig,
    EmailDeliveryError,
    SmtpTransport,
    build_reminder_email,
    load_email_config,
    save_email_config,
)
from deskmate.contexts.notifications.email import SMTP_SERVICES
from deskmate.contexts.reminders import Reminder
from deskmate.contexts.storage import JsonDocumentRepository
from deskmate.utils.timestamp import utc_now
from deskmate.utils.validation import ValidationError

app = typer.Typer(
    add_completion=False,
    help="Configure email notifications",
    invoke_without_command=True,
)

DATA_FILE_OPTION = typer.Option(
    None, "--data-file", "-d", help="Document path (default: DESKMATE_DATA_FILE)"
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _save(repo: JsonDocumentRepository, config: EmailConfig) -> EmailConfig:
    try:
        return save_email_config(repo, config)
    except ValidationError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("show")
def show_command(data_file: Optional[Path] = DATA_FILE_OPTION):
    """
    Show the stored email configuration.

    Examples:\n

        $ configure_email.py show
    """
    config = load_email_config(JsonDocumentRepository(data_file))

    typer.secho("\nEmail notifications", fg=typer.colors.BLUE, bold=True)
    status_color = typer.colors.GREEN if config.enabled else typer.colors.YELLOW
    typer.secho(f"  Enabled:  {'yes' if config.enabled else 'no'}", fg=status_color)
    typer.echo(f"  Address:  {config.email or '(not set)'}")
    typer.echo(f"  Service:  {config.service}")
    typer.echo(f"  Password: {'********' if config.password else '(not set)'}")


@app.command("enable")
def enable_command(
    email: str = typer.Argument(..., help="Address to send from and to"),
    service: str = typer.Option(
        "gmail", "--service", "-s", help=f"One of: {', '.join(SMTP_SERVICES)}"
    ),
    password: str = typer.Option(
        ..., prompt="App password", hide_input=True, help="App password for the account"
    ),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Turn on email notifications.

    Use an app password, not your account password (Gmail: Google Account >
    Security > App passwords).

    Examples:\n

        $ configure_email.py enable me@gmail.com                 # Prompts for the app password

        $ configure_email.py enable me@outlook.com -s outlook
    """
    config = _save(
        JsonDocumentRepository(data_file),
        EmailConfig(enabled=True, email=email, password=password, service=service),
    )
    typer.secho(f"✓ Email notifications enabled for {config.email} ({config.service})", fg=typer.colors.GREEN)


@app.command("disable")
def disable_command(data_file: Optional[Path] = DATA_FILE_OPTION):
    """
    Turn off email notifications.

    Examples:\n

        $ configure_email.py disable
    """
    repo = JsonDocumentRepository(data_file)
    config = load_email_config(repo)
    config.enabled = False
    _save(repo, config)
    typer.secho("✓ Email notifications disabled", fg=typer.colors.GREEN)


@app.command("test")
def test_command(data_file: Optional[Path] = DATA_FILE_OPTION):
    """
    Send a test reminder email using the stored configuration.

    Examples:\n

        $ configure_email.py test
    """
    config = load_email_config(JsonDocumentRepository(data_file))
    if not config.email or not config.password:
        typer.secho("Error: Please enter email and password first", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    now = utc_now()
    sample = Reminder(
        id=uuid.uuid4().hex,
        text="Test reminder from deskmate",
        deadline=now + timedelta(hours=1),
        created_at=now,
    )
    msg = build_reminder_email(sample, "1 hour(s) left", config)

    typer.echo(f"Sending test email to {config.email} via {config.service}...")
    try:
        SmtpTransport().send(msg, config)
    except EmailDeliveryError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho("✓ Test email sent", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
