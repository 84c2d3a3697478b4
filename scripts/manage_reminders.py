#!/usr/bin/env python3
"""
Command-line interface for managing reminders.

Commands:
    add     - Create a reminder with a deadline
    list    - List active reminders with time-left badges
    done    - Mark a reminder done (learns skills from its text)
    cancel  - Cancel a reminder
    delete  - Delete a reminder without keeping it in history
    history - Show completed and cancelled reminders
"""

from pathlib import Path
from typing import Optional

import typer

from deskmate.contexts.reminders import (
    create_reminder,
    delete_reminder,
    describe_time_left,
    list_history,
    list_reminders,
    update_reminder_status,
)
from deskmate.contexts.storage import JsonDocumentRepository
from deskmate.utils.timestamp import format_timestamp, utc_now
from deskmate.utils.validation import ValidationError

app = typer.Typer(
    add_completion=False,
    help="Manage deadline reminders",
    invoke_without_command=True,
)

DATA_FILE_OPTION = typer.Option(
    None, "--data-file", "-d", help="Document path (default: DESKMATE_DATA_FILE)"
)

BADGE_COLORS = {
    "red": typer.colors.RED,
    "yellow": typer.colors.YELLOW,
    "green": typer.colors.GREEN,
}


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _match_id(repo: JsonDocumentRepository, prefix: str) -> str:
    """Resolve a (possibly abbreviated) reminder id among active reminders."""
    matches = [r.id for r in list_reminders(repo) if r.id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]

    if not matches:
        typer.secho(f"No active reminder with id '{prefix}'", fg=typer.colors.RED, err=True)
    else:
        typer.secho(f"Id '{prefix}' is ambiguous ({len(matches)} matches)", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("add")
def add_command(
    text: str = typer.Argument(..., help="What to be reminded of"),
    deadline: str = typer.Argument(..., help="Deadline, ISO 8601 (e.g. 2025-11-20T17:00)"),
    important: bool = typer.Option(
        False, "--important", "-i", help="Escalate at 50/80/95% instead of 50/90%"
    ),
    description: Optional[str] = typer.Option(
        None, "--description", "-m", help="Longer description (also scanned for skills)"
    ),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Create a reminder.

    Examples:\n

        $ manage_reminders.py add "Submit lab report" 2025-11-20T17:00

        $ manage_reminders.py add "Ship portfolio" 2025-12-01T09:00 -i -m "React + nodejs"
    """
    repo = JsonDocumentRepository(data_file)
    try:
        reminder = create_reminder(
            repo, text, deadline, important=important, description=description
        )
    except ValidationError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Created reminder {reminder.id[:8]}", fg=typer.colors.GREEN)
    typer.echo(f"  Deadline: {format_timestamp(reminder.deadline.isoformat())}")
    if reminder.important:
        typer.echo("  Important: yes")


@app.command("list")
def list_command(data_file: Optional[Path] = DATA_FILE_OPTION):
    """
    List active reminders.

    Examples:\n

        $ manage_reminders.py list
    """
    reminders = list_reminders(JsonDocumentRepository(data_file))

    typer.secho("\nActive reminders:", fg=typer.colors.BLUE, bold=True)
    if not reminders:
        typer.echo("  (none)")
        return

    now = utc_now()
    for reminder in reminders:
        badge, level = describe_time_left(reminder, now)
        flag = "!" if reminder.important else " "
        typer.echo(f"  {reminder.id[:8]} {flag} {reminder.text:40} ", nl=False)
        typer.secho(badge, fg=BADGE_COLORS[level])

    typer.echo(f"\nTotal: {len(reminders)}")


def _set_status(reminder_id: str, status: str, data_file: Optional[Path]) -> None:
    repo = JsonDocumentRepository(data_file)
    full_id = _match_id(repo, reminder_id)

    before = {s["name"] for s in repo.get()["learnedSkills"]}
    document = update_reminder_status(repo, full_id, status)
    learned = sorted({s["name"] for s in document["learnedSkills"]} - before)

    typer.secho(f"✓ Reminder {full_id[:8]} marked {status}", fg=typer.colors.GREEN)
    if learned:
        typer.secho(f"  New skills: {', '.join(learned)}", fg=typer.colors.CYAN)


@app.command("done")
def done_command(
    reminder_id: str = typer.Argument(..., help="Reminder id (a unique prefix is enough)"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Mark a reminder done and learn the skills it mentions.

    Examples:\n

        $ manage_reminders.py done 9b2f
    """
    _set_status(reminder_id, "done", data_file)


@app.command("cancel")
def cancel_command(
    reminder_id: str = typer.Argument(..., help="Reminder id (a unique prefix is enough)"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Cancel a reminder (kept in history, no skills learned).

    Examples:\n

        $ manage_reminders.py cancel 9b2f
    """
    _set_status(reminder_id, "cancelled", data_file)


@app.command("delete")
def delete_command(
    reminder_id: str = typer.Argument(..., help="Reminder id (a unique prefix is enough)"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Delete a reminder outright.

    Examples:\n

        $ manage_reminders.py delete 9b2f
    """
    repo = JsonDocumentRepository(data_file)
    full_id = _match_id(repo, reminder_id)
    delete_reminder(repo, full_id)
    typer.secho(f"✓ Deleted reminder {full_id[:8]}", fg=typer.colors.GREEN)


@app.command("history")
def history_command(
    n: int = typer.Option(10, "--num", "-n", help="Number of entries to show"),
    relative: bool = typer.Option(
        False, "--relative", "-r", help="Show relative timestamps (e.g., '2h ago')"
    ),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Show completed and cancelled reminders, most recent first.

    Examples:\n

        $ manage_reminders.py history

        $ manage_reminders.py history -n 20 --relative
    """
    history = list_history(JsonDocumentRepository(data_file))[:n]

    typer.secho("\nReminder history:", fg=typer.colors.BLUE, bold=True)
    if not history:
        typer.echo("  (none)")
        return

    for reminder in history:
        when = format_timestamp(reminder.completed_at.isoformat(), relative=relative) if reminder.completed_at else "?"
        color = typer.colors.GREEN if reminder.status.value == "done" else typer.colors.YELLOW
        typer.secho(f"  {reminder.status.value:10}", fg=color, nl=False)
        typer.echo(f" {when:18} {reminder.text}")


if __name__ == "__main__":
    app()
