#!/usr/bin/env python3
"""
Command-line interface for subjects and attendance.

Commands:
    add-subject    - Add a subject
    delete-subject - Delete a subject (its records are kept)
    subjects       - List subjects
    mark           - Record attendance of a class
    stats          - Classes attended per subject
    recent         - Most recent attendance records
"""

from datetime import date
from pathlib import Path
from typing import Optional

import typer

from deskmate.contexts.attendance import (
    add_subject,
    attendance_stats,
    delete_subject,
    mark_attendance,
    recent_attendance,
)
from deskmate.contexts.storage import JsonDocumentRepository
from deskmate.utils.validation import ValidationError

app = typer.Typer(
    add_completion=False,
    help="Manage subjects and attendance",
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


def _subject_id(repo: JsonDocumentRepository, name_or_id: str) -> str:
    """Resolve a subject by exact name (case-insensitive) or id prefix."""
    subjects = repo.get()["subjects"]
    matches = [s["id"] for s in subjects if s["name"].lower() == name_or_id.lower()]
    if not matches:
        matches = [s["id"] for s in subjects if s["id"].startswith(name_or_id)]
    if len(matches) != 1:
        typer.secho(
            f"Subject '{name_or_id}' matches {len(matches)} subjects", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)
    return matches[0]


@app.command("add-subject")
def add_subject_command(
    name: str = typer.Argument(..., help="Subject name"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Add a subject.

    Examples:\n

        $ manage_attendance.py add-subject Physics
    """
    try:
        subject = add_subject(JsonDocumentRepository(data_file), name)
    except ValidationError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Added {subject['name']} ({subject['id'][:8]})", fg=typer.colors.GREEN)


@app.command("delete-subject")
def delete_subject_command(
    subject: str = typer.Argument(..., help="Subject name or id"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Delete a subject. Attendance already recorded for it is kept.

    Examples:\n

        $ manage_attendance.py delete-subject Physics
    """
    repo = JsonDocumentRepository(data_file)
    subject_id = _subject_id(repo, subject)
    delete_subject(repo, subject_id)
    typer.secho(f"✓ Deleted subject {subject_id[:8]}", fg=typer.colors.GREEN)


@app.command("subjects")
def subjects_command(data_file: Optional[Path] = DATA_FILE_OPTION):
    """
    List subjects.

    Examples:\n

        $ manage_attendance.py subjects
    """
    subjects = JsonDocumentRepository(data_file).get()["subjects"]

    typer.secho("\nSubjects:", fg=typer.colors.BLUE, bold=True)
    if not subjects:
        typer.echo("  (none)")
        return
    for subject in subjects:
        typer.echo(f"  {subject['id'][:8]}  {subject['name']}")


@app.command("mark")
def mark_command(
    subject: str = typer.Argument(..., help="Subject name or id"),
    day: Optional[str] = typer.Option(
        None, "--day", help="Weekday of the class (default: weekday of --date)"
    ),
    on: Optional[str] = typer.Option(
        None, "--date", help="Date of the class, YYYY-MM-DD (default: today)"
    ),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Record that you attended a class.

    Examples:\n

        $ manage_attendance.py mark Physics                         # Today

        $ manage_attendance.py mark Physics --date 2025-11-17       # A past class
    """
    repo = JsonDocumentRepository(data_file)
    subject_id = _subject_id(repo, subject)

    on = on or date.today().isoformat()
    if day is None:
        try:
            day = date.fromisoformat(on).strftime("%A").lower()
        except ValueError:
            typer.secho(f"Error: Invalid date '{on}' (expected YYYY-MM-DD)", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    try:
        record = mark_attendance(repo, subject_id, day, on)
    except ValidationError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(
        f"✓ Marked {record['subjectName']} on {record['day'].capitalize()} {record['date']}",
        fg=typer.colors.GREEN,
    )


@app.command("stats")
def stats_command(data_file: Optional[Path] = DATA_FILE_OPTION):
    """
    Show classes attended per subject.

    Examples:\n

        $ manage_attendance.py stats
    """
    stats = attendance_stats(JsonDocumentRepository(data_file).get())

    typer.secho("\nAttendance Statistics", fg=typer.colors.BLUE, bold=True)
    typer.echo("=" * 40)
    if not stats:
        typer.echo("No subjects added yet")
        return
    for name, count in stats.items():
        typer.echo(f"  {name:25} {count} classes attended")


@app.command("recent")
def recent_command(
    n: int = typer.Option(10, "--num", "-n", help="Number of records to show"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Show the most recent attendance records.

    Examples:\n

        $ manage_attendance.py recent -n 5
    """
    records = recent_attendance(JsonDocumentRepository(data_file).get(), n)

    typer.secho("\nRecent attendance:", fg=typer.colors.BLUE, bold=True)
    if not records:
        typer.echo("  (none)")
        return
    for record in records:
        typer.echo(f"  {record['date']}  {record['day'].capitalize():10} {record['subjectName']}")


if __name__ == "__main__":
    app()
