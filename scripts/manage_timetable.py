#!/usr/bin/env python3
"""
Command-line interface for the class timetable.

Commands:
    add    - Add a class
    delete - Delete a class
    show   - Show the timetable (whole week or one day)
    clear  - Remove every class
"""

from pathlib import Path
from typing import Optional

import typer

from deskmate.contexts.storage import JsonDocumentRepository
from deskmate.contexts.timetable import (
    ClassEntry,
    classes_for_day,
    delete_class,
    save_class,
    save_schedule,
)
from deskmate.utils.validation import ValidationError

app = typer.Typer(
    add_completion=False,
    help="Manage the class timetable",
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


@app.command("add")
def add_command(
    time: str = typer.Argument(..., help="Start time, HH:MM"),
    activity: str = typer.Argument(..., help="Class or activity"),
    day: Optional[str] = typer.Option(
        None, "--day", help="Weekday (omit for a class held every day)"
    ),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Add a class to the timetable.

    Examples:\n

        $ manage_timetable.py add 09:00 "Linear Algebra" --day monday

        $ manage_timetable.py add 08:00 "Morning run"
    """
    try:
        entry = save_class(JsonDocumentRepository(data_file), time, activity, day)
    except ValidationError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Added {entry.activity} at {entry.time} ({entry.id[:8]})", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    class_id: str = typer.Argument(..., help="Class id (a unique prefix is enough)"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Delete a class.

    Examples:\n

        $ manage_timetable.py delete 7d0e
    """
    repo = JsonDocumentRepository(data_file)
    matches = [c["id"] for c in repo.get()["classes"] if c.get("id", "").startswith(class_id)]
    if len(matches) != 1:
        typer.secho(
            f"Class id '{class_id}' matches {len(matches)} classes", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)

    delete_class(repo, matches[0])
    typer.secho(f"✓ Deleted class {matches[0][:8]}", fg=typer.colors.GREEN)


@app.command("show")
def show_command(
    day: Optional[str] = typer.Option(None, "--day", help="Only show this weekday"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Show the timetable.

    Examples:\n

        $ manage_timetable.py show

        $ manage_timetable.py show --day tuesday
    """
    document = JsonDocumentRepository(data_file).get()

    if day:
        try:
            entries = classes_for_day(document, day)
        except ValidationError as e:
            typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        typer.secho(f"\n{day.capitalize()}:", fg=typer.colors.BLUE, bold=True)
    else:
        entries = [ClassEntry.from_dict(c) for c in document["classes"]]
        typer.secho("\nTimetable:", fg=typer.colors.BLUE, bold=True)

    if not entries:
        typer.echo("  (none)")
        return

    for entry in entries:
        label = (entry.day or "every day").capitalize()
        typer.echo(f"  {entry.id[:8]}  {label:10} {entry.time}  {entry.activity}")


@app.command("clear")
def clear_command(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Remove every class from the timetable.

    Examples:\n

        $ manage_timetable.py clear --yes
    """
    if not yes and not typer.confirm("Remove every class from the timetable?"):
        raise typer.Exit()

    save_schedule(JsonDocumentRepository(data_file), [])
    typer.secho("✓ Timetable cleared", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
