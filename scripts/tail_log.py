#!/usr/bin/env python3
"""
View recent activity events from activity_events.log.

Provides filtered access to the event log with options to filter by
subject id (reminder, skill, class, ...) and event type.
"""

import json
import sys
from typing import Optional

import typer

from deskmate.utils.event_logging import get_recent_events
from deskmate.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="View recent activity events",
)


@app.command()
def main(
    n: int = typer.Option(10, "--num", "-n", help="Number of recent events to show"),
    subject: Optional[str] = typer.Option(
        None, "--subject", "-s", help="Filter to events about this reminder/skill/class id"
    ),
    event_type: Optional[str] = typer.Option(
        None, "--event-type", "-e", help="Filter to events of this type"
    ),
    compact: bool = typer.Option(
        False, "--compact", "-c", help="Print one event per line (no pretty formatting)"
    ),
):
    """
    Show the last n events from the activity log.

    Examples:\n

        $ python scripts/tail_log.py                            # Last 10 events

        $ python scripts/tail_log.py --num 20                   # Last 20 events

        $ python scripts/tail_log.py -e notification_fired      # Last 10 notifications

        $ python scripts/tail_log.py -n 20 --compact            # Compact output (one line per event)
    """
    events = get_recent_events(n=n, subject_id=subject, event_type=event_type)

    if not events:
        typer.secho("No events found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    # Show filter info if filters applied (skip header in compact mode)
    if not compact:
        filters = []
        if subject:
            filters.append(f"subject={subject}")
        if event_type:
            filters.append(f"type={event_type}")

        if filters:
            typer.secho(
                f"\nShowing last {len(events)} event(s) [{', '.join(filters)}]:",
                fg=typer.colors.BLUE,
            )
        else:
            typer.secho(f"\nShowing last {len(events)} event(s):", fg=typer.colors.BLUE)

        typer.echo("")

    for event in events:
        if compact:
            typer.echo(json.dumps(event))
        else:
            typer.echo(json.dumps(event, indent=2))
            typer.echo("")


@app.command()
def track(
    reminder_id: str = typer.Argument(..., help="Reminder id to track"),
    relative: bool = typer.Option(
        False, "--relative", "-r", help="Show relative timestamps (e.g., '2h ago')"
    ),
):
    """
    Show the notification and status timeline of a reminder.

    Examples:\n

        $ python scripts/tail_log.py track 9b2f0c...             # Full timeline

        $ python scripts/tail_log.py track 9b2f0c... --relative  # With relative timestamps
    """
    events = [
        e
        for e in get_recent_events(n=9999, subject_id=reminder_id)
        if e.get("event_type") in ("reminder_created", "notification_fired", "status_change")
    ]

    if not events:
        typer.secho(f"No events found for {reminder_id}", fg=typer.colors.YELLOW)
        return

    typer.secho(f"\nTimeline for {reminder_id}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    for event in events:
        when = format_timestamp(event["timestamp"], relative=relative)
        kind = event["event_type"]
        if kind == "reminder_created":
            typer.echo(f"  {when:18} created")
        elif kind == "notification_fired":
            color = typer.colors.RED if event.get("urgency") == "critical" else typer.colors.CYAN
            typer.secho(f"  {when:18} {event.get('tier', '?'):5} {event.get('message', '')}", fg=color)
        else:
            typer.secho(
                f"  {when:18} {event['old_status']} → {event['new_status']}", fg=typer.colors.GREEN
            )

    typer.echo("")


if __name__ == "__main__":
    # Default to 'main' command if no command specified
    # This allows: python tail_log.py -n 20 (instead of: python tail_log.py main -n 20)
    if len(sys.argv) == 1 or (len(sys.argv) > 1 and sys.argv[1].startswith("-")):
        sys.argv.insert(1, "main")
    app()
