#!/usr/bin/env python3
"""
Run the deadline monitor.

Checks every pending reminder on a fixed interval and fires escalating
notifications (desktop alert, plus email when configured) as each reminder's
deadline approaches.
"""

import os
import signal
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from deskmate.contexts.notifications import ConsoleAlertSink, DesktopAlertSink, EmailDispatcher
from deskmate.contexts.reminders.logger import _log_info, setup_monitor_logger
from deskmate.contexts.reminders.monitor import (
    CHECK_INTERVAL_SECONDS,
    TIER_WINDOW,
    DeadlineMonitor,
    parse_tier_window,
)
from deskmate.contexts.reminders.scheduler import APSchedulerTicker
from deskmate.contexts.storage import JsonDocumentRepository

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Run the reminder deadline monitor",
)


@app.command()
def main(
    interval: float = typer.Option(
        CHECK_INTERVAL_SECONDS, "--interval", "-i", help="Seconds between checks"
    ),
    data_file: Optional[Path] = typer.Option(
        None, "--data-file", "-d", help="Document path (default: DESKMATE_DATA_FILE)"
    ),
    tier_window: Optional[str] = typer.Option(
        None,
        "--tier-window",
        "-w",
        help="Tier firing window in percentage points, or 'none' to fire any passed tier",
    ),
    console: bool = typer.Option(
        False, "--console", "-c", help="Print alerts to the terminal instead of the desktop"
    ),
    once: bool = typer.Option(False, "--once", help="Run a single check and exit"),
):
    """
    Start the deadline monitor.

    Runs one check immediately, then one every --interval seconds until
    interrupted (Ctrl+C or SIGTERM).

    Examples:\n

        $ python scripts/run_monitor.py                    # Poll every DESKMATE_CHECK_INTERVAL seconds

        $ python scripts/run_monitor.py -i 10 --console    # Poll every 10s, alerts in terminal

        $ python scripts/run_monitor.py --once             # Single check (e.g. from cron)

        $ python scripts/run_monitor.py -w none            # Fire any tier already passed
    """
    window = parse_tier_window(tier_window) if tier_window is not None else TIER_WINDOW

    repository = JsonDocumentRepository(data_file)
    log_file = setup_monitor_logger(LOGS_PATH, interval, repository.path, window)

    dispatcher = EmailDispatcher()
    monitor = DeadlineMonitor(
        repository=repository,
        alert_sink=ConsoleAlertSink() if console else DesktopAlertSink(),
        email_dispatcher=dispatcher,
        tier_window=window,
    )

    if once:
        events = monitor.check_reminders()
        dispatcher.shutdown(wait=True)
        typer.secho(f"✓ Check complete: {len(events)} notification(s) fired", fg=typer.colors.GREEN)
        return

    ticker = APSchedulerTicker()

    def handle_signal(signum, frame):
        _log_info(f"Received signal {signum}")
        ticker.shutdown()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    typer.secho(f"\nDeadline monitor running (every {interval}s)", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Log file: {log_file}")

    monitor.start(ticker, interval)
    try:
        ticker.start()
    finally:
        dispatcher.shutdown(wait=True)
        _log_info("Deadline monitor stopped")


if __name__ == "__main__":
    app()
