"""
Recurring-callback capability for the deadline monitor.

The monitor never owns a timer. It is handed a Ticker and registers its check with
`every()`; production code uses APScheduler, tests use ManualTicker and ManualClock
to step time deterministically.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Protocol, Tuple

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from deskmate.contexts.reminders.logger import _log_error, _log_info
from deskmate.utils.timestamp import utc_now


class Ticker(Protocol):
    """Something that can invoke a callback on a fixed period."""

    def every(self, interval_seconds: float, callback: Callable[[], object]) -> None:
        ...


class APSchedulerTicker:
    """
    Ticker backed by an APScheduler BlockingScheduler.

    Jobs are registered with max_instances=1 and coalesce=True, so a slow run is
    never overlapped by the next tick and missed ticks collapse into one run.
    """

    def __init__(self, scheduler: Optional[BlockingScheduler] = None):
        self.scheduler = scheduler or BlockingScheduler(timezone=timezone.utc)

    def every(self, interval_seconds: float, callback: Callable[[], object]) -> None:
        self.scheduler.add_job(
            callback,
            IntervalTrigger(seconds=interval_seconds),
            id=f"every-{interval_seconds}s-{uuid.uuid4().hex[:8]}",
            max_instances=1,
            coalesce=True,
        )
        _log_info(f"Registered recurring job every {interval_seconds}s")

    def start(self) -> None:
        """Run the scheduler loop (blocks until shutdown)."""
        self.scheduler.start()

    def shutdown(self) -> None:
        if self.scheduler.running:
            _log_info("Shutting down scheduler...")
            try:
                self.scheduler.shutdown(wait=False)
            except Exception as e:
                _log_error(f"Error during scheduler shutdown, continuing: {e}")


def system_clock() -> datetime:
    """Production clock: aware UTC now."""
    return utc_now()


class ManualClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or utc_now()

    def __call__(self) -> datetime:
        return self.current

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta) -> datetime:
        """Move forward by a timedelta expressed as keyword arguments (hours=1, ...)."""
        self.current = self.current + timedelta(**delta)
        return self.current

    def set(self, moment: datetime) -> None:
        self.current = moment


class ManualTicker:
    """
    Ticker driven by explicit tick() calls.

    When given a ManualClock, each tick first advances the clock by the job's
    interval, mimicking a real timer firing.
    """

    def __init__(self, clock: Optional[ManualClock] = None):
        self.clock = clock
        self.jobs: List[Tuple[float, Callable[[], object]]] = []

    def every(self, interval_seconds: float, callback: Callable[[], object]) -> None:
        self.jobs.append((interval_seconds, callback))

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            for interval_seconds, callback in self.jobs:
                if self.clock is not None:
                    self.clock.advance(seconds=interval_seconds)
                callback()
