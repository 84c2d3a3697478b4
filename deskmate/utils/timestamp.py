"""Timestamp formatting utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def now_exact() -> str:
    """Current UTC time as an ISO 8601 string (microsecond precision)."""
    return utc_now().isoformat()


def parse_timestamp(value) -> datetime:
    """
    Parse an ISO 8601 timestamp into an aware datetime.

    Naive timestamps (e.g. "2025-11-13T18:45" as produced by a datetime-local
    input) are interpreted as UTC. Accepts datetime instances unchanged apart
    from the same naive-to-UTC rule.

    Raises:
        ValueError: If the value is empty or not ISO 8601
    """
    if isinstance(value, datetime):
        dt = value
    else:
        if not value:
            raise ValueError("Timestamp is empty")
        text = str(value).strip()
        # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(iso_timestamp: str, relative: bool = False, now: datetime = None) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show absolute time (e.g., "2025-11-13 18:45")
        now: Reference time for relative formatting (defaults to current UTC time)

    Returns:
        Human-readable timestamp

    Examples:
        format_timestamp("2025-11-13T18:45:40.572549")
        # "2025-11-13 18:45"

        format_timestamp("2025-11-13T18:45:40.572549", relative=True)
        # "2h ago"
    """
    try:
        dt = parse_timestamp(iso_timestamp)
    except (ValueError, TypeError):
        # Return original if parsing fails
        return str(iso_timestamp)

    if relative:
        return _format_relative_time(dt, now or utc_now())
    return dt.strftime("%Y-%m-%d %H:%M")


def _format_relative_time(dt: datetime, now: datetime) -> str:
    """
    Format datetime as relative time in compact format (e.g., "2h ago").

    - Seconds: "30s ago"
    - Minutes: "15m ago"
    - Hours: "2h ago"
    - Days: "5d ago"
    Future times use "from now" instead of "ago".
    """
    diff = now - dt

    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
