"""
Shared utilities for DESKMATE.

Common functionality used across contexts:
- Logging setup and the activity event log
- Timestamp helpers
- Resume text loading
"""

from deskmate.utils.timestamp import now_exact, parse_timestamp, utc_now

__all__ = ["now_exact", "parse_timestamp", "utc_now"]
