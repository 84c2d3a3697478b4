"""
Boundary validation shared by the command functions of every context.

Commands validate user input before touching the document, so invalid input is
never stored.
"""

import re
from typing import Iterable, Optional

TIME_OF_DAY_PATTERN = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


class ValidationError(ValueError):
    """
    Exception raised when user input is missing or malformed.

    Attributes:
        message: Error description
        field: Name of the offending input, if known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


def require_text(value, field: str) -> str:
    """Return the stripped value, or raise if it is missing or blank."""
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"Please enter a {field}", field=field)
    return text


def require_choice(value: str, choices: Iterable[str], field: str) -> str:
    """Return the lower-cased value if it is one of choices."""
    choices = list(choices)
    normalized = str(value or "").strip().lower()
    if normalized not in choices:
        raise ValidationError(
            f"Invalid {field} '{value}' (expected one of: {', '.join(choices)})", field=field
        )
    return normalized


def require_time_of_day(value: str, field: str = "time") -> str:
    """Validate an "HH:MM" 24-hour time string."""
    text = require_text(value, field)
    if not TIME_OF_DAY_PATTERN.match(text):
        raise ValidationError(f"Invalid {field} '{text}' (expected HH:MM)", field=field)
    return text
