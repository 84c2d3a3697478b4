"""Custom exceptions for the storage context."""

from pathlib import Path
from typing import Optional


class PersistenceError(Exception):
    """
    Raised when the document cannot be read or written.

    Attributes:
        message: Error description
        path: Document path involved, if any
        original_error: The underlying I/O or decode error
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path:
            parts.append(f"Document: {path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
