"""Custom exceptions for the notifications context."""

from typing import Optional


class EmailDeliveryError(Exception):
    """
    Raised by the SMTP transport when an email cannot be delivered.

    Attributes:
        message: Error description
        service: Configured mail service (e.g. "gmail")
        original_error: The underlying smtplib/socket error
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.service = service
        self.original_error = original_error

        parts = [message]
        if service:
            parts.append(f"Service: {service}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
