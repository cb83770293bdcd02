from __future__ import annotations

from typing import Any


class BackendError(RuntimeError):
    """Raised when the hosted data backend fails (network errors, HTTP errors, bad payloads)."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class PartialSubmissionError(BackendError):
    """Raised when the primary booking was stored but the additional-service batch was not."""

    def __init__(self, message: str, order_number: str, status_code: int | None = None, details: Any = None) -> None:
        super().__init__(message, status_code=status_code, details=details)
        self.order_number = order_number


class BookingNotFoundError(LookupError):
    pass


class WizardSessionNotFoundError(LookupError):
    pass


class ServiceNotFoundError(LookupError):
    pass


class StatusTransitionError(ValueError):
    """Raised when an admin action is not legal for the booking's current status."""
    pass


class UpdateInFlightError(RuntimeError):
    """Raised when a status update for the same booking is already running."""
    pass
