"""Custom exception classes for SlotBook."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class SlotBookError(Exception):
    """Base exception for SlotBook."""

    def __init__(
        self, message: str, recoverable: bool = True, details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize SlotBook error.

        Args:
            message: Error message
            recoverable: Whether the user can recover by retrying the action
            details: Additional error details
        """
        self.message = message
        self.recoverable = recoverable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
            "timestamp": self.timestamp,
        }


class ConfigurationError(SlotBookError):
    """Configuration error occurred."""

    def __init__(
        self,
        message: str = "Configuration error",
        recoverable: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


class DirectoryUnavailable(SlotBookError):
    """Provider list could not be loaded from the backing service."""

    def __init__(
        self,
        message: str = "Provider directory unavailable",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable=True, details=details)


class AvailabilityUnavailable(SlotBookError):
    """Day availability could not be fetched from the backing service."""

    def __init__(
        self,
        message: str = "Day availability unavailable",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable=True, details=details)


class InvalidSlot(SlotBookError):
    """Slot hour outside 0-23."""

    def __init__(self, hour: Any):
        self.hour = hour
        super().__init__(
            f"Invalid slot hour: {hour!r} (expected 0-23)",
            recoverable=False,
            details={"hour": hour},
        )


class IncompleteSelection(SlotBookError):
    """Selection cannot be confirmed (no hour, or hour not bookable)."""

    def __init__(
        self,
        message: str = "Selection is incomplete",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable=True, details=details)


class BookingError(SlotBookError):
    """Appointment booking failed."""

    def __init__(
        self,
        message: str = "Booking failed",
        recoverable: bool = True,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable, details)


class BookingRejected(BookingError):
    """Backing service refused the booking (e.g. slot taken by another client)."""

    def __init__(
        self,
        message: str = "Booking rejected by the service",
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status = status
        merged = {"status": status, **(details or {})}
        super().__init__(message, recoverable=True, details=merged)


class BookingUnavailable(BookingError):
    """Transport or service failure while booking."""

    def __init__(
        self,
        message: str = "Booking service unavailable",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable=True, details=details)
