"""Booking domain models - providers, booking requests and confirmations."""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Union

from ...core.exceptions import BookingError, IncompleteSelection
from ...core.result import Failure, Success
from .time_slots import format_hour


@dataclass(frozen=True)
class Provider:
    """Selectable service provider. Identity is ``id``."""

    id: str
    name: str
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class BookingRequest:
    """Outbound booking: provider plus the slot start, minutes and seconds zeroed."""

    provider_id: str
    timestamp: datetime

    @classmethod
    def for_slot(cls, provider_id: str, day: date, hour: int) -> "BookingRequest":
        """
        Merge a calendar date with a selected hour.

        Args:
            provider_id: Provider to book with
            day: Selected calendar date
            hour: Selected hour, 0-23

        Returns:
            BookingRequest whose timestamp is ``day`` at ``hour``:00:00
        """
        format_hour(hour)  # raises InvalidSlot for out-of-range hours
        return cls(provider_id=provider_id, timestamp=datetime.combine(day, time(hour=hour)))


@dataclass(frozen=True)
class AppointmentConfirmation:
    """Appointment created by the backing service."""

    id: str
    timestamp: datetime
    provider_id: Optional[str] = None


BookingResult = Union[
    Success[AppointmentConfirmation], Failure[Union[BookingError, IncompleteSelection]]
]
