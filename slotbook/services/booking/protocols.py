"""Backing-service contracts the coordinator depends on.

Implementations: ``slotbook.services.api.BackendApiClient`` and test fakes.
Each operation either returns domain objects or raises the typed error named
in its docstring; raw transport errors never cross this boundary.
"""

from datetime import datetime
from typing import Protocol, Sequence, runtime_checkable

from .models import AppointmentConfirmation, Provider
from .time_slots import AvailabilitySlot


@runtime_checkable
class DirectoryService(Protocol):
    """Lists the providers a client can book with."""

    async def list_providers(self) -> Sequence[Provider]:
        """
        Get all selectable providers.

        Raises:
            DirectoryUnavailable: If the backing service cannot be reached
        """
        ...


@runtime_checkable
class AvailabilityService(Protocol):
    """Reports hourly availability for one provider and day."""

    async def get_day_availability(
        self, provider_id: str, year: int, month: int, day: int
    ) -> Sequence[AvailabilitySlot]:
        """
        Get the day's slots for a provider.

        Raises:
            AvailabilityUnavailable: If the backing service cannot be reached
        """
        ...


@runtime_checkable
class BookingService(Protocol):
    """Creates appointments. Authoritative on conflicts."""

    async def create_appointment(
        self, provider_id: str, timestamp: datetime
    ) -> AppointmentConfirmation:
        """
        Book ``timestamp`` with a provider.

        Raises:
            BookingRejected: If the service refused the booking
            BookingUnavailable: On transport or service failure
        """
        ...
