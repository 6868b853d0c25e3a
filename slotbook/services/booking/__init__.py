"""Availability & booking coordination package.

Components, leaf-first: time-slot model, availability fetcher, provider
directory, selection state machine, booking submitter, and the coordinator
that wires them together.
"""

from .availability_fetcher import AvailabilityFetcher, FetchOutcome
from .booking_submitter import BookingSubmitter
from .coordinator import BookingCoordinator
from .models import AppointmentConfirmation, BookingRequest, BookingResult, Provider
from .protocols import AvailabilityService, BookingService, DirectoryService
from .provider_directory import ProviderDirectory
from .selection import Selection, SelectionStateMachine
from .time_slots import (
    AvailabilityKey,
    AvailabilitySlot,
    DaySnapshot,
    FormattedSlot,
    SlotPartition,
    find_slot,
    format_hour,
    is_available,
    partition,
)

__all__ = [
    # Main service
    "BookingCoordinator",
    # Components
    "AvailabilityFetcher",
    "BookingSubmitter",
    "ProviderDirectory",
    "SelectionStateMachine",
    # Contracts
    "AvailabilityService",
    "BookingService",
    "DirectoryService",
    # Models
    "AppointmentConfirmation",
    "AvailabilityKey",
    "AvailabilitySlot",
    "BookingRequest",
    "BookingResult",
    "DaySnapshot",
    "FetchOutcome",
    "FormattedSlot",
    "Provider",
    "Selection",
    "SlotPartition",
    # Time-slot functions
    "find_slot",
    "format_hour",
    "is_available",
    "partition",
]
