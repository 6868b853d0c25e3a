"""Time-slot model - slot types plus the partition/format projection.

Everything here is pure: no I/O and no mutable state. The backing service is
trusted to return slots in ascending hour order; ``partition`` keeps whatever
order it receives.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Tuple

from ...core.enums import DayPeriod
from ...core.exceptions import InvalidSlot

NOON_HOUR = 12


def _check_hour(hour: object) -> int:
    # bool is an int subclass, but True is not an hour
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise InvalidSlot(hour)
    return hour


@dataclass(frozen=True)
class AvailabilitySlot:
    """One hour of a provider's day and whether it can be booked."""

    hour: int
    available: bool

    def __post_init__(self) -> None:
        _check_hour(self.hour)


@dataclass(frozen=True)
class FormattedSlot:
    """Slot annotated with its display label."""

    hour: int
    label: str
    available: bool

    @property
    def period(self) -> DayPeriod:
        return DayPeriod.MORNING if self.hour < NOON_HOUR else DayPeriod.AFTERNOON


@dataclass(frozen=True)
class SlotPartition:
    """Slots split into morning (hour < 12) and afternoon (hour >= 12)."""

    morning: Tuple[FormattedSlot, ...] = ()
    afternoon: Tuple[FormattedSlot, ...] = ()

    def __len__(self) -> int:
        return len(self.morning) + len(self.afternoon)


@dataclass(frozen=True)
class AvailabilityKey:
    """Identifies one day-availability request."""

    provider_id: str
    date: date

    def __str__(self) -> str:
        return f"{self.provider_id}@{self.date.isoformat()}"


@dataclass(frozen=True)
class DaySnapshot:
    """Slot set applied for a key. Replaced wholesale, never patched."""

    key: AvailabilityKey
    slots: Tuple[AvailabilitySlot, ...]

    def matches(self, provider_id: Optional[str], day: Optional[date]) -> bool:
        return self.key.provider_id == provider_id and self.key.date == day

    def is_available(self, hour: int) -> bool:
        return is_available(self.slots, hour)


def format_hour(hour: int) -> str:
    """
    Render an hour as a 24-hour ``HH:00`` label.

    Args:
        hour: Hour of day, 0-23

    Returns:
        Label such as ``"09:00"``

    Raises:
        InvalidSlot: If hour is outside 0-23
    """
    return f"{_check_hour(hour):02d}:00"


def format_slot(slot: AvailabilitySlot) -> FormattedSlot:
    return FormattedSlot(hour=slot.hour, label=format_hour(slot.hour), available=slot.available)


def partition(slots: Iterable[AvailabilitySlot]) -> SlotPartition:
    """
    Split slots into morning and afternoon, preserving input order.

    Every input slot lands in exactly one of the two sections.

    Args:
        slots: Slots as returned by the backing service

    Returns:
        SlotPartition with formatted slots
    """
    morning = []
    afternoon = []
    for slot in slots:
        formatted = format_slot(slot)
        if slot.hour < NOON_HOUR:
            morning.append(formatted)
        else:
            afternoon.append(formatted)
    return SlotPartition(morning=tuple(morning), afternoon=tuple(afternoon))


def find_slot(slots: Iterable[AvailabilitySlot], hour: int) -> Optional[AvailabilitySlot]:
    """Return the first slot for ``hour`` or None."""
    for slot in slots:
        if slot.hour == hour:
            return slot
    return None


def is_available(slots: Iterable[AvailabilitySlot], hour: int) -> bool:
    """True only when ``hour`` has a slot marked available."""
    slot = find_slot(slots, hour)
    return slot is not None and slot.available
