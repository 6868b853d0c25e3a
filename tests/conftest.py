"""Pytest configuration and common fixtures."""

import asyncio
import os
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

# Try to load test-specific environment file if it exists
test_env_file = Path(__file__).parent / ".env.test"
if test_env_file.exists():
    load_dotenv(test_env_file)

os.environ.setdefault("SLOTBOOK_ENV", "testing")

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from slotbook.core.exceptions import (
    AvailabilityUnavailable,
    BookingError,
    DirectoryUnavailable,
)
from slotbook.services.booking import (
    AppointmentConfirmation,
    AvailabilitySlot,
    BookingCoordinator,
    Provider,
)

DayKey = Tuple[str, date]


class FakeBackend:
    """
    In-memory backing service implementing all three service contracts.

    ``hold(provider_id, day)`` returns an event that blocks the matching
    availability request until set, so tests can resolve fetches in any order.
    """

    def __init__(self):
        self.providers: List[Provider] = [
            Provider(id="P1", name="Ana", avatar_url="https://cdn.example/ana.png"),
            Provider(id="P2", name="Bruno", avatar_url=None),
        ]
        self.day_slots: Dict[DayKey, List[AvailabilitySlot]] = {}
        self.directory_error: Optional[DirectoryUnavailable] = None
        self.availability_errors: Dict[DayKey, AvailabilityUnavailable] = {}
        self.booking_error: Optional[BookingError] = None
        self.list_calls = 0
        self.availability_calls: List[DayKey] = []
        self.booking_calls: List[Tuple[str, datetime]] = []
        self._gates: Dict[DayKey, asyncio.Event] = {}

    def set_day(self, provider_id: str, day: date, slots: List[Tuple[int, bool]]) -> None:
        self.day_slots[(provider_id, day)] = [
            AvailabilitySlot(hour=hour, available=available) for hour, available in slots
        ]

    def hold(self, provider_id: str, day: date) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[(provider_id, day)] = gate
        return gate

    async def list_providers(self) -> List[Provider]:
        self.list_calls += 1
        await asyncio.sleep(0)
        if self.directory_error is not None:
            raise self.directory_error
        return list(self.providers)

    async def get_day_availability(
        self, provider_id: str, year: int, month: int, day: int
    ) -> List[AvailabilitySlot]:
        key = (provider_id, date(year, month, day))
        self.availability_calls.append(key)
        gate = self._gates.pop(key, None)
        if gate is not None:
            await gate.wait()
        error = self.availability_errors.get(key)
        if error is not None:
            raise error
        return list(self.day_slots.get(key, []))

    async def create_appointment(
        self, provider_id: str, timestamp: datetime
    ) -> AppointmentConfirmation:
        self.booking_calls.append((provider_id, timestamp))
        if self.booking_error is not None:
            raise self.booking_error
        return AppointmentConfirmation(
            id=f"appt-{len(self.booking_calls)}", timestamp=timestamp, provider_id=provider_id
        )


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Automatically set up test environment for all tests."""
    monkeypatch.setenv("SLOTBOOK_ENV", "testing")
    monkeypatch.setenv("SLOTBOOK_API_BASE_URL", "http://test-backend.local")
    monkeypatch.setenv("SLOTBOOK_API_TOKEN", "test-token")

    # Reset settings singleton so each test gets fresh settings
    from slotbook.core.config.settings import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def booking_day() -> date:
    return date(2024, 3, 10)


@pytest.fixture
def backend(booking_day) -> FakeBackend:
    """Backend with the reference day: 08 free, 09 taken, 14 free."""
    fake = FakeBackend()
    fake.set_day("P1", booking_day, [(8, True), (9, False), (14, True)])
    fake.set_day("P2", booking_day, [(10, True), (15, True), (16, False)])
    return fake


@pytest.fixture
def coordinator(backend, booking_day) -> BookingCoordinator:
    return BookingCoordinator(
        backend, backend, backend, initial_provider_id="P1", initial_date=booking_day
    )
