"""Availability & booking coordinator.

Facade the booking screen talks to. It wires the provider directory, the
availability fetcher, the selection state machine and the booking submitter
together:

    select_provider / select_date -> fetch_day -> reconcile selection
    select_hour -> validated against the applied snapshot
    confirm -> one booking request, result returned as Success/Failure
"""

from datetime import date
from typing import Optional, Tuple

from loguru import logger

from ...core.exceptions import BookingRejected, IncompleteSelection
from ...core.result import Failure
from .availability_fetcher import AvailabilityFetcher, FetchOutcome
from .booking_submitter import BookedCallback, BookingSubmitter
from .models import BookingResult, Provider
from .protocols import AvailabilityService, BookingService, DirectoryService
from .provider_directory import ProviderDirectory
from .selection import Selection, SelectionStateMachine
from .time_slots import DaySnapshot, SlotPartition, partition


class BookingCoordinator:
    """Coordinates provider/date/hour selection and booking for one screen."""

    def __init__(
        self,
        directory_service: DirectoryService,
        availability_service: AvailabilityService,
        booking_service: BookingService,
        initial_provider_id: Optional[str] = None,
        initial_date: Optional[date] = None,
        on_booked: Optional[BookedCallback] = None,
    ):
        """
        Initialize booking coordinator.

        Args:
            directory_service: Provider list source
            availability_service: Day availability source
            booking_service: Appointment creation endpoint
            initial_provider_id: Provider preselected when the screen opens
            initial_date: Date preselected when the screen opens (default: today)
            on_booked: Navigation collaborator called with each confirmation
        """
        self.directory = ProviderDirectory(directory_service)
        self.fetcher = AvailabilityFetcher(availability_service)
        self.submitter = BookingSubmitter(booking_service, on_booked=on_booked)
        self._selection = SelectionStateMachine(
            Selection(provider_id=initial_provider_id, date=initial_date or date.today())
        )
        self._partition = SlotPartition()
        self._needs_refresh = False
        self._refresh_after_token = 0

    @property
    def selection(self) -> Selection:
        return self._selection.state

    @property
    def snapshot(self) -> Optional[DaySnapshot]:
        return self.fetcher.snapshot

    @property
    def partition(self) -> SlotPartition:
        """Morning/afternoon view of the applied snapshot."""
        return self._partition

    @property
    def providers(self) -> Tuple[Provider, ...]:
        return self.directory.providers

    @property
    def is_loading(self) -> bool:
        return self.fetcher.is_loading

    @property
    def can_confirm(self) -> bool:
        """Whether the confirm action should be enabled."""
        return (
            not self._needs_refresh
            and not self.submitter.is_pending
            and self.selection.is_confirmable(self.snapshot)
        )

    async def load_providers(self) -> Tuple[Provider, ...]:
        """
        Load the provider list (once per session).

        Raises:
            DirectoryUnavailable: If the backing service cannot be reached
        """
        return await self.directory.load()

    async def start(self) -> FetchOutcome:
        """Fetch availability for the initial selection."""
        return await self.refresh()

    async def select_provider(self, provider_id: str) -> FetchOutcome:
        self._selection.select_provider(provider_id)
        return await self.refresh()

    async def select_date(self, day: date) -> FetchOutcome:
        self._selection.select_date(day)
        return await self.refresh()

    async def refresh(self) -> FetchOutcome:
        """
        Fetch availability for the current provider and date.

        Returns:
            FetchOutcome of the request

        Raises:
            IncompleteSelection: If no provider has been selected yet
        """
        current = self.selection
        if current.provider_id is None or current.date is None:
            raise IncompleteSelection("Select a provider before loading availability")

        outcome = await self.fetcher.fetch_day(current.provider_id, current.date)
        if outcome.applied and self.fetcher.snapshot is not None:
            snapshot = self.fetcher.snapshot
            self._partition = partition(snapshot.slots)
            self._selection.reconcile(snapshot)
            if outcome.token > self._refresh_after_token:
                self._needs_refresh = False
        return outcome

    def select_hour(self, hour: int) -> bool:
        """
        Select an hour from the applied snapshot.

        Returns:
            True if accepted; False when the hour is unavailable, unknown, or
            belongs to a snapshot for another provider/date
        """
        if self._needs_refresh:
            logger.debug(f"Rejected hour {hour}: availability must be refreshed first")
            return False
        return self._selection.select_hour(hour, self.snapshot)

    async def confirm(self) -> BookingResult:
        """
        Book the current selection.

        Returns:
            Success with the confirmation, or a classified Failure
        """
        if self._needs_refresh:
            return Failure(IncompleteSelection("Availability changed, refresh before booking"))

        result = await self.submitter.confirm(self.selection, self.snapshot)
        if isinstance(result, Failure) and isinstance(result.exception, BookingRejected):
            # Rejected slot may be taken; require fresh availability
            self._selection.clear_hour()
            self._needs_refresh = True
            self._refresh_after_token = self.fetcher.latest_token
        return result
