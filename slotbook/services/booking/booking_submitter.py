"""Booking submitter - one booking request per user confirmation."""

import inspect
from typing import Any, Callable, Optional

from loguru import logger

from ...core.exceptions import BookingRejected, BookingUnavailable, IncompleteSelection
from ...core.result import Failure, Success
from .models import AppointmentConfirmation, BookingRequest, BookingResult
from .protocols import BookingService
from .selection import Selection
from .time_slots import DaySnapshot

BookedCallback = Callable[[AppointmentConfirmation], Any]


class BookingSubmitter:
    """
    Turns a confirmed selection into a single booking request.

    There is no automatic retry and no deduplication: each confirm() call
    with a valid selection sends exactly one request. Callers should disable
    the confirm action while ``is_pending`` is true.
    """

    def __init__(self, service: BookingService, on_booked: Optional[BookedCallback] = None):
        """
        Initialize booking submitter.

        Args:
            service: Backing booking service
            on_booked: Navigation collaborator notified with the confirmation
                (sync or async callable)
        """
        self._service = service
        self._on_booked = on_booked
        self._pending = 0

    @property
    def is_pending(self) -> bool:
        return self._pending > 0

    async def confirm(
        self, selection: Selection, snapshot: Optional[DaySnapshot]
    ) -> BookingResult:
        """
        Submit the selection as a booking.

        Args:
            selection: Current selection
            snapshot: Currently applied availability

        Returns:
            Success with the appointment confirmation, or Failure carrying
            IncompleteSelection, BookingRejected or BookingUnavailable
        """
        if selection.hour is None:
            return Failure(IncompleteSelection("No hour selected"))
        if not selection.is_confirmable(snapshot):
            return Failure(
                IncompleteSelection(
                    f"Hour {selection.hour} is not bookable for the current selection",
                    details={"hour": selection.hour},
                )
            )

        # is_confirmable guarantees provider_id and date are set
        request = BookingRequest.for_slot(selection.provider_id, selection.date, selection.hour)  # type: ignore[arg-type]
        logger.info(
            f"Submitting booking for {request.provider_id} at {request.timestamp.isoformat()}"
        )

        self._pending += 1
        try:
            confirmation = await self._service.create_appointment(
                request.provider_id, request.timestamp
            )
        except BookingRejected as e:
            logger.error(f"Booking rejected for {request.provider_id}: {e}")
            return Failure(e)
        except BookingUnavailable as e:
            logger.error(f"Booking service unavailable: {e}")
            return Failure(e)
        finally:
            self._pending -= 1

        logger.info(f"Appointment {confirmation.id} booked at {confirmation.timestamp.isoformat()}")
        await self._notify_booked(confirmation)
        return Success(confirmation)

    async def _notify_booked(self, confirmation: AppointmentConfirmation) -> None:
        if self._on_booked is None:
            return
        try:
            outcome = self._on_booked(confirmation)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            # Navigation is non-critical, the appointment already exists
            logger.warning(f"on_booked callback failed for appointment {confirmation.id}: {e}")
