"""Appointments endpoint - appointment creation."""

import asyncio
from datetime import datetime
from typing import Callable

import aiohttp
from loguru import logger

from ...core.exceptions import BookingRejected, BookingUnavailable
from ..booking.models import AppointmentConfirmation
from .http import error_message, read_json
from .models import AppointmentPayload


class AppointmentEndpoints:
    """Handles ``POST /appointments``. Never retries."""

    def __init__(self, base_url: str, http_session_getter: Callable[[], aiohttp.ClientSession]):
        """
        Initialize appointment endpoints.

        Args:
            base_url: Backend base URL without trailing slash
            http_session_getter: Callable that returns the HTTP session
        """
        self.base_url = base_url
        self._http_session_getter = http_session_getter

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Get HTTP session from parent client."""
        return self._http_session_getter()

    async def create_appointment(
        self, provider_id: str, timestamp: datetime
    ) -> AppointmentConfirmation:
        """
        Book an appointment.

        Naive timestamps are local time and are sent with the local UTC offset.

        Args:
            provider_id: Provider ID
            timestamp: Slot start

        Returns:
            Appointment confirmation

        Raises:
            BookingRejected: On a 4xx response (slot taken, invalid date, ...)
            BookingUnavailable: On transport errors, 429, 5xx or non-JSON bodies
        """
        payload = {"provider_id": provider_id, "date": timestamp.astimezone().isoformat()}

        try:
            async with self._session.post(
                f"{self.base_url}/appointments", json=payload
            ) as response:
                if response.status == 429:
                    retry_after = response.headers.get("Retry-After")
                    logger.error(f"Rate limited on booking (429), retry after {retry_after}s")
                    raise BookingUnavailable(
                        "Rate limited on booking endpoint",
                        details={"status": 429, "retry_after": retry_after},
                    )

                data = await read_json(response, BookingUnavailable)

                if 400 <= response.status < 500:
                    message = error_message(data, f"Booking rejected ({response.status})")
                    logger.error(f"Booking rejected ({response.status}): {message}")
                    raise BookingRejected(message, status=response.status)
                if response.status not in (200, 201):
                    logger.error(f"Booking failed with status {response.status}: {data}")
                    raise BookingUnavailable(
                        error_message(data, f"Booking failed with status {response.status}"),
                        details={"status": response.status},
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Booking request failed: {e}")
            raise BookingUnavailable(f"Booking request failed: {e}") from e

        return self._parse_confirmation(data, provider_id, timestamp)

    @staticmethod
    def _parse_confirmation(
        data: AppointmentPayload, provider_id: str, timestamp: datetime
    ) -> AppointmentConfirmation:
        if not isinstance(data, dict) or "id" not in data:
            # Request went through but we cannot tell which appointment it created
            raise BookingUnavailable("Booking response has no appointment id")
        return AppointmentConfirmation(
            id=str(data["id"]),
            timestamp=timestamp,
            provider_id=str(data.get("provider_id") or provider_id),
        )
