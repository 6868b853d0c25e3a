"""Backend API client - aiohttp session plus the three service contracts."""

from datetime import datetime
from typing import List, Optional

import aiohttp
from loguru import logger

from ...core.config.settings import SlotBookSettings
from ...core.exceptions import ConfigurationError
from ..booking.models import AppointmentConfirmation, Provider
from ..booking.time_slots import AvailabilitySlot
from .appointments import AppointmentEndpoints
from .providers import ProviderEndpoints


class BackendApiClient:
    """
    HTTP client for the booking backend.

    Implements DirectoryService, AvailabilityService and BookingService. The
    bearer token comes from an already authenticated session.
    """

    def __init__(self, base_url: str, token: str = "", timeout: float = 15.0):
        """
        Initialize backend API client.

        Args:
            base_url: Backend base URL
            token: Bearer token of the authenticated user
            timeout: Total request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._http_session: Optional[aiohttp.ClientSession] = None

        self._providers = ProviderEndpoints(self.base_url, lambda: self._session)
        self._appointments = AppointmentEndpoints(self.base_url, lambda: self._session)

        logger.info(f"BackendApiClient initialized for {self.base_url}")

    @classmethod
    def from_settings(cls, settings: SlotBookSettings) -> "BackendApiClient":
        """
        Build a client from application settings.

        Raises:
            ConfigurationError: If production runs without a bearer token
        """
        token = settings.api_token.get_secret_value()
        if not token and settings.is_production():
            raise ConfigurationError("SLOTBOOK_API_TOKEN is required in production")
        return cls(base_url=settings.api_base_url, token=token, timeout=settings.request_timeout)

    async def __aenter__(self) -> "BackendApiClient":
        """Async context manager entry."""
        await self._init_http_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _init_http_session(self) -> None:
        """Initialize HTTP session with connection pooling."""
        if self._http_session is None:
            headers = {"Accept": "application/json"}
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"

            connector = aiohttp.TCPConnector(limit=10, ttl_dns_cache=120, keepalive_timeout=30)
            timeout = aiohttp.ClientTimeout(total=self.timeout, connect=10)

            self._http_session = aiohttp.ClientSession(
                connector=connector, headers=headers, timeout=timeout
            )
            logger.debug("HTTP session initialized")

    async def close(self) -> None:
        """Close HTTP session."""
        if self._http_session:
            await self._http_session.close()
            self._http_session = None

    @property
    def _session(self) -> aiohttp.ClientSession:
        """Get HTTP session, raising error if not initialized."""
        if self._http_session is None:
            raise RuntimeError("HTTP session not initialized. Use 'async with' first.")
        return self._http_session

    async def list_providers(self) -> List[Provider]:
        """
        Get selectable providers.

        Raises:
            DirectoryUnavailable: If the backend cannot be reached
        """
        return await self._providers.list_providers()

    async def get_day_availability(
        self, provider_id: str, year: int, month: int, day: int
    ) -> List[AvailabilitySlot]:
        """
        Get a provider's hourly availability for one day.

        Raises:
            AvailabilityUnavailable: If the backend cannot be reached
        """
        return await self._providers.get_day_availability(provider_id, year, month, day)

    async def create_appointment(
        self, provider_id: str, timestamp: datetime
    ) -> AppointmentConfirmation:
        """
        Book an appointment.

        Raises:
            BookingRejected: If the backend refused the booking
            BookingUnavailable: On transport or service failure
        """
        return await self._appointments.create_appointment(provider_id, timestamp)
