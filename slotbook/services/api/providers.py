"""Providers endpoint - provider directory and day availability."""

import asyncio
from typing import Any, Callable, List, cast
from urllib.parse import quote

import aiohttp
from loguru import logger

from ...core.exceptions import AvailabilityUnavailable, DirectoryUnavailable
from ..booking.models import Provider
from ..booking.time_slots import AvailabilitySlot
from .http import read_json
from .models import AvailabilityPayload, ProviderPayload


class ProviderEndpoints:
    """Handles ``/providers`` and ``/providers/{id}/day-availability``."""

    def __init__(self, base_url: str, http_session_getter: Callable[[], aiohttp.ClientSession]):
        """
        Initialize provider endpoints.

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

    async def list_providers(self) -> List[Provider]:
        """
        Get selectable providers.

        Returns:
            Providers in backend order

        Raises:
            DirectoryUnavailable: On transport errors, non-200 status or bad payload
        """
        try:
            async with self._session.get(f"{self.base_url}/providers") as response:
                if response.status != 200:
                    logger.error(f"Provider list failed with status {response.status}")
                    raise DirectoryUnavailable(
                        f"Provider list failed with status {response.status}",
                        details={"status": response.status},
                    )
                data = await read_json(response, DirectoryUnavailable)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Provider list request failed: {e}")
            raise DirectoryUnavailable(f"Provider list request failed: {e}") from e

        providers = self._parse_providers(data)
        logger.info(f"Retrieved {len(providers)} providers")
        return providers

    async def get_day_availability(
        self, provider_id: str, year: int, month: int, day: int
    ) -> List[AvailabilitySlot]:
        """
        Get a provider's hourly availability for one day.

        Args:
            provider_id: Provider ID
            year: Calendar year
            month: Calendar month, 1-12
            day: Day of month

        Returns:
            Slots in backend order

        Raises:
            AvailabilityUnavailable: On transport errors, non-200 status or bad payload
            InvalidSlot: If the backend sends an hour outside 0-23
        """
        params = {"year": year, "month": month, "day": day}
        try:
            async with self._session.get(
                f"{self.base_url}/providers/{quote(provider_id, safe='')}/day-availability",
                params=params,
            ) as response:
                if response.status != 200:
                    logger.error(
                        f"Day availability for {provider_id} failed with status {response.status}"
                    )
                    raise AvailabilityUnavailable(
                        f"Day availability failed with status {response.status}",
                        details={"status": response.status, "provider_id": provider_id},
                    )
                data = await read_json(response, AvailabilityUnavailable)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Day availability request for {provider_id} failed: {e}")
            raise AvailabilityUnavailable(f"Day availability request failed: {e}") from e

        return self._parse_slots(data)

    @staticmethod
    def _parse_providers(data: Any) -> List[Provider]:
        if not isinstance(data, list):
            raise DirectoryUnavailable("Provider list payload is not a list")
        try:
            return [
                Provider(
                    id=str(item["id"]),
                    name=str(item["name"]),
                    avatar_url=item.get("avatar_url"),
                )
                for item in cast(List[ProviderPayload], data)
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise DirectoryUnavailable(f"Malformed provider entry: {e}") from e

    @staticmethod
    def _parse_slots(data: Any) -> List[AvailabilitySlot]:
        if not isinstance(data, list):
            raise AvailabilityUnavailable("Day availability payload is not a list")
        try:
            return [
                AvailabilitySlot(hour=item["hour"], available=bool(item["available"]))
                for item in cast(List[AvailabilityPayload], data)
            ]
        except (KeyError, TypeError) as e:
            raise AvailabilityUnavailable(f"Malformed availability entry: {e}") from e
