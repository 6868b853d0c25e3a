"""Availability fetcher - day-availability requests with last-request-wins.

Every request is tagged with a monotonically increasing token. When a
response arrives its token is compared with the latest one issued; anything
older is dropped, success or failure alike. In-flight requests are never
aborted, only ignored.
"""

import itertools
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from loguru import logger

from ...core.enums import FetchStatus
from ...core.exceptions import AvailabilityUnavailable, InvalidSlot
from .protocols import AvailabilityService
from .time_slots import AvailabilityKey, AvailabilitySlot, DaySnapshot


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one fetch_day call as seen by its caller."""

    key: AvailabilityKey
    status: FetchStatus
    token: int
    slots: Tuple[AvailabilitySlot, ...] = ()
    error: Optional[AvailabilityUnavailable] = None

    @property
    def applied(self) -> bool:
        return self.status is FetchStatus.APPLIED

    @property
    def stale(self) -> bool:
        return self.status is FetchStatus.STALE

    @property
    def failed(self) -> bool:
        return self.status is FetchStatus.FAILED


class AvailabilityFetcher:
    """Owns the applied DaySnapshot and supersedes it atomically."""

    def __init__(self, service: AvailabilityService):
        """
        Initialize availability fetcher.

        Args:
            service: Backing availability service
        """
        self._service = service
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._latest_key: Optional[AvailabilityKey] = None
        self._loading = False
        self._snapshot: Optional[DaySnapshot] = None

    @property
    def snapshot(self) -> Optional[DaySnapshot]:
        """Last applied snapshot (may belong to an older key while loading)."""
        return self._snapshot

    @property
    def latest_token(self) -> int:
        """Token of the most recently issued request (0 before the first)."""
        return self._latest_token

    @property
    def latest_key(self) -> Optional[AvailabilityKey]:
        return self._latest_key

    @property
    def is_loading(self) -> bool:
        """True while the most recent request has not resolved."""
        return self._loading

    def _is_latest(self, token: int) -> bool:
        return token == self._latest_token

    async def fetch_day(self, provider_id: str, day: date) -> FetchOutcome:
        """
        Fetch one provider's day and apply it if still the latest request.

        The previous snapshot stays in place until the new one arrives, and
        is kept if the fetch fails.

        Args:
            provider_id: Provider to query
            day: Calendar day to query

        Returns:
            FetchOutcome with status applied, stale or failed
        """
        token = next(self._tokens)
        key = AvailabilityKey(provider_id=provider_id, date=day)
        self._latest_token = token
        self._latest_key = key
        self._loading = True
        logger.debug(f"Availability request #{token} for {key}")

        try:
            raw_slots = await self._service.get_day_availability(
                provider_id, day.year, day.month, day.day
            )
        except AvailabilityUnavailable as e:
            if not self._is_latest(token):
                logger.debug(f"Dropping failed stale response #{token} for {key}")
                return FetchOutcome(key=key, token=token, status=FetchStatus.STALE)
            logger.warning(f"Availability for {key} unavailable, keeping previous slots: {e}")
            return FetchOutcome(key=key, token=token, status=FetchStatus.FAILED, error=e)
        except InvalidSlot:
            # Out-of-range hours only matter for the response that would be applied
            if not self._is_latest(token):
                logger.debug(f"Dropping malformed stale response #{token} for {key}")
                return FetchOutcome(key=key, token=token, status=FetchStatus.STALE)
            raise
        finally:
            if self._is_latest(token):
                self._loading = False

        slots = tuple(raw_slots)
        if not self._is_latest(token):
            logger.debug(
                f"Dropping stale response #{token} for {key} (latest is #{self._latest_token})"
            )
            return FetchOutcome(key=key, token=token, status=FetchStatus.STALE, slots=slots)

        self._snapshot = DaySnapshot(key=key, slots=slots)
        logger.info(f"Applied {len(slots)} slots for {key}")
        return FetchOutcome(key=key, token=token, status=FetchStatus.APPLIED, slots=slots)
