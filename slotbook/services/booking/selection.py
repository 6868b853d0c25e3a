"""Selection state machine.

``Selection`` is an immutable value; every transition returns a new one.
``SelectionStateMachine`` is the single owner of the current value.

An hour only counts when the applied snapshot was fetched for the
selection's own provider and date and marks that hour available.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from loguru import logger

from .time_slots import DaySnapshot


@dataclass(frozen=True)
class Selection:
    """The user's in-progress provider/date/hour choice."""

    provider_id: Optional[str] = None
    date: Optional[date] = None
    hour: Optional[int] = None

    def with_provider(self, provider_id: str) -> "Selection":
        """New provider; the hour belonged to the old provider's slots."""
        return replace(self, provider_id=provider_id, hour=None)

    def with_date(self, day: date) -> "Selection":
        return replace(self, date=day, hour=None)

    def without_hour(self) -> "Selection":
        return replace(self, hour=None) if self.hour is not None else self

    def hour_is_bookable(self, hour: int, snapshot: Optional[DaySnapshot]) -> bool:
        """Check ``hour`` against a snapshot fetched for this provider/date."""
        if snapshot is None or not snapshot.matches(self.provider_id, self.date):
            return False
        return snapshot.is_available(hour)

    def with_hour(self, hour: int, snapshot: Optional[DaySnapshot]) -> "Selection":
        """
        Select an hour if it is bookable in the snapshot.

        Args:
            hour: Hour picked by the user
            snapshot: Currently applied availability

        Returns:
            Selection with the hour set, or this same selection when rejected
        """
        if not self.hour_is_bookable(hour, snapshot):
            return self
        return replace(self, hour=hour)

    def reconcile(self, snapshot: DaySnapshot) -> "Selection":
        """Drop the hour if a newly applied snapshot no longer offers it."""
        if self.hour is None or not snapshot.matches(self.provider_id, self.date):
            return self
        if snapshot.is_available(self.hour):
            return self
        return replace(self, hour=None)

    def is_confirmable(self, snapshot: Optional[DaySnapshot]) -> bool:
        if self.provider_id is None or self.date is None or self.hour is None:
            return False
        return self.hour_is_bookable(self.hour, snapshot)


class SelectionStateMachine:
    """Holds the current Selection and applies transitions to it."""

    def __init__(self, initial: Optional[Selection] = None):
        self._state = initial or Selection()

    @property
    def state(self) -> Selection:
        return self._state

    def select_provider(self, provider_id: str) -> Selection:
        self._state = self._state.with_provider(provider_id)
        logger.debug(f"Provider selected: {provider_id}")
        return self._state

    def select_date(self, day: date) -> Selection:
        self._state = self._state.with_date(day)
        logger.debug(f"Date selected: {day.isoformat()}")
        return self._state

    def select_hour(self, hour: int, snapshot: Optional[DaySnapshot]) -> bool:
        """
        Try to select an hour.

        Args:
            hour: Hour picked by the user
            snapshot: Currently applied availability

        Returns:
            True if the hour was accepted, False if rejected (state unchanged)
        """
        candidate = self._state.with_hour(hour, snapshot)
        if candidate is self._state:
            logger.debug(f"Rejected hour {hour}: not bookable for current selection")
            return False
        self._state = candidate
        return True

    def reconcile(self, snapshot: DaySnapshot) -> Selection:
        previous = self._state
        self._state = previous.reconcile(snapshot)
        if self._state is not previous:
            logger.info(f"Cleared hour {previous.hour}: no longer available in {snapshot.key}")
        return self._state

    def clear_hour(self) -> Selection:
        self._state = self._state.without_hour()
        return self._state
