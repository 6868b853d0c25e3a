"""Tests for the time-slot model (partition and hour labels)."""

from datetime import date

import pytest

from slotbook.core.enums import DayPeriod
from slotbook.core.exceptions import InvalidSlot
from slotbook.services.booking.time_slots import (
    AvailabilityKey,
    AvailabilitySlot,
    DaySnapshot,
    FormattedSlot,
    find_slot,
    format_hour,
    is_available,
    partition,
)


def _slots(*pairs):
    return [AvailabilitySlot(hour=hour, available=available) for hour, available in pairs]


class TestFormatHour:
    """Test hour label rendering."""

    @pytest.mark.parametrize(
        "hour, label", [(0, "00:00"), (9, "09:00"), (12, "12:00"), (13, "13:00"), (23, "23:00")]
    )
    def test_labels(self, hour, label):
        assert format_hour(hour) == label

    @pytest.mark.parametrize("hour", [-1, 24, 100])
    def test_out_of_range_fails_fast(self, hour):
        with pytest.raises(InvalidSlot) as exc_info:
            format_hour(hour)
        assert exc_info.value.hour == hour
        assert exc_info.value.recoverable is False

    def test_bool_is_not_an_hour(self):
        with pytest.raises(InvalidSlot):
            format_hour(True)


class TestAvailabilitySlot:
    """Test slot construction."""

    def test_valid_slot(self):
        slot = AvailabilitySlot(hour=8, available=True)
        assert slot.hour == 8
        assert slot.available is True

    @pytest.mark.parametrize("hour", [-1, 24, "9", None])
    def test_invalid_hour_rejected(self, hour):
        with pytest.raises(InvalidSlot):
            AvailabilitySlot(hour=hour, available=True)


class TestPartition:
    """Test morning/afternoon split."""

    def test_reference_day(self):
        """Slots 08 free, 09 taken, 14 free split as shown on the booking screen."""
        result = partition(_slots((8, True), (9, False), (14, True)))

        assert result.morning == (
            FormattedSlot(hour=8, label="08:00", available=True),
            FormattedSlot(hour=9, label="09:00", available=False),
        )
        assert result.afternoon == (FormattedSlot(hour=14, label="14:00", available=True),)

    def test_noon_belongs_to_afternoon(self):
        result = partition(_slots((11, True), (12, True)))
        assert [s.hour for s in result.morning] == [11]
        assert [s.hour for s in result.afternoon] == [12]

    def test_every_slot_lands_in_exactly_one_section(self):
        slots = _slots(*[(hour, hour % 3 == 0) for hour in range(24)])
        result = partition(slots)

        assert len(result.morning) + len(result.afternoon) == len(slots)
        assert len(result) == 24
        morning_hours = {s.hour for s in result.morning}
        afternoon_hours = {s.hour for s in result.afternoon}
        assert morning_hours.isdisjoint(afternoon_hours)
        assert morning_hours | afternoon_hours == set(range(24))

    def test_input_order_is_preserved(self):
        """Out-of-order input is displayed as received, not re-sorted."""
        result = partition(_slots((10, True), (8, True), (15, False), (13, True)))
        assert [s.hour for s in result.morning] == [10, 8]
        assert [s.hour for s in result.afternoon] == [15, 13]

    def test_empty_input(self):
        result = partition([])
        assert result.morning == ()
        assert result.afternoon == ()

    def test_period(self):
        result = partition(_slots((7, True), (19, True)))
        assert result.morning[0].period is DayPeriod.MORNING
        assert result.afternoon[0].period is DayPeriod.AFTERNOON


class TestLookups:
    """Test slot lookup helpers."""

    def test_find_slot(self):
        slots = _slots((8, True), (9, False))
        assert find_slot(slots, 9) == AvailabilitySlot(hour=9, available=False)
        assert find_slot(slots, 10) is None

    def test_is_available(self):
        slots = _slots((8, True), (9, False))
        assert is_available(slots, 8) is True
        assert is_available(slots, 9) is False
        assert is_available(slots, 10) is False

    def test_snapshot_matches_key(self):
        day = date(2024, 3, 10)
        snapshot = DaySnapshot(key=AvailabilityKey("P1", day), slots=tuple(_slots((8, True))))

        assert snapshot.matches("P1", day)
        assert not snapshot.matches("P2", day)
        assert not snapshot.matches("P1", date(2024, 3, 11))
        assert snapshot.is_available(8)
        assert str(snapshot.key) == "P1@2024-03-10"
