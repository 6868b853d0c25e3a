"""Tests for the Result pattern."""

import pytest

from slotbook.core.exceptions import BookingRejected, BookingUnavailable
from slotbook.core.result import Failure, Success


class TestSuccess:
    """Tests for Success results."""

    def test_accessors(self):
        result = Success(42)
        assert result.is_success() is True
        assert result.is_failure() is False
        assert result.unwrap() == 42

    def test_repr(self):
        assert repr(Success("appt-1")) == "Success('appt-1')"


class TestFailure:
    """Tests for Failure results."""

    def test_accessors(self):
        error = BookingRejected("Slot taken", status=409)
        result = Failure(error)

        assert result.is_success() is False
        assert result.is_failure() is True
        assert result.exception is error
        assert result.error == "Slot taken"
        assert result.kind == "BookingRejected"

    def test_unwrap_raises_carried_exception(self):
        with pytest.raises(BookingUnavailable):
            Failure(BookingUnavailable()).unwrap()

    def test_repr(self):
        assert repr(Failure(BookingUnavailable("down"))) == (
            "Failure(kind='BookingUnavailable', error='down')"
        )
