"""Result pattern for operations whose failures are returned, not raised.

Booking outcomes travel to the presentation layer as ``Success``/``Failure``
values so that every failure arrives already classified.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .exceptions import SlotBookError

T = TypeVar("T")
E = TypeVar("E", bound=SlotBookError)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful result."""

    value: T

    def is_success(self) -> bool:
        """Check if result is successful."""
        return True

    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return False

    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    def __repr__(self) -> str:
        """String representation."""
        return f"Success({self.value!r})"


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed result carrying the classified error."""

    exception: E

    @property
    def error(self) -> str:
        """Human readable error message."""
        return self.exception.message

    @property
    def kind(self) -> str:
        """Failure classification (exception class name)."""
        return type(self.exception).__name__

    def is_success(self) -> bool:
        """Check if result is successful."""
        return False

    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return True

    def unwrap(self) -> Any:
        """
        Attempt to get value.

        Raises:
            The carried exception, always
        """
        raise self.exception

    def __repr__(self) -> str:
        """String representation."""
        return f"Failure(kind={self.kind!r}, error={self.error!r})"
