"""Centralized enum definitions for SlotBook."""

from enum import Enum


class FetchStatus(str, Enum):
    """What happened to an availability response when it arrived."""
    APPLIED = "applied"
    STALE = "stale"
    FAILED = "failed"


class DayPeriod(str, Enum):
    """Display sections of a day's slots."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
