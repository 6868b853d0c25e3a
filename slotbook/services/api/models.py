"""Backend API models - wire payload TypedDicts."""

from typing import Optional, TypedDict


class ProviderPayload(TypedDict):
    """Type definition for an entry of ``GET /providers``."""

    id: str
    name: str
    avatar_url: Optional[str]


class AvailabilityPayload(TypedDict):
    """Type definition for an entry of ``GET /providers/{id}/day-availability``."""

    hour: int
    available: bool


class AppointmentPayload(TypedDict, total=False):
    """Type definition for the ``POST /appointments`` response."""

    id: str
    provider_id: str
    date: str
