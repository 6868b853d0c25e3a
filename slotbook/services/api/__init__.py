"""Backend API client - aiohttp implementation of the booking service contracts."""

from .appointments import AppointmentEndpoints
from .client import BackendApiClient
from .models import AppointmentPayload, AvailabilityPayload, ProviderPayload
from .providers import ProviderEndpoints

__all__ = [
    "BackendApiClient",
    "ProviderEndpoints",
    "AppointmentEndpoints",
    "ProviderPayload",
    "AvailabilityPayload",
    "AppointmentPayload",
]
