"""Provider directory - loads the provider list once per session."""

import asyncio
from typing import Optional, Tuple

from loguru import logger

from .models import Provider
from .protocols import DirectoryService


class ProviderDirectory:
    """Session-scoped cache of the provider list."""

    def __init__(self, service: DirectoryService):
        """
        Initialize provider directory.

        Args:
            service: Backing directory service
        """
        self._service = service
        self._providers: Optional[Tuple[Provider, ...]] = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._providers is not None

    @property
    def providers(self) -> Tuple[Provider, ...]:
        """Loaded providers, empty before the first successful load."""
        return self._providers or ()

    async def load(self) -> Tuple[Provider, ...]:
        """
        Load providers, hitting the backing service only on the first call.

        Concurrent callers wait for the same in-flight load.

        Returns:
            Providers in the order the service returned them

        Raises:
            DirectoryUnavailable: If the backing service cannot be reached
        """
        if self._providers is not None:
            return self._providers

        async with self._lock:
            if self._providers is None:
                providers = tuple(await self._service.list_providers())
                self._providers = providers
                logger.info(f"Loaded {len(providers)} providers")
            return self._providers

    def invalidate(self) -> None:
        """Forget the cached list; the next load() re-fetches."""
        if self._providers is not None:
            logger.debug("Provider directory invalidated")
        self._providers = None

    def get(self, provider_id: str) -> Optional[Provider]:
        """Look up a loaded provider by id."""
        for provider in self.providers:
            if provider.id == provider_id:
                return provider
        return None
