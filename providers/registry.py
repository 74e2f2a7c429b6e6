"""Registry of storage providers keyed by provider name."""

from typing import Dict, Iterator, List, Optional

from common.exceptions import ProviderNotFoundError
from common.logging_config import get_logger
from providers.base import StorageProvider

logger = get_logger(__name__)


class ProviderRegistry:
    """
    Ordered mapping from provider name to provider.

    Ingest walks providers by index (registration order); restore looks them
    up by the name stored with each chunk.
    """

    def __init__(self, providers: Optional[List[StorageProvider]] = None):
        self._providers: Dict[str, StorageProvider] = {}
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: StorageProvider) -> None:
        """
        Add a provider at the end of the registration order.

        Raises:
            ValueError: If a provider with the same name is already registered
        """
        name = provider.provider_type
        if name in self._providers:
            raise ValueError(f"Storage provider '{name}' is already registered")
        self._providers[name] = provider
        logger.info(f"Registered storage provider '{name}' ({len(self._providers)} total)")

    def get(self, provider_type: str) -> StorageProvider:
        """
        Look up a provider by name.

        Raises:
            ProviderNotFoundError: If no provider has that name
        """
        provider = self._providers.get(provider_type)
        if provider is None:
            raise ProviderNotFoundError(provider_type)
        return provider

    def by_index(self, index: int) -> StorageProvider:
        """
        Provider for the index-th chunk of a file: index mod provider count.

        Raises:
            ProviderNotFoundError: If the registry is empty
        """
        if not self._providers:
            raise ProviderNotFoundError("<none registered>")
        providers = list(self._providers.values())
        return providers[index % len(providers)]

    def __contains__(self, provider_type: str) -> bool:
        return provider_type in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[StorageProvider]:
        return iter(list(self._providers.values()))
