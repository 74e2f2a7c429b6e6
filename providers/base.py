"""Abstract interface every storage provider implements."""

from abc import ABC, abstractmethod


class StorageProvider(ABC):
    """
    Durable key -> bytes store for chunk data.

    Keys are opaque strings chosen by the caller (chunk ids). A successful
    put must survive process restart and a later get with the same key must
    return byte-identical content.
    """

    @property
    @abstractmethod
    def provider_type(self) -> str:
        """Stable name recorded in the catalog for every chunk this provider holds."""

    @abstractmethod
    async def put(self, key: str, data: bytes) -> None:
        """
        Persist data under key, replacing any previous value.

        Raises:
            BackendWriteError: If the bytes could not be persisted
        """

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """
        Return the bytes stored under key.

        Raises:
            ChunkNotFoundError: If nothing is stored under key
            BackendReadError: If the bytes exist but could not be read
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove the bytes stored under key.

        Returns:
            True if something was deleted, False if the key was unknown
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return True if bytes are stored under key."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider_type={self.provider_type!r})"
