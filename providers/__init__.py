"""Storage providers: pluggable key -> bytes stores for chunk data."""

from providers.base import StorageProvider
from providers.filesystem import FileSystemStorageProvider
from providers.registry import ProviderRegistry

__all__ = [
    "StorageProvider",
    "FileSystemStorageProvider",
    "ProviderRegistry",
]
