"""Custom exception classes shared by the catalog, providers and processor."""

from typing import Optional


class ChunkVaultError(Exception):
    """
    Base exception class for all chunkvault errors.
    """
    pass


class NotFoundError(ChunkVaultError):
    """
    Base class for anything that was looked up and is missing.
    """
    pass


class SourceFileNotFoundError(NotFoundError):
    """
    Raised when a file or directory to ingest does not exist or cannot be read.
    """
    pass


class FileRecordNotFoundError(NotFoundError):
    """
    Raised when the catalog has no (visible) record for a file id.
    """
    pass


class ChunkNotFoundError(NotFoundError):
    """
    Raised when a storage provider holds no bytes for a chunk key.
    """

    def __init__(self, chunk_id: str, provider_type: Optional[str] = None):
        self.chunk_id = chunk_id
        self.provider_type = provider_type
        where = f" in provider '{provider_type}'" if provider_type else ""
        super().__init__(f"Chunk {chunk_id} not found{where}")


class ProviderNotFoundError(NotFoundError):
    """
    Raised when no storage provider is registered under a name.
    """

    def __init__(self, provider_type: str, chunk_id: Optional[str] = None):
        self.provider_type = provider_type
        self.chunk_id = chunk_id
        message = f"Storage provider '{provider_type}' is not registered"
        if chunk_id:
            message += f" (required for chunk {chunk_id})"
        super().__init__(message)


class IntegrityMismatchError(ChunkVaultError):
    """
    Raised when a restored file does not hash to the checksum recorded at ingest.
    """

    def __init__(self, file_id: str, expected: str, actual: str):
        self.file_id = file_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checksum mismatch for file {file_id}: expected {expected}, got {actual}"
        )


class BackendError(ChunkVaultError):
    """
    Base class for I/O failures reported by a storage provider.
    """
    pass


class BackendWriteError(BackendError):
    """
    Raised when a storage provider fails to persist a chunk.
    """
    pass


class BackendReadError(BackendError):
    """
    Raised when a storage provider fails to read an existing chunk.
    """
    pass


class RestoreOutputError(ChunkVaultError):
    """
    Raised when a restored file cannot be written to its output directory.
    """
    pass


class EmptyInputError(ChunkVaultError):
    """
    Raised when chunking produced nothing for non-empty input, or a folder has no files.
    """
    pass


class CatalogError(ChunkVaultError):
    """
    Raised when the metadata catalog cannot commit or read records.
    """
    pass


class ConfigurationError(ChunkVaultError):
    """
    Raised when configuration values are missing or inconsistent.
    """
    pass
