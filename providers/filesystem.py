"""Filesystem-backed provider: one file per chunk inside a root directory."""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Union

from common.constants import DEFAULT_PROVIDER_TYPE
from common.exceptions import BackendReadError, BackendWriteError, ChunkNotFoundError
from common.logging_config import get_logger
from providers.base import StorageProvider

logger = get_logger(__name__)


class FileSystemStorageProvider(StorageProvider):
    """
    Stores each chunk as a file named by its chunk id under root_path.

    Writes go to a temporary file in the same directory and are renamed into
    place, so a reader never observes a partially written chunk.
    """

    def __init__(self, root_path: Union[str, Path], provider_type: str = DEFAULT_PROVIDER_TYPE):
        """
        Initialize the provider and create its root directory.

        Args:
            root_path: Directory that holds the chunk files
            provider_type: Name recorded in the catalog for chunks stored here
        """
        self.root_path = Path(root_path)
        self._provider_type = provider_type
        self.root_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Chunks path for provider '{provider_type}': {self.root_path}")

    @property
    def provider_type(self) -> str:
        return self._provider_type

    def get_chunk_path(self, chunk_id: str) -> Path:
        """
        Get file path for a chunk.

        Args:
            chunk_id: UUID of the chunk

        Returns:
            Path object for chunk file

        Raises:
            ValueError: If chunk_id is not a plain file name
        """
        if not chunk_id or chunk_id in (".", "..") or os.sep in chunk_id or "/" in chunk_id:
            raise ValueError(f"Invalid chunk key: {chunk_id!r}")
        if os.altsep and os.altsep in chunk_id:
            raise ValueError(f"Invalid chunk key: {chunk_id!r}")
        return self.root_path / chunk_id

    def write_chunk(self, chunk_id: str, data: bytes) -> str:
        """
        Write chunk data to disk atomically.

        Args:
            chunk_id: UUID of the chunk
            data: Raw chunk data

        Returns:
            String path to written file

        Raises:
            OSError: If write operation fails
        """
        filepath = self.get_chunk_path(chunk_id)
        self.root_path.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.root_path, prefix=f".{chunk_id}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, filepath)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        return str(filepath)

    def read_chunk(self, chunk_id: str) -> bytes:
        """
        Read entire chunk from disk.

        Raises:
            FileNotFoundError: If chunk does not exist
            OSError: If read operation fails
        """
        return self.get_chunk_path(chunk_id).read_bytes()

    def delete_chunk(self, chunk_id: str) -> bool:
        filepath = self.get_chunk_path(chunk_id)
        if filepath.exists():
            filepath.unlink()
            return True
        return False

    async def put(self, key: str, data: bytes) -> None:
        try:
            path = await asyncio.to_thread(self.write_chunk, key, data)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to save chunk {key} to {self.provider_type}: {e}")
            raise BackendWriteError(f"Failed to write chunk {key} to '{self.provider_type}': {e}") from e
        logger.debug(f"Chunk {key} saved to {self.provider_type} at {path}")

    async def get(self, key: str) -> bytes:
        try:
            data = await asyncio.to_thread(self.read_chunk, key)
        except FileNotFoundError as e:
            logger.error(f"Chunk {key} not found in {self.provider_type} at {self.root_path}")
            raise ChunkNotFoundError(key, self.provider_type) from e
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read chunk {key} from {self.provider_type}: {e}")
            raise BackendReadError(f"Failed to read chunk {key} from '{self.provider_type}': {e}") from e
        logger.debug(f"Chunk {key} read from {self.provider_type} ({len(data)} bytes)")
        return data

    async def delete(self, key: str) -> bool:
        try:
            return await asyncio.to_thread(self.delete_chunk, key)
        except (OSError, ValueError) as e:
            raise BackendWriteError(f"Failed to delete chunk {key} from '{self.provider_type}': {e}") from e

    async def exists(self, key: str) -> bool:
        try:
            return await asyncio.to_thread(self.get_chunk_path(key).exists)
        except ValueError:
            return False
