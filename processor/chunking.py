"""Chunk size policy and the chunker that splits byte streams by it."""

from typing import BinaryIO, Iterator, Optional

from pydantic import BaseModel, ConfigDict, PositiveInt, model_validator

from common.constants import (
    DEFAULT_MAX_CHUNK_SIZE,
    DEFAULT_MAX_SIZE_THRESHOLD,
    DEFAULT_MIN_CHUNK_SIZE,
    DEFAULT_MIN_SIZE_THRESHOLD,
)


class ChunkSizePolicy(BaseModel):
    """
    Maps a file size to the chunk size used to split it.

    Files at or below min_size_threshold use min_chunk_size, files at or above
    max_size_threshold use max_chunk_size. In between the chunk size grows
    linearly with file_size / max_size_threshold and is clamped to the bounds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_size_threshold: PositiveInt = DEFAULT_MIN_SIZE_THRESHOLD
    max_size_threshold: PositiveInt = DEFAULT_MAX_SIZE_THRESHOLD
    min_chunk_size: PositiveInt = DEFAULT_MIN_CHUNK_SIZE
    max_chunk_size: PositiveInt = DEFAULT_MAX_CHUNK_SIZE

    @model_validator(mode="after")
    def _check_bounds(self) -> "ChunkSizePolicy":
        if self.min_chunk_size >= self.max_chunk_size:
            raise ValueError(
                f"min_chunk_size ({self.min_chunk_size}) must be less than "
                f"max_chunk_size ({self.max_chunk_size})"
            )
        if self.min_size_threshold >= self.max_size_threshold:
            raise ValueError(
                f"min_size_threshold ({self.min_size_threshold}) must be less than "
                f"max_size_threshold ({self.max_size_threshold})"
            )
        return self

    def chunk_size_for(self, file_size: int) -> int:
        """
        Compute the chunk size for a file.

        Args:
            file_size: File size in bytes

        Returns:
            Chunk size in bytes, within [min_chunk_size, max_chunk_size]

        Raises:
            ValueError: If file_size is negative
        """
        if file_size < 0:
            raise ValueError(f"file_size must be non-negative, got {file_size}")

        if file_size <= self.min_size_threshold:
            return self.min_chunk_size

        if file_size >= self.max_size_threshold:
            return self.max_chunk_size

        ratio = file_size / self.max_size_threshold
        chunk_size = int(self.min_chunk_size + (self.max_chunk_size - self.min_chunk_size) * ratio)

        return max(self.min_chunk_size, min(self.max_chunk_size, chunk_size))


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read up to size bytes, looping over short reads until EOF."""
    buffer = bytearray()
    while len(buffer) < size:
        piece = stream.read(size - len(buffer))
        if not piece:
            break
        buffer.extend(piece)
    return bytes(buffer)


class Chunker:
    """Splits a byte stream into consecutive chunks sized by a ChunkSizePolicy."""

    def __init__(self, policy: Optional[ChunkSizePolicy] = None):
        self.policy = policy or ChunkSizePolicy()

    def chunk(self, stream: BinaryIO, file_size: int) -> Iterator[bytes]:
        """
        Yield chunks of the stream in order.

        Every chunk has exactly the policy's size for file_size except the
        last, which holds the remainder. Empty input yields nothing.

        Args:
            stream: Readable binary stream positioned at the start of the data
            file_size: Total size of the data, used to pick the chunk size

        Yields:
            Chunk bytes
        """
        chunk_size = self.policy.chunk_size_for(file_size)

        while True:
            data = _read_exact(stream, chunk_size)
            if not data:
                break
            yield data
