"""Provides SHA-256 checksum calculation and verification helpers."""

import hashlib
from pathlib import Path
from typing import BinaryIO, Tuple, Union

from common.constants import READ_BUFFER_SIZE


def compute_checksum(data: bytes) -> str:
    """
    Compute SHA-256 checksum for given data.

    Args:
        data: Bytes to compute checksum for

    Returns:
        Lower-case hexadecimal string representation of SHA-256 hash
    """
    return hashlib.sha256(data).hexdigest()


def verify_checksum(data: bytes, expected: str) -> bool:
    """
    Verify that data matches expected checksum.

    Args:
        data: Bytes to verify
        expected: Expected SHA-256 checksum (hex string, any case)

    Returns:
        True if checksum matches, False otherwise
    """
    return checksums_match(compute_checksum(data), expected)


def checksums_match(actual: str, expected: str) -> bool:
    """Compare two hex digests ignoring case."""
    return actual.lower() == expected.lower()


def compute_stream_checksum(stream: BinaryIO, piece_size: int = READ_BUFFER_SIZE) -> Tuple[str, int]:
    """
    Hash a binary stream from its current position to EOF.

    Args:
        stream: Readable binary stream
        piece_size: Bytes read per iteration

    Returns:
        Tuple of (hex digest, number of bytes consumed)
    """
    calculator = IncrementalChecksumCalculator()
    total = 0
    while True:
        piece = stream.read(piece_size)
        if not piece:
            break
        calculator.update(piece)
        total += len(piece)
    return calculator.finalize(), total


def compute_file_checksum(path: Union[str, Path]) -> Tuple[str, int]:
    """
    Hash a file on disk without loading it into memory.

    Args:
        path: File to hash

    Returns:
        Tuple of (hex digest, file size in bytes)

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(path, 'rb') as f:
        return compute_stream_checksum(f)


class IncrementalChecksumCalculator:
    """
    Calculate SHA-256 checksum incrementally for streaming data.

    Usage:
        calculator = IncrementalChecksumCalculator()
        calculator.update(chunk1)
        calculator.update(chunk2)
        final_checksum = calculator.finalize()
    """

    def __init__(self):
        """Initialize a new incremental checksum calculator."""
        self._hasher = hashlib.sha256()
        self._finalized = False

    def update(self, data: bytes) -> None:
        """
        Update checksum with new data.

        Args:
            data: Bytes to add to checksum calculation
        """
        if self._finalized:
            raise ValueError("Cannot update after finalization")
        self._hasher.update(data)

    def finalize(self) -> str:
        """
        Finalize checksum calculation and return result.

        Returns:
            Hexadecimal string representation of SHA-256 hash
        """
        self._finalized = True
        return self._hasher.hexdigest()
