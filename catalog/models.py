"""Catalog record types: a file and its ordered chunk placements."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass
class ChunkRecord:
    """
    Placement of one contiguous byte range of a file.

    chunk_id doubles as the key under which the provider stores the bytes.
    order is 1-based and contiguous per file.
    """
    chunk_id: str
    file_id: str
    chunk_size: int
    order: int
    provider_type: str
    created_at: datetime
    updated_at: datetime
    created_by: str
    updated_by: str
    is_deleted: bool = False


@dataclass
class FileRecord:
    """
    An ingested file. chunks is ordered by ChunkRecord.order.
    """
    file_id: str
    file_name: str
    file_path: str
    file_size: int
    checksum: str
    created_at: datetime
    updated_at: datetime
    created_by: str
    updated_by: str
    is_deleted: bool = False
    chunks: List[ChunkRecord] = field(default_factory=list)

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    def ordered_chunks(self) -> List[ChunkRecord]:
        """Chunks sorted by order, independent of how they were loaded."""
        return sorted(self.chunks, key=lambda c: c.order)
