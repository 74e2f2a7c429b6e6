"""Repository layer for data access."""

from catalog.repositories.file_repository import FileRepository
from catalog.repositories.chunk_repository import ChunkRepository

__all__ = [
    "FileRepository",
    "ChunkRepository",
]
