"""Chunking, distribution and restore of files."""

from processor.chunking import Chunker, ChunkSizePolicy
from processor.file_processor import FileProcessor
from processor.types import IntegrityReport, RestoreResult

__all__ = [
    "Chunker",
    "ChunkSizePolicy",
    "FileProcessor",
    "IntegrityReport",
    "RestoreResult",
]
