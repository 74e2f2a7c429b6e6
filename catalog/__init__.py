"""Metadata catalog: file and chunk records persisted in SQLite."""

from catalog.catalog import MetadataCatalog, SqliteCatalog
from catalog.models import ChunkRecord, FileRecord

__all__ = [
    "MetadataCatalog",
    "SqliteCatalog",
    "ChunkRecord",
    "FileRecord",
]
