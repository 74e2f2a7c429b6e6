"""Chunk repository for database operations."""

import sqlite3
from datetime import datetime
from typing import List

from catalog.models import ChunkRecord
from common.logging_config import get_logger

logger = get_logger(__name__)


class ChunkRepository:
    @staticmethod
    def create_chunks(chunks: List[ChunkRecord], conn: sqlite3.Connection) -> None:
        if not chunks:
            return

        logger.debug(f"Creating {len(chunks)} chunks for file_id={chunks[0].file_id}")
        cursor = conn.cursor()
        cursor.executemany(
            """
            INSERT INTO chunk_metadata (
                id, file_metadata_id, chunk_size, "order", storage_provider_type,
                created_at, updated_at, created_by, updated_by, is_deleted
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    chunk.chunk_id,
                    chunk.file_id,
                    chunk.chunk_size,
                    chunk.order,
                    chunk.provider_type,
                    chunk.created_at.isoformat(),
                    chunk.updated_at.isoformat(),
                    chunk.created_by,
                    chunk.updated_by,
                    int(chunk.is_deleted),
                )
                for chunk in chunks
            ]
        )

    @staticmethod
    def get_chunks_by_file(file_id: str, conn: sqlite3.Connection) -> List[ChunkRecord]:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT id, file_metadata_id, chunk_size, "order", storage_provider_type,
                   created_at, updated_at, created_by, updated_by, is_deleted
            FROM chunk_metadata
            WHERE file_metadata_id = ? AND is_deleted = 0
            ORDER BY "order"
            """,
            (file_id,)
        )
        rows = cursor.fetchall()

        return [
            ChunkRecord(
                chunk_id=row["id"],
                file_id=row["file_metadata_id"],
                chunk_size=row["chunk_size"],
                order=row["order"],
                provider_type=row["storage_provider_type"],
                created_at=datetime.fromisoformat(row["created_at"]),
                updated_at=datetime.fromisoformat(row["updated_at"]),
                created_by=row["created_by"],
                updated_by=row["updated_by"],
                is_deleted=bool(row["is_deleted"]),
            )
            for row in rows
        ]

    @staticmethod
    def soft_delete_by_file(file_id: str, updated_at: datetime, updated_by: str, conn: sqlite3.Connection) -> int:
        cursor = conn.cursor()
        cursor.execute(
            """
            UPDATE chunk_metadata
            SET is_deleted = 1, updated_at = ?, updated_by = ?
            WHERE file_metadata_id = ? AND is_deleted = 0
            """,
            (updated_at.isoformat(), updated_by, file_id)
        )
        logger.debug(f"Marked {cursor.rowcount} chunks deleted [file_id={file_id}]")
        return cursor.rowcount
