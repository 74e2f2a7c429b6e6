"""File repository for database operations."""

import sqlite3
from datetime import datetime
from typing import List, Optional

from catalog.models import FileRecord
from common.logging_config import get_logger

logger = get_logger(__name__)

_FILE_COLUMNS = (
    "id, file_name, file_path, file_size, checksum, "
    "created_at, updated_at, created_by, updated_by, is_deleted"
)


def _row_to_file(row: sqlite3.Row) -> FileRecord:
    return FileRecord(
        file_id=row["id"],
        file_name=row["file_name"],
        file_path=row["file_path"],
        file_size=row["file_size"],
        checksum=row["checksum"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
        created_by=row["created_by"],
        updated_by=row["updated_by"],
        is_deleted=bool(row["is_deleted"]),
    )


class FileRepository:
    @staticmethod
    def create_file(record: FileRecord, conn: sqlite3.Connection) -> None:
        cursor = conn.cursor()
        cursor.execute(
            f"""
            INSERT INTO file_metadata ({_FILE_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record.file_id,
                record.file_name,
                record.file_path,
                record.file_size,
                record.checksum,
                record.created_at.isoformat(),
                record.updated_at.isoformat(),
                record.created_by,
                record.updated_by,
                int(record.is_deleted),
            )
        )

    @staticmethod
    def get_by_id(file_id: str, conn: sqlite3.Connection) -> Optional[FileRecord]:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {_FILE_COLUMNS} FROM file_metadata WHERE id = ? AND is_deleted = 0",
            (file_id,)
        )
        row = cursor.fetchone()

        if row is None:
            return None

        return _row_to_file(row)

    @staticmethod
    def list_files(conn: sqlite3.Connection) -> List[FileRecord]:
        cursor = conn.cursor()
        cursor.execute(
            f"""
            SELECT {_FILE_COLUMNS}
            FROM file_metadata
            WHERE is_deleted = 0
            ORDER BY created_at DESC, file_name
            """
        )
        return [_row_to_file(row) for row in cursor.fetchall()]

    @staticmethod
    def soft_delete(file_id: str, updated_at: datetime, updated_by: str, conn: sqlite3.Connection) -> bool:
        """
        Soft delete a file by setting is_deleted=1.

        Returns:
            True if a visible file was marked deleted
        """
        logger.debug(f"Deleting file [file_id={file_id}]")
        cursor = conn.cursor()
        cursor.execute(
            """
            UPDATE file_metadata
            SET is_deleted = 1, updated_at = ?, updated_by = ?
            WHERE id = ? AND is_deleted = 0
            """,
            (updated_at.isoformat(), updated_by, file_id)
        )
        return cursor.rowcount > 0
