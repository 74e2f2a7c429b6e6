"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Union


def init_database(database_path: Union[str, Path]) -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    Path(database_path).parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection(database_path) as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS file_metadata (
                id TEXT PRIMARY KEY,
                file_name TEXT NOT NULL,
                file_path TEXT NOT NULL,
                file_size INTEGER NOT NULL,
                checksum TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                created_by TEXT NOT NULL,
                updated_by TEXT NOT NULL,
                is_deleted INTEGER NOT NULL DEFAULT 0
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS chunk_metadata (
                id TEXT PRIMARY KEY,
                file_metadata_id TEXT NOT NULL,
                chunk_size INTEGER NOT NULL,
                "order" INTEGER NOT NULL,
                storage_provider_type TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                created_by TEXT NOT NULL,
                updated_by TEXT NOT NULL,
                is_deleted INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY(file_metadata_id) REFERENCES file_metadata(id) ON DELETE CASCADE
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_chunk_metadata_file_id ON chunk_metadata(file_metadata_id)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_file_metadata_created_at ON file_metadata(created_at)
        """)

        conn.commit()


@contextmanager
def get_db_connection(database_path: Union[str, Path]) -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = sqlite3.connect(str(database_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()
