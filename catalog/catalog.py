"""Metadata catalog: durable record of files and their ordered chunk placements."""

import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from catalog.database import get_db_connection, init_database
from catalog.models import FileRecord
from catalog.repositories.chunk_repository import ChunkRepository
from catalog.repositories.file_repository import FileRepository
from common.constants import RECORD_AUTHOR
from common.exceptions import CatalogError
from common.logging_config import get_logger
from common.utils import utc_now

logger = get_logger(__name__)


class MetadataCatalog(ABC):
    """
    Transactional record store used by the file processor.

    Soft-deleted files and chunks are invisible to every read.
    """

    @abstractmethod
    def add_file(self, record: FileRecord) -> None:
        """Insert a file and all of its chunks atomically."""

    @abstractmethod
    def get_file(self, file_id: str) -> Optional[FileRecord]:
        """Return the file with its chunks ordered by order, or None."""

    @abstractmethod
    def list_files(self) -> List[FileRecord]:
        """Return all visible files without their chunk lists."""

    @abstractmethod
    def soft_delete(self, file_id: str) -> bool:
        """Hide a file and its chunks. Returns False if no visible file matched."""


class SqliteCatalog(MetadataCatalog):
    """MetadataCatalog backed by a SQLite database file."""

    def __init__(self, database_path: Union[str, Path]):
        self.database_path = Path(database_path)
        init_database(self.database_path)
        logger.debug(f"Catalog database ready at {self.database_path}")

    def add_file(self, record: FileRecord) -> None:
        with get_db_connection(self.database_path) as conn:
            try:
                FileRepository.create_file(record, conn)
                ChunkRepository.create_chunks(record.chunks, conn)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                logger.error(f"Failed to commit file {record.file_id}: {e}", exc_info=True)
                raise CatalogError(f"Failed to commit file {record.file_id}: {e}") from e

        logger.info(f"Committed file {record.file_id} with {len(record.chunks)} chunks")

    def get_file(self, file_id: str) -> Optional[FileRecord]:
        try:
            with get_db_connection(self.database_path) as conn:
                record = FileRepository.get_by_id(file_id, conn)
                if record is None:
                    return None
                record.chunks = ChunkRepository.get_chunks_by_file(file_id, conn)
                return record
        except sqlite3.Error as e:
            raise CatalogError(f"Failed to read file {file_id}: {e}") from e

    def list_files(self) -> List[FileRecord]:
        try:
            with get_db_connection(self.database_path) as conn:
                return FileRepository.list_files(conn)
        except sqlite3.Error as e:
            raise CatalogError(f"Failed to list files: {e}") from e

    def soft_delete(self, file_id: str, deleted_by: str = RECORD_AUTHOR) -> bool:
        now = utc_now()
        with get_db_connection(self.database_path) as conn:
            try:
                deleted = FileRepository.soft_delete(file_id, now, deleted_by, conn)
                if deleted:
                    ChunkRepository.soft_delete_by_file(file_id, now, deleted_by, conn)
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise CatalogError(f"Failed to delete file {file_id}: {e}") from e

        if deleted:
            logger.info(f"File deleted successfully [file_id={file_id}]")
        else:
            logger.warning(f"No visible file to delete [file_id={file_id}]")
        return deleted
