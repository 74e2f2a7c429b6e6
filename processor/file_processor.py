"""File processor: ingest files as distributed chunks and restore them with verification."""

import asyncio
from pathlib import Path
from typing import List, Optional, Tuple, Union

from catalog.catalog import MetadataCatalog
from catalog.models import ChunkRecord, FileRecord
from common.checksum_validator import (
    IncrementalChecksumCalculator,
    checksums_match,
    compute_file_checksum,
)
from common.constants import DEFAULT_MAX_CONCURRENCY, RECORD_AUTHOR, RESTORED_FILE_PREFIX
from common.exceptions import (
    ChunkVaultError,
    EmptyInputError,
    FileRecordNotFoundError,
    IntegrityMismatchError,
    NotFoundError,
    ProviderNotFoundError,
    RestoreOutputError,
    SourceFileNotFoundError,
)
from common.logging_config import get_logger
from common.utils import generate_uuid, utc_now
from processor.chunking import Chunker
from processor.types import IntegrityReport, RestoreResult
from providers.base import StorageProvider
from providers.registry import ProviderRegistry

logger = get_logger(__name__)


class FileProcessor:
    def __init__(
        self,
        catalog: MetadataCatalog,
        registry: ProviderRegistry,
        chunker: Optional[Chunker] = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self.catalog = catalog
        self.registry = registry
        self.chunker = chunker or Chunker()
        self.max_concurrency = max_concurrency

    async def ingest(self, file_path: Union[str, Path]) -> str:
        """
        Split a file into chunks, store them round-robin across providers and
        commit the file record.

        Chunks are read lazily and handed to the providers as they are
        produced, so at most max_concurrency chunks are held in memory.

        Args:
            file_path: File to ingest

        Returns:
            New file id

        Raises:
            SourceFileNotFoundError: If the file does not exist or cannot be read
            EmptyInputError: If a non-empty file produced no chunks
            IntegrityMismatchError: If the file changed while it was being chunked
            ProviderNotFoundError: If chunks exist but no provider is registered
            BackendError: If a provider fails to store a chunk
            CatalogError: If the catalog commit fails
        """
        path = Path(file_path)
        if not path.is_file():
            logger.error(f"File not found: {path}")
            raise SourceFileNotFoundError(f"File not found: {path}")

        logger.info(f"Starting to process file: {path.name}")

        try:
            checksum, file_size = compute_file_checksum(path)
        except OSError as e:
            logger.error(f"Cannot read file {path}: {e}")
            raise SourceFileNotFoundError(f"Cannot read file {path}: {e}") from e

        file_id = generate_uuid()
        now = utc_now()

        record = FileRecord(
            file_id=file_id,
            file_name=path.name,
            file_path=str(path),
            file_size=file_size,
            checksum=checksum,
            created_at=now,
            updated_at=now,
            created_by=RECORD_AUTHOR,
            updated_by=RECORD_AUTHOR,
        )

        placements, written = await self._store_chunks(path, file_id, file_size, checksum)

        record.chunks = [
            ChunkRecord(
                chunk_id=chunk_id,
                file_id=file_id,
                chunk_size=chunk_size,
                order=index + 1,
                provider_type=provider.provider_type,
                created_at=now,
                updated_at=now,
                created_by=RECORD_AUTHOR,
                updated_by=RECORD_AUTHOR,
            )
            for index, (provider, chunk_id, chunk_size) in enumerate(placements)
        ]

        try:
            self.catalog.add_file(record)
        except ChunkVaultError:
            logger.error(f"Catalog commit failed for file {file_id}, removing its chunks")
            await self._cleanup_chunks(written)
            raise

        logger.info(
            f"Successfully processed and stored {len(record.chunks)} chunks "
            f"for file: {path.name} [file_id={file_id}]"
        )
        return file_id

    async def _store_chunks(
        self,
        path: Path,
        file_id: str,
        file_size: int,
        checksum: str,
    ) -> Tuple[List[Tuple[StorageProvider, str, int]], List[Tuple[StorageProvider, str]]]:
        """
        Chunk the file and write every chunk to its round-robin provider.

        The provider and order of a chunk are fixed by its index when it is
        read. A chunk is only read once a write slot is free. On any failure,
        including the chunked bytes no longer matching checksum, the chunks
        already written are deleted and the first failure is raised.

        Returns:
            (placements, written): (provider, chunk_id, size) per chunk in order,
            and the (provider, chunk_id) pairs that were stored
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)
        calculator = IncrementalChecksumCalculator()
        placements: List[Tuple[StorageProvider, str, int]] = []
        written: List[Tuple[StorageProvider, str]] = []
        tasks: List[asyncio.Task] = []

        async def write_one(order: int, provider: StorageProvider, chunk_id: str, data: bytes) -> None:
            try:
                await provider.put(chunk_id, data)
                written.append((provider, chunk_id))
                logger.debug(
                    f"Wrote chunk {order} ({len(data)} bytes) to "
                    f"'{provider.provider_type}' for file {file_id}"
                )
            finally:
                semaphore.release()

        def write_failed() -> bool:
            return any(t.done() and t.exception() is not None for t in tasks)

        error = None
        read_error = None
        try:
            with open(path, 'rb') as stream:
                for index, data in enumerate(self.chunker.chunk(stream, file_size)):
                    calculator.update(data)
                    provider = self.registry.by_index(index)
                    chunk_id = generate_uuid()
                    placements.append((provider, chunk_id, len(data)))

                    await semaphore.acquire()
                    if write_failed():
                        semaphore.release()
                        break
                    tasks.append(asyncio.create_task(write_one(index + 1, provider, chunk_id, data)))
        except OSError as e:
            logger.error(f"Cannot read file {path}: {e}")
            read_error = e
        except ChunkVaultError as e:
            error = e

        results = await asyncio.gather(*tasks, return_exceptions=True)
        failures = [r for r in results if isinstance(r, BaseException)]

        if read_error is not None:
            await self._cleanup_chunks(written)
            raise SourceFileNotFoundError(f"Cannot read file {path}: {read_error}") from read_error

        if error is None and failures:
            error = failures[0]
            logger.error(f"Upload failed for file {file_id}: {error}")

        if error is None and not placements and file_size > 0:
            logger.error(f"Chunking produced no chunks for non-empty file {path.name}")
            error = EmptyInputError(f"No chunks produced for {path} ({file_size} bytes)")

        if error is None:
            actual = calculator.finalize()
            if not checksums_match(actual, checksum):
                logger.error(f"File {path} changed while it was being processed")
                error = IntegrityMismatchError(file_id, checksum, actual)

        if error is not None:
            await self._cleanup_chunks(written)
            raise error

        return placements, written

    async def _cleanup_chunks(self, written: List[Tuple[StorageProvider, str]]) -> List[str]:
        """
        Delete chunks left behind by an aborted ingest.

        Returns:
            Chunk ids that could not be deleted
        """
        if not written:
            return []

        logger.info(f"Cleaning up {len(written)} orphaned chunks")
        failed = []
        for provider, chunk_id in written:
            try:
                await provider.delete(chunk_id)
            except ChunkVaultError as e:
                logger.error(f"Failed to delete orphaned chunk {chunk_id} from '{provider.provider_type}': {e}")
                failed.append(chunk_id)
        return failed

    async def ingest_folder(self, dir_path: Union[str, Path]) -> List[str]:
        """
        Ingest every regular file directly inside a directory.

        Files are processed in name order. A failing file is logged and left
        out of the result; it does not stop the others.

        Args:
            dir_path: Directory to ingest (not recursive)

        Returns:
            File ids of the files that were ingested

        Raises:
            SourceFileNotFoundError: If dir_path is not a directory
        """
        folder = Path(dir_path)
        if not folder.is_dir():
            logger.error(f"Directory not found: {folder}")
            raise SourceFileNotFoundError(f"Directory not found: {folder}")

        files = sorted((p for p in folder.iterdir() if p.is_file()), key=lambda p: p.name)

        if not files:
            logger.warning(f"No files found in folder: {folder}")
            return []

        file_ids = []
        for file in files:
            try:
                file_ids.append(await self.ingest(file))
            except (ChunkVaultError, OSError) as e:
                logger.error(f"Error processing file: {file}: {e}", exc_info=True)

        logger.info(f"Processed {len(file_ids)}/{len(files)} files from {folder}")
        return file_ids

    def _resolve_provider(self, chunk: ChunkRecord) -> StorageProvider:
        if chunk.provider_type not in self.registry:
            raise ProviderNotFoundError(chunk.provider_type, chunk.chunk_id)
        return self.registry.get(chunk.provider_type)

    async def restore(self, file_id: str, output_dir: Union[str, Path], strict: bool = False) -> RestoreResult:
        """
        Reassemble a file from its chunks and verify its checksum.

        The output is written to output_dir/Restored_<file_name>, replacing
        any earlier restore. If a chunk cannot be fetched the partial output
        is deleted. A checksum mismatch keeps the output and reports
        verified=False, unless strict is set.

        Args:
            file_id: Id returned by ingest
            output_dir: Directory for the restored file, created if missing
            strict: Delete the output and raise on checksum mismatch

        Returns:
            RestoreResult with the output path and verification outcome

        Raises:
            FileRecordNotFoundError: If the catalog has no such file
            ProviderNotFoundError: If a chunk's provider is not registered
            ChunkNotFoundError: If a provider no longer holds a chunk
            BackendReadError: If a provider fails to read a chunk
            RestoreOutputError: If the output directory or file cannot be written
            IntegrityMismatchError: On checksum mismatch when strict is set
        """
        record = self.catalog.get_file(file_id)
        if record is None:
            logger.error(f"File with ID {file_id} not found in metadata.")
            raise FileRecordNotFoundError(f"File {file_id} not found")

        logger.info(f"Starting to restore file: {record.file_name} [file_id={file_id}]")

        out_dir = Path(output_dir)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create output directory {out_dir}: {e}")
            raise RestoreOutputError(f"Cannot create output directory {out_dir}: {e}") from e
        output_path = out_dir / f"{RESTORED_FILE_PREFIX}{record.file_name}"

        chunks = record.ordered_chunks()
        completed = False
        try:
            with open(output_path, 'wb') as out:
                for chunk in chunks:
                    try:
                        provider = self._resolve_provider(chunk)
                    except ProviderNotFoundError:
                        logger.error(
                            f"Storage provider {chunk.provider_type} not found for chunk {chunk.chunk_id}"
                        )
                        raise
                    data = await provider.get(chunk.chunk_id)
                    out.write(data)
                    logger.debug(f"Restored chunk {chunk.order}/{len(chunks)} of file {file_id}")
            completed = True
        except OSError as e:
            logger.error(f"Cannot write restored file {output_path}: {e}")
            raise RestoreOutputError(f"Cannot write restored file {output_path}: {e}") from e
        finally:
            if not completed:
                self._discard_output(output_path)

        logger.info(f"File restored at: {output_path}")

        try:
            actual, _ = compute_file_checksum(output_path)
        except OSError as e:
            raise RestoreOutputError(f"Cannot read back restored file {output_path}: {e}") from e
        verified = checksums_match(actual, record.checksum)

        if verified:
            logger.info(f"Checksum VERIFIED. File integrity is confirmed [file_id={file_id}]")
        else:
            logger.error(
                f"Checksum MISMATCH for file {file_id}. "
                f"Original: {record.checksum}, restored: {actual}"
            )
            if strict:
                self._discard_output(output_path)
                raise IntegrityMismatchError(file_id, record.checksum, actual)

        return RestoreResult(
            file_id=file_id,
            output_path=output_path,
            expected_checksum=record.checksum,
            actual_checksum=actual,
            verified=verified,
        )

    @staticmethod
    def _discard_output(output_path: Path) -> None:
        """Remove a restored file; never raises, so the original failure propagates."""
        try:
            output_path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            logger.warning(f"Could not remove incomplete output {output_path}: {e}")
            return
        logger.info(f"Removed incomplete output {output_path}")

    async def verify(self, file_id: str) -> IntegrityReport:
        """
        Check that a file's chunks are all retrievable and hash to its checksum,
        without writing anything to disk.

        Missing providers and missing chunks are reported, not raised.

        Raises:
            FileRecordNotFoundError: If the catalog has no such file
            BackendReadError: If a provider fails to read an existing chunk
        """
        record = self.get_file_metadata(file_id)

        calculator = IncrementalChecksumCalculator()
        missing = []
        for chunk in record.ordered_chunks():
            try:
                data = await self._resolve_provider(chunk).get(chunk.chunk_id)
            except NotFoundError as e:
                logger.warning(f"Chunk {chunk.order} of file {file_id} unavailable: {e}")
                missing.append(chunk.chunk_id)
                continue
            calculator.update(data)

        if missing:
            actual = None
            verified = False
        else:
            actual = calculator.finalize()
            verified = checksums_match(actual, record.checksum)

        if verified:
            logger.info(f"File {file_id} verified: {len(record.chunks)} chunks intact")
        else:
            logger.error(
                f"File {file_id} failed verification: "
                f"{len(missing)} missing chunks, checksum {actual or 'n/a'} vs {record.checksum}"
            )

        return IntegrityReport(
            file_id=file_id,
            expected_checksum=record.checksum,
            actual_checksum=actual,
            verified=verified,
            missing_chunks=missing,
        )

    def get_all_files(self) -> List[FileRecord]:
        return self.catalog.list_files()

    def get_file_metadata(self, file_id: str) -> FileRecord:
        record = self.catalog.get_file(file_id)
        if record is None:
            raise FileRecordNotFoundError(f"File {file_id} not found")
        return record

    def delete_file(self, file_id: str) -> bool:
        """
        Soft delete a file in the catalog. Chunk bytes stay with their providers.

        Raises:
            FileRecordNotFoundError: If the catalog has no such file
        """
        if not self.catalog.soft_delete(file_id):
            raise FileRecordNotFoundError(f"File {file_id} not found")
        return True
