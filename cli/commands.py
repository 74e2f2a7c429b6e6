"""Command handler functions for CLI operations."""

import asyncio
import time
from pathlib import Path
from typing import Optional

from catalog.catalog import SqliteCatalog
from cli.config import DEFAULT_CONFIG_PATH, Config
from cli.constants import GREEN, RED, RESET, SEPARATOR_WIDTH, YELLOW
from cli.models import (
    DeleteCommand,
    IngestCommand,
    IngestFolderCommand,
    ListCommand,
    RestoreCommand,
    ShowCommand,
    VerifyCommand,
)
from cli.utils import format_elapsed, format_file_size, format_timestamp, truncate_string
from common.logging_config import get_logger
from processor.chunking import Chunker
from processor.file_processor import FileProcessor
from providers.filesystem import FileSystemStorageProvider
from providers.registry import ProviderRegistry

logger = get_logger(__name__)


_config: Optional[Config] = None
_processor: Optional[FileProcessor] = None


def get_config() -> Config:
    """
    Get or create global Config instance.

    Returns:
        Config loaded from ~/.chunkvault/config.json
    """
    global _config
    if _config is None:
        _config = Config(DEFAULT_CONFIG_PATH)
    return _config


def build_processor(config: Config) -> FileProcessor:
    """
    Wire catalog, providers and chunker from configuration.

    Args:
        config: Loaded CLI configuration

    Returns:
        FileProcessor ready to use
    """
    registry = ProviderRegistry()
    for entry in config.get_providers():
        registry.register(FileSystemStorageProvider(entry['root'], provider_type=entry['name']))

    return FileProcessor(
        catalog=SqliteCatalog(config.get_database_path()),
        registry=registry,
        chunker=Chunker(config.get_chunk_policy()),
        max_concurrency=config.get_max_concurrency(),
    )


def get_processor() -> FileProcessor:
    """
    Get or create global FileProcessor instance.

    Returns:
        FileProcessor instance
    """
    global _processor
    if _processor is None:
        logger.debug("Creating new FileProcessor instance")
        _processor = build_processor(get_config())
    return _processor


def handle_ingest(cmd: IngestCommand, processor: Optional[FileProcessor] = None) -> str:
    """
    Handle 'ingest' command.

    Args:
        cmd: IngestCommand with file_path
        processor: Optional FileProcessor for dependency injection (testing)

    Returns:
        Success message with the new file id
    """
    logger.info(f"Executing ingest command: file={cmd.file_path}")
    if processor is None:
        processor = get_processor()

    started = time.perf_counter()
    file_id = asyncio.run(processor.ingest(cmd.file_path))
    elapsed = time.perf_counter() - started

    return (
        f"File processed successfully!\n"
        f"File ID: {file_id}\n"
        f"Processing time: {format_elapsed(elapsed)}"
    )


def handle_ingest_folder(cmd: IngestFolderCommand, processor: Optional[FileProcessor] = None) -> str:
    """
    Handle 'ingest-folder' command.

    Args:
        cmd: IngestFolderCommand with dir_path
        processor: Optional FileProcessor for dependency injection (testing)

    Returns:
        Ids of the ingested files, one per line
    """
    logger.info(f"Executing ingest-folder command: dir={cmd.dir_path}")
    if processor is None:
        processor = get_processor()

    started = time.perf_counter()
    file_ids = asyncio.run(processor.ingest_folder(cmd.dir_path))
    elapsed = time.perf_counter() - started

    if not file_ids:
        return f"No files were ingested from {cmd.dir_path}"

    lines = [f"Processing completed: {len(file_ids)} file(s)"]
    lines.extend(f"  {file_id}" for file_id in file_ids)
    lines.append(f"Total processing time: {format_elapsed(elapsed)}")
    return "\n".join(lines)


def handle_restore(cmd: RestoreCommand, processor: Optional[FileProcessor] = None,
                   config: Optional[Config] = None) -> str:
    """
    Handle 'restore' command.

    Args:
        cmd: RestoreCommand with file_id, optional output_dir and strict flag
        processor: Optional FileProcessor for dependency injection (testing)
        config: Optional Config supplying the default output directory

    Returns:
        Restored path and verification outcome
    """
    logger.info(f"Executing restore command: file_id={cmd.file_id} output_dir={cmd.output_dir}")
    if processor is None:
        processor = get_processor()

    if cmd.output_dir:
        output_dir = Path(cmd.output_dir)
    else:
        output_dir = (config or get_config()).get_output_dir()

    started = time.perf_counter()
    result = asyncio.run(processor.restore(cmd.file_id, output_dir, strict=cmd.strict))
    elapsed = time.perf_counter() - started

    if result.verified:
        status = f"{GREEN}Checksum verified{RESET}"
    else:
        status = (
            f"{YELLOW}WARNING: checksum mismatch{RESET} "
            f"(expected {result.expected_checksum}, got {result.actual_checksum})"
        )

    return (
        f"File restored to: {result.output_path}\n"
        f"{status}\n"
        f"Restoration time: {format_elapsed(elapsed)}"
    )


def handle_verify(cmd: VerifyCommand, processor: Optional[FileProcessor] = None) -> str:
    """
    Handle 'verify' command.

    Args:
        cmd: VerifyCommand with file_id
        processor: Optional FileProcessor for dependency injection (testing)

    Returns:
        Verification outcome
    """
    if processor is None:
        processor = get_processor()

    report = asyncio.run(processor.verify(cmd.file_id))

    if report.verified:
        return f"{GREEN}File {report.file_id} is intact{RESET}"

    lines = [f"{RED}File {report.file_id} failed verification{RESET}"]
    if report.missing_chunks:
        lines.append(f"Missing chunks ({len(report.missing_chunks)}):")
        lines.extend(f"  {chunk_id}" for chunk_id in report.missing_chunks)
    else:
        lines.append(f"Expected checksum: {report.expected_checksum}")
        lines.append(f"Actual checksum:   {report.actual_checksum}")
    return "\n".join(lines)


def handle_list(cmd: ListCommand, processor: Optional[FileProcessor] = None) -> str:
    """
    Handle 'list' command.

    Args:
        cmd: ListCommand
        processor: Optional FileProcessor for dependency injection (testing)

    Returns:
        Formatted table of files
    """
    if processor is None:
        processor = get_processor()

    files = processor.get_all_files()
    if not files:
        return "No files found."

    separator = "-" * SEPARATOR_WIDTH
    lines = [
        f"Found {len(files)} file(s):",
        separator,
        f"{'ID':<38} {'File Name':<30} {'Size':<15} {'Created'}",
        separator,
    ]
    for file in files:
        lines.append(
            f"{file.file_id:<38} {truncate_string(file.file_name, 28):<30} "
            f"{format_file_size(file.file_size):<15} {format_timestamp(file.created_at)}"
        )
    lines.append(separator)
    return "\n".join(lines)


def handle_show(cmd: ShowCommand, processor: Optional[FileProcessor] = None) -> str:
    """
    Handle 'show' command.

    Args:
        cmd: ShowCommand with file_id
        processor: Optional FileProcessor for dependency injection (testing)

    Returns:
        File details followed by its chunk layout
    """
    if processor is None:
        processor = get_processor()

    record = processor.get_file_metadata(cmd.file_id)

    lines = [
        "File Details:",
        f"ID: {record.file_id}",
        f"File Name: {record.file_name}",
        f"Original Path: {record.file_path}",
        f"File Size: {format_file_size(record.file_size)} ({record.file_size} bytes)",
        f"Checksum: {record.checksum}",
        f"Created: {format_timestamp(record.created_at)}",
        f"Chunks: {record.chunk_count}",
    ]

    if record.chunks:
        separator = "-" * SEPARATOR_WIDTH
        lines.extend([
            "",
            "Chunk Details:",
            separator,
            f"{'Order':<6} {'Size':<15} {'Provider':<15} {'Chunk ID':<38} {'Created'}",
            separator,
        ])
        for chunk in record.ordered_chunks():
            lines.append(
                f"{chunk.order:<6} {format_file_size(chunk.chunk_size):<15} "
                f"{truncate_string(chunk.provider_type, 15):<15} {chunk.chunk_id:<38} "
                f"{format_timestamp(chunk.created_at)}"
            )
        lines.append(separator)

    return "\n".join(lines)


def handle_delete(cmd: DeleteCommand, processor: Optional[FileProcessor] = None) -> str:
    """
    Handle 'delete' command.

    Args:
        cmd: DeleteCommand with file_id
        processor: Optional FileProcessor for dependency injection (testing)

    Returns:
        Confirmation message
    """
    logger.info(f"Executing delete command: file_id={cmd.file_id}")
    if processor is None:
        processor = get_processor()

    processor.delete_file(cmd.file_id)
    return f"File {cmd.file_id} deleted from catalog."
