"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional, Union


@dataclass(frozen=True)
class IngestCommand:
    """Ingest a single file."""

    file_path: str
    command: Literal["ingest"] = "ingest"


@dataclass(frozen=True)
class IngestFolderCommand:
    """Ingest every file directly inside a directory."""

    dir_path: str
    command: Literal["ingest-folder"] = "ingest-folder"


@dataclass(frozen=True)
class RestoreCommand:
    """Restore a file by id."""

    file_id: str
    output_dir: Optional[str] = None
    strict: bool = False
    command: Literal["restore"] = "restore"


@dataclass(frozen=True)
class VerifyCommand:
    """Verify a file's chunks without restoring it."""

    file_id: str
    command: Literal["verify"] = "verify"


@dataclass(frozen=True)
class ListCommand:
    """List all stored files."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class ShowCommand:
    """Show details of one file."""

    file_id: str
    command: Literal["show"] = "show"


@dataclass(frozen=True)
class DeleteCommand:
    """Soft delete a file."""

    file_id: str
    command: Literal["delete"] = "delete"


CommandRequest = Union[
    IngestCommand,
    IngestFolderCommand,
    RestoreCommand,
    VerifyCommand,
    ListCommand,
    ShowCommand,
    DeleteCommand,
]
