"""Result types returned by the file processor."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class RestoreResult:
    """
    Outcome of restoring a file.

    verified is False when the restored bytes do not hash to the checksum
    recorded at ingest; the output file is still on disk in that case.
    """
    file_id: str
    output_path: Path
    expected_checksum: str
    actual_checksum: str
    verified: bool


@dataclass(frozen=True)
class IntegrityReport:
    """
    Outcome of verifying a file against its providers without restoring it.
    """
    file_id: str
    expected_checksum: str
    actual_checksum: Optional[str]
    verified: bool
    missing_chunks: List[str] = field(default_factory=list)
