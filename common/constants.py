"""Project-wide constants (chunk size policy defaults, paths, naming)."""

KIB: int = 1024
MIB: int = 1024 * KIB

DEFAULT_MIN_SIZE_THRESHOLD: int = 1 * MIB  # files at or below use the min chunk size
DEFAULT_MAX_SIZE_THRESHOLD: int = 5 * MIB  # files at or above use the max chunk size
DEFAULT_MIN_CHUNK_SIZE: int = 20 * KIB
DEFAULT_MAX_CHUNK_SIZE: int = 200 * KIB

DEFAULT_PROVIDER_TYPE: str = "FileSystem"
DEFAULT_STORAGE_PATH: str = "chunks"
DEFAULT_DATABASE_PATH: str = "chunkvault.db"
DEFAULT_OUTPUT_DIR: str = "restored"

RESTORED_FILE_PREFIX: str = "Restored_"

DEFAULT_MAX_CONCURRENCY: int = 4
READ_BUFFER_SIZE: int = 64 * KIB

RECORD_AUTHOR: str = "FileProcessor"
