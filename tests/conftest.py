"""Shared pytest fixtures for all tests."""

from pathlib import Path

import pytest

from catalog.catalog import SqliteCatalog
from cli.config import Config
from common.exceptions import BackendWriteError
from processor.chunking import Chunker, ChunkSizePolicy
from processor.file_processor import FileProcessor
from providers.filesystem import FileSystemStorageProvider
from providers.registry import ProviderRegistry


class FlakyProvider(FileSystemStorageProvider):
    """
    Filesystem provider that refuses to store chunks containing a marker.
    """

    def __init__(self, root_path, provider_type="Flaky", poison: bytes = b"POISON"):
        super().__init__(root_path, provider_type=provider_type)
        self.poison = poison
        self.put_calls = 0

    async def put(self, key: str, data: bytes) -> None:
        self.put_calls += 1
        if self.poison in data:
            raise BackendWriteError(f"Simulated write failure for chunk {key}")
        await super().put(key, data)


@pytest.fixture
def small_policy():
    """
    Chunk policy with small sizes so tests can use small files.

    Files up to 1 KiB use 100-byte chunks, files from 8 KiB on use 1000-byte chunks.
    """
    return ChunkSizePolicy(
        min_size_threshold=1024,
        max_size_threshold=8192,
        min_chunk_size=100,
        max_chunk_size=1000,
    )


@pytest.fixture
def catalog(tmp_path):
    return SqliteCatalog(tmp_path / 'catalog' / 'test.db')


@pytest.fixture
def fs_provider(tmp_path):
    return FileSystemStorageProvider(tmp_path / 'chunks', provider_type='FileSystem')


@pytest.fixture
def registry(fs_provider):
    return ProviderRegistry([fs_provider])


@pytest.fixture
def three_providers(tmp_path):
    return [
        FileSystemStorageProvider(tmp_path / f'store{i}', provider_type=f'Disk{i}')
        for i in range(3)
    ]


@pytest.fixture
def processor(catalog, registry, small_policy):
    return FileProcessor(catalog, registry, Chunker(small_policy))


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / 'restored'


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a 450-byte file (5 chunks under small_policy).

    Returns:
        Path to sample file
    """
    file_path = tmp_path / 'input' / 'sample.bin'
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(bytes(range(256)) + bytes(range(194)))
    return file_path


@pytest.fixture
def temp_config_dir(tmp_path):
    config_dir = tmp_path / '.chunkvault'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir, monkeypatch):
    """
    Config instance with temp config file and no environment overrides.
    """
    for name in ('CHUNKVAULT_DATABASE_PATH', 'CHUNKVAULT_OUTPUT_DIR', 'CHUNKVAULT_STORAGE_PATH'):
        monkeypatch.delenv(name, raising=False)
    return Config(temp_config_dir / 'config.json')


def make_files(folder: Path, contents: dict) -> Path:
    """Write {name: bytes} into folder and return it."""
    folder.mkdir(parents=True, exist_ok=True)
    for name, data in contents.items():
        (folder / name).write_bytes(data)
    return folder


@pytest.fixture
def flaky_provider_cls():
    return FlakyProvider


@pytest.fixture
def write_files():
    return make_files
