"""Tests for the filesystem storage provider."""

import pytest

from common.exceptions import BackendReadError, BackendWriteError, ChunkNotFoundError
from providers.filesystem import FileSystemStorageProvider


class TestFileSystemStorageProvider:

    def test_creates_root_directory(self, tmp_path):
        root = tmp_path / 'a' / 'b'
        provider = FileSystemStorageProvider(root)
        assert root.is_dir()
        assert provider.provider_type == 'FileSystem'

    @pytest.mark.asyncio
    async def test_put_then_get_returns_same_bytes(self, fs_provider):
        data = bytes(range(256)) * 4
        await fs_provider.put('chunk-1', data)
        assert await fs_provider.get('chunk-1') == data

    @pytest.mark.asyncio
    async def test_chunk_stored_as_file_named_by_key(self, fs_provider):
        await fs_provider.put('abc', b'payload')
        assert (fs_provider.root_path / 'abc').read_bytes() == b'payload'
        assert [p.name for p in fs_provider.root_path.iterdir()] == ['abc']

    @pytest.mark.asyncio
    async def test_survives_new_instance(self, tmp_path):
        await FileSystemStorageProvider(tmp_path / 'store').put('k', b'durable')
        reopened = FileSystemStorageProvider(tmp_path / 'store')
        assert await reopened.get('k') == b'durable'

    @pytest.mark.asyncio
    async def test_put_overwrites(self, fs_provider):
        await fs_provider.put('k', b'first')
        await fs_provider.put('k', b'second')
        assert await fs_provider.get('k') == b'second'

    @pytest.mark.asyncio
    async def test_empty_payload(self, fs_provider):
        await fs_provider.put('empty', b'')
        assert await fs_provider.get('empty') == b''

    @pytest.mark.asyncio
    async def test_get_unknown_key_is_not_found(self, fs_provider):
        with pytest.raises(ChunkNotFoundError) as exc_info:
            await fs_provider.get('missing')
        assert exc_info.value.chunk_id == 'missing'
        assert exc_info.value.provider_type == 'FileSystem'

    @pytest.mark.asyncio
    async def test_get_directory_is_read_error(self, fs_provider):
        (fs_provider.root_path / 'adir').mkdir()
        with pytest.raises(BackendReadError):
            await fs_provider.get('adir')

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ['../escape', 'a/b', '..', ''])
    async def test_rejects_path_like_keys(self, fs_provider, key):
        with pytest.raises(BackendWriteError):
            await fs_provider.put(key, b'x')

    @pytest.mark.asyncio
    async def test_write_failure_is_reported(self, fs_provider, monkeypatch):
        def broken_write(chunk_id, data):
            raise OSError(28, 'No space left on device')

        monkeypatch.setattr(fs_provider, 'write_chunk', broken_write)

        with pytest.raises(BackendWriteError, match='No space left'):
            await fs_provider.put('k', b'data')

    @pytest.mark.asyncio
    async def test_no_temp_files_left_after_write(self, fs_provider):
        await fs_provider.put('k', b'data')
        assert [p.name for p in fs_provider.root_path.iterdir()] == ['k']

    @pytest.mark.asyncio
    async def test_delete_and_exists(self, fs_provider):
        await fs_provider.put('k', b'data')
        assert await fs_provider.exists('k')
        assert await fs_provider.delete('k') is True
        assert not await fs_provider.exists('k')
        assert await fs_provider.delete('k') is False

    @pytest.mark.asyncio
    async def test_exists_with_invalid_key(self, fs_provider):
        assert await fs_provider.exists('../x') is False
