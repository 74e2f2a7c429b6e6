"""Tests for CLI configuration module."""

import json

import pytest

from cli.config import Config
from common.exceptions import ConfigurationError
from processor.chunking import ChunkSizePolicy


def test_config_creates_default_file(tmp_path):
    """Test that config file is created with defaults if missing."""
    config_path = tmp_path / '.chunkvault' / 'config.json'
    config = Config(config_path)

    assert config_path.exists()

    assert config.data['database_path'] == 'chunkvault.db'
    assert config.data['output_dir'] == 'restored'
    assert config.data['providers'] == [{'name': 'FileSystem', 'root': 'chunks'}]
    assert config.data['max_concurrency'] == 4
    assert config.data['log_file'] is None
    assert config.data['chunk_policy']['min_chunk_size'] == 20 * 1024


def test_config_loads_existing_file(tmp_path):
    """Test loading existing config file."""
    config_path = tmp_path / '.chunkvault' / 'config.json'
    config_path.parent.mkdir(parents=True)

    existing_data = {
        'database_path': '/var/lib/chunkvault/catalog.db',
        'max_concurrency': 8,
    }
    with open(config_path, 'w') as f:
        json.dump(existing_data, f)

    config = Config(config_path)

    assert config.data['database_path'] == '/var/lib/chunkvault/catalog.db'
    assert config.data['max_concurrency'] == 8

    assert config.data['output_dir'] == 'restored'


@pytest.mark.parametrize('content', ['{ invalid json content', '[1, 2, 3]'])
def test_config_handles_corrupted_file(tmp_path, content):
    """Test recovery from corrupted config file."""
    config_path = tmp_path / '.chunkvault' / 'config.json'
    config_path.parent.mkdir(parents=True)

    with open(config_path, 'w') as f:
        f.write(content)

    config = Config(config_path)
    assert config.data['database_path'] == 'chunkvault.db'

    backup_path = config_path.with_suffix('.json.bak')
    assert backup_path.exists()
    assert backup_path.read_text() == content


def test_config_save(temp_config):
    temp_config.data['max_concurrency'] = 2
    temp_config.save()

    assert Config(temp_config.config_path).get_max_concurrency() == 2


def test_relative_paths_resolve_against_config_dir(temp_config, temp_config_dir):
    assert temp_config.get_database_path() == temp_config_dir / 'chunkvault.db'
    assert temp_config.get_output_dir() == temp_config_dir / 'restored'
    assert temp_config.get_providers() == [{'name': 'FileSystem', 'root': temp_config_dir / 'chunks'}]


def test_absolute_paths_kept(temp_config, tmp_path):
    temp_config.data['database_path'] = str(tmp_path / 'elsewhere' / 'db.sqlite')
    assert temp_config.get_database_path() == tmp_path / 'elsewhere' / 'db.sqlite'


def test_environment_overrides(temp_config, tmp_path, monkeypatch):
    monkeypatch.setenv('CHUNKVAULT_DATABASE_PATH', str(tmp_path / 'env.db'))
    monkeypatch.setenv('CHUNKVAULT_OUTPUT_DIR', str(tmp_path / 'out'))
    monkeypatch.setenv('CHUNKVAULT_STORAGE_PATH', str(tmp_path / 'store'))
    temp_config.data['providers'].append({'name': 'Backup', 'root': 'backup'})

    assert temp_config.get_database_path() == tmp_path / 'env.db'
    assert temp_config.get_output_dir() == tmp_path / 'out'
    providers = temp_config.get_providers()
    assert providers[0]['root'] == tmp_path / 'store'
    assert providers[1]['root'] == temp_config.config_path.parent / 'backup'


@pytest.mark.parametrize('providers', [[], 'FileSystem', [{'name': 'FileSystem'}], [{'root': 'chunks'}]])
def test_malformed_providers(temp_config, providers):
    temp_config.data['providers'] = providers
    with pytest.raises(ConfigurationError):
        temp_config.get_providers()


def test_get_chunk_policy(temp_config):
    assert temp_config.get_chunk_policy() == ChunkSizePolicy()

    temp_config.data['chunk_policy'] = {
        'min_size_threshold': 1024,
        'max_size_threshold': 8192,
        'min_chunk_size': 100,
        'max_chunk_size': 1000,
    }
    assert temp_config.get_chunk_policy().max_chunk_size == 1000


def test_invalid_chunk_policy(temp_config):
    temp_config.data['chunk_policy'] = {'min_chunk_size': 500, 'max_chunk_size': 100}
    with pytest.raises(ConfigurationError):
        temp_config.get_chunk_policy()


def test_get_max_concurrency(temp_config):
    assert temp_config.get_max_concurrency() == 4

    temp_config.data['max_concurrency'] = 0
    with pytest.raises(ConfigurationError):
        temp_config.get_max_concurrency()


def test_get_log_file(temp_config, temp_config_dir):
    assert temp_config.get_log_file() is None

    temp_config.data['log_file'] = 'logs/chunkvault.log'
    assert temp_config.get_log_file() == temp_config_dir / 'logs' / 'chunkvault.log'


def test_config_directory_created_if_missing(tmp_path):
    """Test that config directory is created if it doesn't exist."""
    config_path = tmp_path / 'nested' / 'deep' / '.chunkvault' / 'config.json'

    assert not config_path.parent.exists()

    Config(config_path)
    assert config_path.parent.exists()
    assert config_path.exists()


def test_duplicate_provider_names(temp_config, tmp_path):
    temp_config.data['providers'] = [
        {'name': 'A', 'root': str(tmp_path / 'a1')},
        {'name': 'A', 'root': str(tmp_path / 'a2')},
    ]
    with pytest.raises(ConfigurationError, match="more than once"):
        temp_config.get_providers()
