"""Configuration management for the chunkvault CLI."""

import json
import os
import shutil
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from common.constants import (
    DEFAULT_DATABASE_PATH,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PROVIDER_TYPE,
    DEFAULT_STORAGE_PATH,
)
from common.exceptions import ConfigurationError
from common.logging_config import get_logger
from processor.chunking import ChunkSizePolicy

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.chunkvault' / 'config.json'


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "database_path": DEFAULT_DATABASE_PATH,
        "output_dir": DEFAULT_OUTPUT_DIR,
        "providers": [
            {"name": DEFAULT_PROVIDER_TYPE, "root": DEFAULT_STORAGE_PATH},
        ],
        "chunk_policy": ChunkSizePolicy().model_dump(),
        "max_concurrency": DEFAULT_MAX_CONCURRENCY,
        "log_file": None,
    }

    ENV_OVERRIDES = {
        "database_path": "CHUNKVAULT_DATABASE_PATH",
        "output_dir": "CHUNKVAULT_OUTPUT_DIR",
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Relative paths in the file are resolved against the directory that
        holds it.

        Args:
            config_path: Path to config JSON file (typically ~/.chunkvault/config.json)
        """
        self.config_path = Path(config_path)
        self.data = self._load()

    def _defaults(self) -> dict:
        return json.loads(json.dumps(self.DEFAULT_CONFIG))

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("top-level JSON value must be an object")
                config = self._defaults()
                config.update(data)
                return config
            except (json.JSONDecodeError, ValueError) as e:
                backup_path = self.config_path.with_suffix('.json.bak')
                shutil.copy(self.config_path, backup_path)
                logger.warning(
                    f"Config file {self.config_path} is invalid ({e}); "
                    f"backed up to {backup_path} and using defaults"
                )
                return self._defaults()
        else:
            config = self._defaults()
            with open(self.config_path, 'w') as f:
                json.dump(config, f, indent=2)
            return config

    def save(self) -> None:
        """Save current configuration to file."""
        with open(self.config_path, 'w') as f:
            json.dump(self.data, f, indent=2)

    def _resolve_path(self, value: str) -> Path:
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.config_path.parent / path
        return path

    def _get_path(self, key: str) -> Path:
        env_name = self.ENV_OVERRIDES.get(key)
        value = os.environ.get(env_name) if env_name else None
        if value:
            return Path(value).expanduser()
        return self._resolve_path(self.data[key])

    def get_database_path(self) -> Path:
        """
        Get catalog database path.

        Returns:
            Path to the SQLite file (CHUNKVAULT_DATABASE_PATH wins over the file)
        """
        return self._get_path('database_path')

    def get_output_dir(self) -> Path:
        """Default directory for restored files."""
        return self._get_path('output_dir')

    def get_providers(self) -> List[dict]:
        """
        Get configured filesystem providers in registration order.

        CHUNKVAULT_STORAGE_PATH replaces the root of the first provider.

        Returns:
            List of {'name': str, 'root': Path}

        Raises:
            ConfigurationError: If the provider list is malformed or repeats a name
        """
        entries = self.data.get('providers')
        if not isinstance(entries, list) or not entries:
            raise ConfigurationError("Config must list at least one storage provider")

        providers = []
        seen = set()
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict) or not entry.get('name') or not entry.get('root'):
                raise ConfigurationError(f"Provider entry {i} needs 'name' and 'root'")
            if entry['name'] in seen:
                raise ConfigurationError(f"Provider name '{entry['name']}' is configured more than once")
            seen.add(entry['name'])
            providers.append({'name': entry['name'], 'root': self._resolve_path(entry['root'])})

        storage_override = os.environ.get('CHUNKVAULT_STORAGE_PATH')
        if storage_override:
            providers[0]['root'] = Path(storage_override).expanduser()

        return providers

    def get_chunk_policy(self) -> ChunkSizePolicy:
        """
        Build the chunk size policy from the config file.

        Raises:
            ConfigurationError: If the values are missing or inconsistent
        """
        try:
            return ChunkSizePolicy.model_validate(self.data.get('chunk_policy') or {})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid chunk_policy in {self.config_path}: {e}") from e

    def get_max_concurrency(self) -> int:
        value = self.data.get('max_concurrency', DEFAULT_MAX_CONCURRENCY)
        if not isinstance(value, int) or value < 1:
            raise ConfigurationError(f"max_concurrency must be a positive integer, got {value!r}")
        return value

    def get_log_file(self) -> Optional[Path]:
        value = self.data.get('log_file')
        return self._resolve_path(value) if value else None
