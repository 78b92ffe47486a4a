"""Configuration service for managing Pathly CLI configuration.

This module provides the ConfigService class, which is the single source of truth
for all configuration management in Pathly CLI. It handles:

- Loading and saving config.json
- Dot-key access to individual settings (``output.format``)
- Config file initialization with sensible defaults
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from pathly_cli.models.config_models import AppConfig

logger = logging.getLogger(__name__)

_APP_NAME = "pathly_cli"


class ConfigService:
    """Service for managing application configuration.

    The configuration is loaded lazily and cached. A config file that cannot
    be parsed is ignored in favour of defaults (and left on disk untouched
    until the next save).
    """

    def __init__(self, config_dir: Path | None = None, data_dir: Path | None = None):
        """Initialize the config service.

        Args:
            config_dir: Directory holding config.json (platform default if None)
            data_dir: Directory holding the vault (platform default if None)
        """
        self.config_dir = Path(config_dir or user_config_dir(_APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(data_dir or user_data_dir(_APP_NAME))

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def db_path(self) -> Path:
        """Path of the SQLite vault."""
        if self.config.storage.db_path:
            return Path(self.config.storage.db_path).expanduser()
        return self.data_dir / "vault.db"

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
        except (OSError, ValidationError) as e:
            logger.warning("ignoring unreadable config %s: %s", self.config_path, e)
            self._config = AppConfig()

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            # Set file permissions
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self, key: str | None = None) -> None:
        """Reset one setting, or the whole configuration, to defaults."""
        if key is not None:
            self.set(key, self._lookup(AppConfig().model_dump(mode="json"), key))
            return
        self._config = AppConfig()
        self.save_config()

    def get(self, key: str) -> Any:
        """Get a setting by dotted key (``output.format``).

        Raises:
            KeyError: If the key does not exist
        """
        return self._lookup(self.config.model_dump(mode="json"), key)

    def set(self, key: str, value: Any) -> AppConfig:
        """Set a setting by dotted key and save.

        String values are coerced by the config model (``"false"`` -> False).

        Raises:
            KeyError: If the key does not exist
            ValidationError: If the value is invalid for the setting
        """
        data = self.config.model_dump(mode="json")
        section, _, name = key.partition(".")
        self._lookup(data, key)
        data[section][name] = value
        self._config = AppConfig.model_validate(data)
        self.save_config()
        logger.info("config %s set to %r", key, value)
        return self._config

    def list_settings(self) -> dict[str, Any]:
        """Flatten the configuration to dotted keys."""
        return {
            f"{section}.{name}": value
            for section, values in self.config.model_dump(mode="json").items()
            for name, value in values.items()
        }

    @staticmethod
    def _lookup(data: dict[str, Any], key: str) -> Any:
        section, _, name = key.partition(".")
        if section not in data or not name or name not in data[section]:
            raise KeyError(key)
        return data[section][name]


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
