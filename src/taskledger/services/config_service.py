"""Configuration service for taskledger.

Single source of truth for configuration. It handles:

- Loading and saving config.json under the user config directory
- Creating a default config on first run
- Setting individual values with validation
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import pydantic
from platformdirs import user_config_dir, user_data_dir

from taskledger.adapters.sqlite.connection import DEFAULT_DB_NAME
from taskledger.models import AppConfig, StorageConfig, ValidationError

logger = logging.getLogger(__name__)

# Dotted keys accepted by set_value()
SETTABLE_KEYS = (
    "default_owner",
    "log_level",
    "storage.backend",
    "storage.db_path",
    "output.format",
    "output.upcoming_window",
)


class ConfigService:
    """Service for loading, saving and editing the application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir("taskledger"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("taskledger"))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from storage, creating the default on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = self.create_default_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def create_default_config(self) -> AppConfig:
        """Create and save a default configuration with a local SQLite ledger."""
        self._config = AppConfig(
            storage=StorageConfig(
                backend="sqlite",
                db_path=str(self.data_dir / DEFAULT_DB_NAME),
            )
        )
        self.save_config()
        logger.info("Created default config at %s", self.config_path)
        return self._config

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = None
        if self.config_path.exists():
            self.config_path.unlink()
        return self.create_default_config()

    def set_value(self, key: str, value: Any) -> AppConfig:
        """Set one configuration value by dotted key and save.

        Raises:
            ValidationError: Unknown key or invalid value
        """
        if key not in SETTABLE_KEYS:
            raise ValidationError(
                f"Unknown config key '{key}'. Valid keys: {', '.join(SETTABLE_KEYS)}"
            )

        data = self.config.model_dump()
        section, _, field = key.rpartition(".")
        target = data[section] if section else data
        target[field] = value

        try:
            self._config = AppConfig.model_validate(data)
        except pydantic.ValidationError as e:
            message = e.errors()[0]["msg"] if e.errors() else str(e)
            raise ValidationError(f"Invalid value for {key}: {message}") from e

        self.save_config()
        return self._config

    def get_db_path(self) -> str:
        """Database path of the configured SQLite ledger."""
        return self.config.storage.db_path or str(self.data_dir / DEFAULT_DB_NAME)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
