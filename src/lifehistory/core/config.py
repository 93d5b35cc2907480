"""
Configuration management with YAML and environment variable support.

Environment variables take precedence over YAML configuration.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from lifehistory.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "LIFEHISTORY_"

# Default configuration paths
DEFAULT_CONFIG_PATHS = [
    Path("lifehistory.yaml"),
    Path("lifehistory.yml"),
    Path("config/lifehistory.yaml"),
    Path.home() / ".lifehistory" / "config.yaml",
]

DEFAULT_LOG_LEVEL = "WARNING"


class Config:
    """
    YAML + environment variable integrated configuration management.

    Environment variables take precedence over YAML values.
    Supports nested key access with dot notation (e.g., "builder.max_age").

    Usage:
        config = Config()
        max_age = config.max_age
        user_id = config.get("builder.placeholder_user_id", default="string")
    """

    def __init__(self, config_path: Path | str | None = None, env_file: Path | str | None = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file. If None, searches default locations.
            env_file: Path to .env file. If None, searches current directory.
        """
        # Load environment variables from .env file
        env_path = Path(env_file) if env_file else None
        load_dotenv(dotenv_path=env_path, override=False)

        self._config: dict[str, Any] = {}
        self._config_path: Path | None = None

        # Load YAML configuration
        self._load_yaml(config_path)

        logger.debug("Configuration initialized from: %s", self._config_path or "defaults only")

    def _load_yaml(self, config_path: Path | str | None = None) -> None:
        """Load YAML configuration file."""
        if config_path:
            path = Path(config_path)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")
            self._config_path = path
        else:
            # Search default locations
            for default_path in DEFAULT_CONFIG_PATHS:
                if default_path.exists():
                    self._config_path = default_path
                    break

        if self._config_path:
            try:
                with self._config_path.open("r", encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
                    if loaded:
                        if not isinstance(loaded, dict):
                            raise ConfigurationError(
                                f"Top level of {self._config_path} must be a mapping"
                            )
                        self._config = loaded
                logger.info("Loaded configuration from: %s", self._config_path)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self._config_path}: {e}") from e
            except OSError as e:
                raise ConfigurationError(f"Failed to read {self._config_path}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Environment variable mapping:
            "builder.max_age" -> LIFEHISTORY_BUILDER_MAX_AGE

        Args:
            key: Configuration key (dot notation supported)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        # Check environment variable first
        env_key = f"{ENV_PREFIX}{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)

        if env_value is not None:
            # Convert string to appropriate type
            value = self._parse_env_value(env_value)
            logger.debug("Config %s from env: %s", key, value)
            return value

        # Fall back to YAML config
        value = self._get_nested(key)
        if value is not None:
            logger.debug("Config %s from yaml: %s", key, value)
            return value

        return default

    def _get_nested(self, key: str) -> Any:
        """Get nested value from config dict using dot notation."""
        value: Any = self._config

        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                return None
            if value is None:
                return None

        return value

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Parse environment variable string to appropriate type."""
        # Boolean
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        # Integer
        try:
            return int(value)
        except ValueError:
            pass

        # Float
        try:
            return float(value)
        except ValueError:
            pass

        # String
        return value

    @property
    def max_age(self) -> int:
        """Lifespan covered by the calendar, in years."""
        from lifehistory.builder import MAX_AGE

        value = self.get("builder.max_age", MAX_AGE)
        try:
            max_age = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"builder.max_age must be an integer, got {value!r}") from e
        if max_age < 0:
            raise ConfigurationError(f"builder.max_age must not be negative, got {max_age}")
        return max_age

    @property
    def placeholder_user_id(self) -> str:
        """User id stamped on placeholder events."""
        from lifehistory.builder import PLACEHOLDER_USER_ID

        return str(self.get("builder.placeholder_user_id", PLACEHOLDER_USER_ID))

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", DEFAULT_LOG_LEVEL)).upper()

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    def __repr__(self) -> str:
        return f"Config(path={self._config_path})"
