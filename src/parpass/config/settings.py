"""Configuration settings for the ParPass client."""

import os
from pathlib import Path
from typing import Any

from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError

import yaml

from parpass.config.env import EnvConfig
from parpass.config.logging_config import load_logging_config
from parpass.config.types import AppConfig
from parpass.config.types import GlobalConfig
from parpass.config.utils import deep_merge
from parpass.config.utils import resolve_path
from parpass.config.utils import validate_url
from parpass.exceptions import ConfigError


class ConfigurationManager:
    """Centralized configuration management with caching."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config: AppConfig | None = None
        self._config_path: Path | None = None
        self._initialized = True

    @property
    def config(self) -> AppConfig:
        """Get the current configuration, loading it if necessary."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config() first.")
        return self._config

    def load_config(self, config_dir: str | None = None) -> AppConfig:
        """Load configuration with caching."""
        if self._config is not None:
            return self._config

        self._config_path = _get_config_path(config_dir)
        global_config = _load_global_config(self._config_path)
        self._config = _build_app_config(global_config, self._config_path)

        return self._config

    def reload_config(self, config_dir: str | None = None) -> AppConfig:
        """Force reload configuration."""
        self._config = None
        return self.load_config(config_dir)

def _get_config_path(config_dir: str | None = None) -> Path | None:
    """Get configuration directory path, if one is configured."""
    path = config_dir or os.getenv("PARPASS_CONFIG_DIR")
    if not path:
        return None
    return resolve_path(path)

def _load_global_config(config_path: Path | None) -> GlobalConfig:
    """Load global configuration from defaults, config.yaml and environment."""
    global_config: dict[str, Any] = dict(EnvConfig.get_global_config())

    if config_path is not None:
        config_file = config_path / "config.yaml"
        if config_file.exists():
            try:
                with open(config_file, encoding="utf-8") as f:
                    loaded_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_file}: {e}")
            if not isinstance(loaded_config, dict):
                raise ConfigError(f"Expected a mapping in {config_file}")
            global_config = deep_merge(global_config, loaded_config)

    # Environment wins over the file
    EnvConfig.update_config_from_env(global_config)

    return global_config  # type: ignore[return-value]

def _build_app_config(global_config: GlobalConfig, config_path: Path | None) -> AppConfig:
    """Validate raw configuration and convert it to AppConfig."""
    api = global_config['api']
    try:
        api_url = validate_url(api.get('url'), 'api.url')
        recommendation_url = validate_url(api.get('recommendation_url'), 'api.recommendation_url')
        timeout = (float(api.get('connect_timeout', 5)), float(api.get('read_timeout', 20)))
    except (TypeError, ValueError) as e:
        raise ConfigError(str(e), details={'config_dir': str(config_path) if config_path else None})

    timezone = global_config.get('timezone') or 'UTC'
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError(f"Unknown timezone: {timezone}", details={'timezone': timezone})

    credentials_file = resolve_path(global_config['credentials_file'], base_dir=config_path)

    try:
        logging_config = load_logging_config(global_config.get('logging'))
    except TypeError as e:
        raise ConfigError(f"Invalid logging configuration: {e}")

    return AppConfig(
        global_config=global_config,
        api_url=api_url,
        recommendation_url=recommendation_url,
        timezone=timezone,
        credentials_file=str(credentials_file),
        request_timeout=timeout,
        config_dir=str(config_path) if config_path else None,
        logging=logging_config
    )

def load_config(config_dir: str | None = None) -> AppConfig:
    """Load configuration using the ConfigurationManager."""
    config_manager = ConfigurationManager()
    return config_manager.load_config(config_dir)
