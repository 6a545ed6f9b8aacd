"""Environment variable handling for configuration."""

import os
from typing import Any

from parpass.config.types import GlobalConfig


class EnvConfig:
    """Environment variable configuration."""

    # Mapping of environment variables to configuration paths
    ENV_MAPPING = {
        'PARPASS_API_URL': ('api', 'url'),
        'PARPASS_RECOMMENDATION_URL': ('api', 'recommendation_url'),
        'PARPASS_TIMEOUT': ('api', 'read_timeout'),
        'PARPASS_TIMEZONE': ('timezone',),
        'PARPASS_CREDENTIALS_FILE': ('credentials_file',),
        'PARPASS_LOG_LEVEL': ('logging', 'default_level'),
        'PARPASS_LOG_FILE': ('logging', 'file', 'path'),
    }

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @staticmethod
    def _set_nested_value(config: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
        """Set value in nested dictionary using path tuple."""
        current = config
        for part in path[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[path[-1]] = value

    @classmethod
    def update_config_from_env(cls, config: dict[str, Any]) -> None:
        """Update configuration dictionary with environment variables.

        Args:
            config: Configuration dictionary to update
        """
        for env_var, path in cls.ENV_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value is not None:
                cls._set_nested_value(config, path, value)
        if cls.get_env_value('PARPASS_LOG_FILE'):
            cls._set_nested_value(config, ('logging', 'file', 'enabled'), True)

    @classmethod
    def get_global_config(cls) -> GlobalConfig:
        """Get default global configuration."""
        return {
            'api': {
                'url': 'http://localhost:3001/api',
                'recommendation_url': 'http://localhost:3002',
                'connect_timeout': 5,
                'read_timeout': 20
            },
            'timezone': 'UTC',
            'credentials_file': os.path.join('~', '.parpass', 'credentials.json'),
            'logging': {}
        }
