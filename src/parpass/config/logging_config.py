"""Logging configuration types and loading utilities."""

from dataclasses import dataclass
from dataclasses import field
from typing import Any


@dataclass
class FileConfig:
    """File logging configuration."""
    enabled: bool = False
    path: str = 'logs/parpass.log'
    max_size_mb: int = 10
    backup_count: int = 5
    format: str = 'json'

@dataclass
class ConsoleConfig:
    """Console logging configuration."""
    enabled: bool = True
    color: bool = True

@dataclass
class SensitiveDataConfig:
    """Sensitive data masking configuration."""
    enabled: bool = True
    global_fields: list[str] = field(default_factory=list)
    mask_pattern: str = '***MASKED***'

@dataclass
class ErrorAggregationConfig:
    """Error aggregation configuration."""
    enabled: bool = True
    error_threshold: int = 5
    time_threshold: int = 300
    categorize_by: list[str] = field(default_factory=lambda: ['service', 'message'])

@dataclass
class LoggingConfig:
    """Complete logging configuration."""
    default_level: str = 'WARNING'
    verbose_level: str = 'DEBUG'
    file: FileConfig = field(default_factory=FileConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    sensitive_data: SensitiveDataConfig = field(default_factory=SensitiveDataConfig)
    error_aggregation: ErrorAggregationConfig = field(default_factory=ErrorAggregationConfig)
    libraries: dict[str, str] = field(default_factory=lambda: {
        'urllib3': 'WARNING',
        'requests': 'WARNING',
        'yaml': 'WARNING'
    })

def load_logging_config(config_dict: dict[str, Any] | None = None) -> LoggingConfig:
    """Build logging configuration from the ``logging`` section of config.yaml."""
    config_dict = config_dict or {}

    return LoggingConfig(
        default_level=str(config_dict.get('default_level', 'WARNING')).upper(),
        verbose_level=str(config_dict.get('verbose_level', 'DEBUG')).upper(),
        file=FileConfig(**config_dict.get('file', {})),
        console=ConsoleConfig(**config_dict.get('console', {})),
        sensitive_data=SensitiveDataConfig(**config_dict.get('sensitive_data', {})),
        error_aggregation=ErrorAggregationConfig(**config_dict.get('error_aggregation', {})),
        libraries=config_dict.get('libraries', LoggingConfig().libraries)
    )
