"""Configuration type definitions."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, TypedDict

from parpass.config.logging_config import LoggingConfig


class ApiSettings(TypedDict):
    """Remote collaborator settings."""
    url: str
    recommendation_url: str
    connect_timeout: float
    read_timeout: float

class GlobalConfig(TypedDict):
    """Raw configuration structure as merged from environment and config.yaml."""
    api: ApiSettings
    timezone: str
    credentials_file: str
    logging: Dict[str, Any]

@dataclass
class AppConfig:
    """Application configuration."""
    global_config: GlobalConfig
    api_url: str = "http://localhost:3001/api"
    recommendation_url: str = "http://localhost:3002"
    timezone: str = "UTC"
    credentials_file: str = "~/.parpass/credentials.json"
    request_timeout: Tuple[float, float] = (5, 20)
    config_dir: Optional[str] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
