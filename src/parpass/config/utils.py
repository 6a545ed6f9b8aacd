"""Configuration utility functions."""

from copy import deepcopy
from pathlib import Path
from typing import Any
from typing import TypeVar
from urllib.parse import urlparse


T = TypeVar('T', bound=dict[str, Any])

def deep_merge(base: T, override: T) -> T:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to override base values

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if (
            key in result and
            isinstance(result[key], dict) and
            isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result

def resolve_path(path: str | Path, base_dir: str | Path | None = None) -> Path:
    """Resolve path relative to base directory.

    Args:
        path: Path to resolve, ``~`` is expanded
        base_dir: Base directory for relative paths

    Returns:
        Resolved Path object
    """
    path = Path(path).expanduser()

    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir) / path

    return path

def validate_url(url: str | None, name: str) -> str:
    """Validate a collaborator base URL.

    Args:
        url: URL to validate
        name: Setting name for error messages

    Returns:
        URL without trailing slash

    Raises:
        ValueError: If the URL is missing or not http(s)
    """
    if not url or not str(url).strip():
        raise ValueError(f"Invalid {name}: empty URL")

    parsed = urlparse(str(url).strip())
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValueError(f"Invalid {name}: {url}")

    return str(url).strip().rstrip('/')
