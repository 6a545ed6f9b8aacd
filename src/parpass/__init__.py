"""
ParPass client: golf-course access network member and operator tooling.
"""

__version__ = '0.1.0'

from .exceptions import (
    ActionPendingError,
    APIError,
    APINotFoundError,
    APIResponseError,
    APITimeoutError,
    APIValidationError,
    AuthError,
    ConfigError,
    CredentialError,
    ParPassError,
    ValidationError,
)

__all__ = [
    'APIError',
    'APINotFoundError',
    'APIResponseError',
    'APITimeoutError',
    'APIValidationError',
    'ActionPendingError',
    'AuthError',
    'ConfigError',
    'CredentialError',
    'ParPassError',
    'ValidationError',
]
