"""Error types raised by the ParPass client.

Every error carries a message, an ``ErrorCode`` and optional details. The
CLI shows ``message`` plus the class ``hint`` and exits with status 1.
"""

import logging
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any
from typing import ClassVar

import requests

from parpass.config.error_aggregator import aggregate_error
from parpass.error_codes import ErrorCode


logger = logging.getLogger(__name__)

@dataclass
class ParPassError(Exception):
    """Base exception for all ParPass client errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None

    hint: ClassVar[str | None] = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

class APIError(ParPassError):
    """A call to the ParPass API or the recommendation service failed."""
    hint = "Is the ParPass API running? Check api.url in config.yaml or PARPASS_API_URL."

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.REQUEST_FAILED,
        response: requests.Response | None = None,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code, details)
        self.response = response

class APITimeoutError(APIError):
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.TIMEOUT, details=details)

class APIResponseError(APIError):
    """The API answered with an error status or could not be reached."""
    def __init__(
        self,
        message: str,
        response: requests.Response | None = None,
        status_code: int | None = None
    ):
        code = ErrorCode.SERVER_ERROR if status_code and status_code >= 500 else ErrorCode.INVALID_RESPONSE
        super().__init__(message, code, response=response)
        self.status_code = status_code

class APINotFoundError(APIResponseError):
    """Member or course does not exist (HTTP 404)."""
    hint = "Check the code or id. 'parpass courses list' shows course ids."

    def __init__(self, message: str, response: requests.Response | None = None):
        super().__init__(message, response=response, status_code=404)
        self.code = ErrorCode.NOT_FOUND

class APIValidationError(APIError):
    """Payload could not be parsed into the expected shape."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.VALIDATION_FAILED, details=details)

class AuthError(ParPassError):
    """Operation needs a signed-in member, or the member may not do it."""
    hint = "Sign in with 'parpass login <CODE>'."

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.AUTH_FAILED, details)

class ConfigError(ParPassError):
    hint = "Fix config.yaml in PARPASS_CONFIG_DIR or the PARPASS_* environment variables."

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIG_INVALID, details)

class ValidationError(ParPassError):
    """User input rejected before any request was made."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.VALIDATION_FAILED, details)

class CredentialError(ParPassError):
    """Stored ParPass code could not be written or removed."""
    hint = "Check permissions of the credentials file or set PARPASS_CREDENTIALS_FILE."

    def __init__(self, message: str, path: str):
        super().__init__(message, ErrorCode.CREDENTIAL_ERROR, {"path": path})

class ActionPendingError(ParPassError):
    """An action of the same kind is already in flight."""
    def __init__(self, message: str, action: str):
        super().__init__(message, ErrorCode.ACTION_PENDING, {"action": action})

@contextmanager
def handle_errors(
    error_type: type[Exception],
    service: str,
    operation: str,
    fallback: Callable[[], Any] | None = None
) -> Iterator[None]:
    """Report errors of a block to the aggregator.

    With a fallback, the fallback runs and the error is suppressed. Without
    one the error propagates.

    Args:
        error_type: Expected error type, logged as a warning
        service: Service name used for grouping
        operation: Operation name for the log message
        fallback: Called instead of propagating the error
    """
    try:
        yield
    except Exception as e:
        expected = isinstance(e, error_type)
        if expected:
            logger.warning(f"{service}.{operation} failed: {e}")
        else:
            logger.error(f"Unexpected error in {service}.{operation}: {e}", exc_info=True)

        code = e.code.value if isinstance(e, ParPassError) else None
        message = e.message if isinstance(e, ParPassError) else str(e)
        aggregate_error(message, service, e.__traceback__, code)

        if fallback is None:
            raise
        fallback()
