"""Error codes for the ParPass client."""

from enum import Enum

class ErrorCode(Enum):
    """Codes attached to every ParPassError, also used to group logged errors."""
    AUTH_FAILED = "auth_failed"

    # Transport and HTTP status
    REQUEST_FAILED = "request_failed"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"

    # Payload and input
    INVALID_RESPONSE = "invalid_response"
    VALIDATION_FAILED = "validation_failed"

    CONFIG_INVALID = "config_invalid"

    # Local state
    CREDENTIAL_ERROR = "credential_error"
    ACTION_PENDING = "action_pending"
