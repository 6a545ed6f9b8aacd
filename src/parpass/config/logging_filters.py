"""Masking of ParPass codes and other secrets in log records."""

import logging
import re
from typing import Any


# ParPass codes look like PP100001
PARPASS_CODE_PATTERN = re.compile(r'\bPP\d{4,}\b', re.IGNORECASE)

DEFAULT_SENSITIVE_FIELDS = frozenset({'parpass_code', 'code', 'token', 'api_key', 'secret', 'email'})

class SensitiveDataFilter(logging.Filter):
    """Masks ParPass codes in messages and sensitive keys in record context."""

    def __init__(self, sensitive_fields: set[str] | None = None, mask: str = '***MASKED***'):
        super().__init__()
        self.mask = mask
        self.sensitive_fields = frozenset(sensitive_fields or DEFAULT_SENSITIVE_FIELDS)

    def _mask_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: self.mask if str(key).lower() in self.sensitive_fields else self._mask_value(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            return [self._mask_value(item) for item in value]
        if isinstance(value, str):
            return PARPASS_CODE_PATTERN.sub(self.mask, value)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if PARPASS_CODE_PATTERN.search(message):
            record.msg = PARPASS_CODE_PATTERN.sub(self.mask, message)
            record.args = ()
        context = getattr(record, 'context', None)
        if context:
            record.context = self._mask_value(context)
        return True
