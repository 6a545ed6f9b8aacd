"""Typed parsing of loosely formatted API values.

The stats endpoints return counts as numeric strings (``"42"``), ratings may
come back as strings or numbers, and timestamps as ISO strings. Everything is
converted here, once, when a payload is turned into a model.
"""

import logging
import math
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo


logger = logging.getLogger(__name__)

def parse_count(value: Any) -> int:
    """Parse a count, falling back to zero for anything non-numeric.

    ``"12"``, ``12`` and ``"12.0"`` give 12; ``None``, ``""`` and ``"n/a"``
    give 0. Booleans are not counts.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        logger.debug(f"Non-numeric count {value!r}, using 0")
        return 0

def parse_optional_float(value: Any) -> float | None:
    """Parse a nullable decimal such as an average rating.

    NaN and infinities are treated as missing.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Non-numeric value {value!r}, treating as missing")
        return None
    if not math.isfinite(result):
        logger.debug(f"Non-finite value {value!r}, treating as missing")
        return None
    return result

def parse_timestamp(value: str, tz: ZoneInfo | None = None) -> datetime:
    """Parse an ISO 8601 date or timestamp.

    A trailing ``Z`` is accepted. Aware timestamps are converted to ``tz``
    when given; naive ones are returned as they are.

    Raises:
        ValueError: If the value is not an ISO 8601 date or timestamp
    """
    text = str(value).strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    parsed = datetime.fromisoformat(text)
    if tz is not None and parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return parsed
