"""Grouping of repeated errors.

A CLI run that talks to a dead API produces the same failure many times.
Occurrences are grouped and a group is reported once, either when it reaches
the configured count or age, or when the command finishes.
"""

import logging
import threading
import traceback
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from types import TracebackType

from parpass.config.logging_config import ErrorAggregationConfig


GroupKey = tuple[str, ...]

@dataclass
class ErrorGroup:
    """Occurrences of one kind of error."""
    message: str
    code: str | None = None
    count: int = 0
    first_seen: datetime = field(default_factory=datetime.now)
    last_seen: datetime = field(default_factory=datetime.now)
    services: set[str] = field(default_factory=set)
    last_trace: str | None = None

    def update(self, service: str, stack_trace: str | None = None) -> None:
        self.count += 1
        self.last_seen = datetime.now()
        self.services.add(service)
        if stack_trace:
            self.last_trace = stack_trace

    @property
    def age_seconds(self) -> float:
        return (datetime.now() - self.first_seen).total_seconds()

class ErrorAggregator:
    """Collects error occurrences and reports them in groups."""

    def __init__(self, config: ErrorAggregationConfig):
        self._groups: dict[GroupKey, ErrorGroup] = {}
        self._lock = threading.Lock()
        self._config = config
        self.logger = logging.getLogger('parpass.errors')

    @property
    def pending(self) -> dict[str, ErrorGroup]:
        """Unreported groups by message."""
        with self._lock:
            return {group.message: group for group in self._groups.values()}

    def _key(self, message: str, service: str, code: str | None) -> GroupKey:
        parts = {'message': message, 'service': service, 'code': code or ''}
        fields = [name for name in self._config.categorize_by if name in parts] or ['message']
        return tuple(parts[name] for name in fields)

    def add_error(
        self,
        message: str,
        service: str,
        stack_trace: str | TracebackType | None = None,
        code: str | None = None
    ) -> None:
        """Record one occurrence, reporting its group if it is due.

        Args:
            message: Error message
            service: Service where the error occurred
            stack_trace: Formatted trace or traceback object
            code: Error code value, when the error has one
        """
        if not self._config.enabled:
            return

        if isinstance(stack_trace, TracebackType):
            stack_trace = ''.join(traceback.format_tb(stack_trace))

        key = self._key(message, service, code)
        with self._lock:
            group = self._groups.setdefault(key, ErrorGroup(message=message, code=code))
            group.update(service, stack_trace)

            if group.count >= self._config.error_threshold or group.age_seconds >= self._config.time_threshold:
                del self._groups[key]
                self._report(group)

    def _report(self, group: ErrorGroup) -> None:
        services = ', '.join(sorted(group.services))
        code = f" [{group.code}]" if group.code else ""
        self.logger.error(f"{group.message}{code} x{group.count} in {services}")
        if group.last_trace and group.last_trace.strip():
            self.logger.debug(f"Last stack trace:\n{group.last_trace}")

    def shutdown(self) -> None:
        """Report whatever is still pending."""
        if not self._config.enabled:
            return

        with self._lock:
            groups = list(self._groups.values())
            self._groups.clear()
        for group in groups:
            self._report(group)

_error_aggregator: ErrorAggregator | None = None

def init_error_aggregator(config: ErrorAggregationConfig) -> ErrorAggregator:
    """Install the process-wide aggregator."""
    global _error_aggregator
    _error_aggregator = ErrorAggregator(config)
    return _error_aggregator

def get_error_aggregator() -> ErrorAggregator | None:
    return _error_aggregator

def aggregate_error(
    message: str,
    service: str,
    stack_trace: str | TracebackType | None = None,
    code: str | None = None
) -> None:
    """Record an error with the process-wide aggregator, if one is installed."""
    aggregator = get_error_aggregator()
    if aggregator is None:
        return
    aggregator.add_error(message, service, stack_trace, code)
