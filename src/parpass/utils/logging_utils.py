"""
Logging helpers shared by the API clients and services.

Messages carry their context as a ``key=value`` suffix so a single log line
tells which member and course an operation was about.
"""

import logging
import time
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from functools import wraps
from inspect import signature
from typing import Any
from typing import TypeVar

from typing_extensions import ParamSpec


T = TypeVar('T')
P = ParamSpec('P')

# Context keys never written out, whatever handler ends up formatting them
SECRET_CONTEXT_KEYS = frozenset({'parpass_code', 'code', 'token'})

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)

def format_context(context: dict[str, Any]) -> str:
    """Render context as ``key=value`` pairs, secrets left out."""
    return " ".join(
        f"{key}={value}" for key, value in context.items()
        if key not in SECRET_CONTEXT_KEYS and value is not None
    )

def log_execution(level: str = 'DEBUG', include_args: bool = False) -> Callable[
    [Callable[P, T]], Callable[P, T]
]:
    """Decorator logging entry, duration and failure of a call.

    Failures are logged with their traceback and re-raised unchanged.
    """
    log_level = logging.getLevelName(level.upper())

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            call = func.__name__
            if include_args:
                bound = signature(func).bind(*args, **kwargs)
                call = f"{call}({format_context(dict(bound.arguments))})"

            logger.log(log_level, f"{call} started")
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.warning(
                    f"{call} failed after {time.perf_counter() - started:.3f}s: {e}",
                    exc_info=logger.isEnabledFor(logging.DEBUG)
                )
                raise
            logger.log(log_level, f"{call} completed in {time.perf_counter() - started:.3f}s")
            return result

        return wrapper
    return decorator

class LoggerMixin:
    """Per-module logger with sticky and scoped message context."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__module__)
        self._log_context: dict[str, Any] = {}

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_log_context(self, **kwargs: Any) -> None:
        """Add context to every later message of this object."""
        self._log_context.update(kwargs)

    def clear_log_context(self) -> None:
        self._log_context.clear()

    @contextmanager
    def log_context(self, **kwargs: Any) -> Iterator[None]:
        """Add context for the duration of a block only."""
        saved = dict(self._log_context)
        self._log_context.update(kwargs)
        try:
            yield
        finally:
            self._log_context = saved

    def _log(self, level: int, msg: str, exc_info: Any = None, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        context = {**self._log_context, **kwargs}
        suffix = format_context(context)
        if suffix:
            msg = f"{msg} | {suffix}"
        self._logger.log(level, msg, exc_info=exc_info, extra={'context': context})

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: Any = None, **kwargs: Any) -> None:
        """Log an error, with the traceback when ``exc_info`` is given."""
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)
