"""Logging setup for the ParPass client.

Console output goes to stderr so command output on stdout stays clean.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path

from parpass.config.logging_config import LoggingConfig
from parpass.config.logging_filters import SensitiveDataFilter
from parpass.config.types import AppConfig


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with the structured message context."""

    def __init__(self, include_timestamp: bool = True):
        self.include_timestamp = include_timestamp
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        data = {
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if self.include_timestamp:
            data['timestamp'] = datetime.fromtimestamp(record.created).isoformat()

        context = getattr(record, 'context', None)
        if context:
            data['context'] = context

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        return json.dumps(data, default=str)

class ColoredFormatter(logging.Formatter):
    """Console formatter coloring the level name."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__('%(asctime)s %(levelname)s %(name)s: %(message)s', datefmt='%H:%M:%S')
        self.use_color = use_color

    def formatMessage(self, record: logging.LogRecord) -> str:
        if not self.use_color or record.levelname not in self.COLORS:
            return super().formatMessage(record)
        plain = record.levelname
        record.levelname = f"{self.COLORS[plain]}{plain}{self.RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain

def get_file_handler(
    log_file: str | Path,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.handlers.RotatingFileHandler:
    """Rotating file handler; the log directory is created if missing."""
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    return file_handler

def setup_logging(config: AppConfig | None = None, verbose: bool = False, log_file: str | None = None) -> None:
    """Set up logging configuration.

    Args:
        config: Application configuration; defaults apply when omitted
        verbose: Log at the verbose level instead of the default level
        log_file: Optional log file overriding the configured one
    """
    logging_config = config.logging if config is not None else LoggingConfig()
    level_name = logging_config.verbose_level if verbose else logging_config.default_level
    level = getattr(logging, level_name.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    sensitive_filter = None
    if logging_config.sensitive_data.enabled:
        fields = set(logging_config.sensitive_data.global_fields) or None
        sensitive_filter = SensitiveDataFilter(fields, logging_config.sensitive_data.mask_pattern)

    if logging_config.console.enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(use_color=logging_config.console.color and sys.stderr.isatty()))
        if sensitive_filter:
            console_handler.addFilter(sensitive_filter)
        root_logger.addHandler(console_handler)

    file_path = log_file or (logging_config.file.path if logging_config.file.enabled else None)
    if file_path:
        formatter: logging.Formatter
        if logging_config.file.format == 'json':
            formatter = JsonFormatter(include_timestamp=True)
        else:
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler = get_file_handler(
            file_path,
            formatter,
            logging_config.file.max_size_mb * 1024 * 1024,
            logging_config.file.backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        if sensitive_filter:
            file_handler.addFilter(sensitive_filter)
        root_logger.addHandler(file_handler)

    # Quiet chatty libraries
    for library, library_level in logging_config.libraries.items():
        logging.getLogger(library).setLevel(getattr(logging, library_level.upper(), logging.WARNING))
