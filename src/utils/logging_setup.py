"""
Logging configuration for treeconcat.

Provides environment-aware logging that:
- Writes diagnostics to stderr so stdout stays free for command output
- Outputs JSON lines when TREECONCAT_LOG_FORMAT=json
- Provides human-readable output otherwise
- Supports a rotating log file next to the console handler
- Includes custom TRACE level for per-entry ignore decisions
"""

import sys
import logging
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Any

# Define TRACE level (lower number = more detailed)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

DEFAULT_LEVEL = 'WARNING'
HUMAN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


def add_trace_to_logger():
    """Ensure trace method is available on all logger instances"""
    if not hasattr(logging.Logger, 'trace'):
        logging.Logger.trace = trace


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log collectors"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage(),
            'pid': os.getpid(),
        }

        if hasattr(record, 'extra'):
            log_data.update(record.extra)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def resolve_level(log_level: Optional[str] = None) -> int:
    """
    Turn a level name into a numeric level.

    TREECONCAT_LOG_LEVEL takes precedence over LOG_LEVEL when no explicit
    level is given. Unknown names fall back to the default level.
    """
    level_str = (log_level
                 or os.environ.get('TREECONCAT_LOG_LEVEL')
                 or os.environ.get('LOG_LEVEL', DEFAULT_LEVEL))

    if level_str.upper() == 'TRACE':
        return TRACE_LEVEL
    level = logging.getLevelName(level_str.upper())
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LEVEL)


def configure_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> None:
    """
    Configure logging based on environment.

    Args:
        log_level: Override log level (defaults to TREECONCAT_LOG_LEVEL / LOG_LEVEL env vars or WARNING)
        log_file: Optional path of a rotating log file
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
    """
    add_trace_to_logger()
    level = resolve_level(log_level)

    # Clear any existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers = []

    json_output = os.environ.get('TREECONCAT_LOG_FORMAT', '').lower() == 'json'

    console_handler = logging.StreamHandler(sys.stderr)
    if json_output:
        console_handler.setFormatter(JsonFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(HUMAN_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setFormatter(logging.Formatter(HUMAN_FORMAT))
        root_logger.addHandler(file_handler)

    root_logger.setLevel(level)

    logger = logging.getLogger('treeconcat')
    logger.debug(f"Logging configured - Level: {logging.getLevelName(level)}, JSON: {json_output}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    add_trace_to_logger()
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with additional context fields.

    Args:
        logger: Logger instance
        level: Log level (e.g., logging.INFO)
        message: Log message
        **context: Additional fields to include in structured logs
    """
    extra = {'extra': context} if context else {}
    logger.log(level, message, extra=extra)
