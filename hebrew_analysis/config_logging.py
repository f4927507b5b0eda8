"""
Hebrew Analysis Logging & Errors
================================
Structured logging and the exception hierarchy shared by the plugin.

Logging is configured from the environment:
- HEBREW_LOG_LEVEL (default INFO)
- HEBREW_LOG_FORMAT (json or text, default text)
- HEBREW_LOG_FILE (optional path, rotated)
"""

import os
import sys
import json
import logging
import uuid
import time
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pathlib import Path
from dataclasses import dataclass
from contextlib import contextmanager
from contextvars import ContextVar

__version__ = "1.0.0"
VERSION = __version__

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5


# =============================================================================
# LOG CONFIGURATION
# =============================================================================

@dataclass
class LogConfig:
    """Logging configuration."""
    log_level: str = "INFO"
    log_format: str = "text"  # Options: json, text
    log_file: Optional[Path] = None
    log_to_console: bool = True

    @classmethod
    def from_env(cls) -> 'LogConfig':
        """Load logging configuration from environment variables."""
        log_file = os.environ.get('HEBREW_LOG_FILE')
        return cls(
            log_level=os.environ.get('HEBREW_LOG_LEVEL', 'INFO'),
            log_format=os.environ.get('HEBREW_LOG_FORMAT', 'text'),
            log_file=Path(log_file) if log_file else None,
            log_to_console=os.environ.get('HEBREW_LOG_CONSOLE', 'true').lower() == 'true',
        )


_log_config: Optional[LogConfig] = None


def get_log_config() -> LogConfig:
    """Get or create the global logging configuration."""
    global _log_config
    if _log_config is None:
        _log_config = LogConfig.from_env()
    return _log_config


def reset_log_config():
    """Reset the global logging configuration (for testing)."""
    global _log_config
    _log_config = None


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

_correlation_id: ContextVar[Optional[str]] = ContextVar('hebrew_correlation_id', default=None)


def new_correlation_id() -> str:
    """Start a new correlation ID for the current context."""
    correlation_id = uuid.uuid4().hex[:12]
    _correlation_id.set(correlation_id)
    return correlation_id


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


class CorrelationFilter(logging.Filter):
    """Stamps every record with the current correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or '-'
        return True


_CORRELATION_FILTER = CorrelationFilter()


class TextFormatter(logging.Formatter):
    """Plain text lines with the structured context appended as key=value."""

    def __init__(self):
        super().__init__('%(asctime)s [%(levelname)s] %(name)s [%(correlation_id)s] - %(message)s')

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, 'correlation_id'):
            record.correlation_id = '-'
        line = super().format(record)
        context = getattr(record, 'context', None)
        if context:
            line += ' | ' + ' '.join(f"{k}={v}" for k, v in context.items())
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per record; structured context is merged in."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'correlation_id': getattr(record, 'correlation_id', None),
            'message': record.getMessage(),
        }
        for key, value in (getattr(record, 'context', None) or {}).items():
            log_data.setdefault(key, value)

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class StructuredLogger:
    """
    Wrapper over a stdlib logger taking structured context as keywords.

        logger.info("Trying path", path="/dict", loader="HSpell")

    The keywords travel on the record as ``record.context``; the configured
    formatter (text or json) decides how they are written.
    """

    def __init__(self, name: str, config: Optional[LogConfig] = None):
        self.name = name
        self.config = config or get_log_config()
        self._setup_logger()

    def _setup_logger(self):
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))
        self.logger.addFilter(_CORRELATION_FILTER)
        self.logger.handlers.clear()

        formatter = JsonFormatter() if self.config.log_format == 'json' else TextFormatter()

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if self.config.log_file:
            from logging.handlers import RotatingFileHandler
            file_handler = RotatingFileHandler(
                self.config.log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def _log(self, level: int, message: str, exc_info: bool = False, **context):
        self.logger.log(level, message, exc_info=exc_info, extra={'context': context})

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, **context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, **context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, **context)

    def error(self, message: str, exc_info: bool = False, **context):
        self._log(logging.ERROR, message, exc_info=exc_info, **context)

    def exception(self, message: str, **context):
        """Log at error level with the active traceback."""
        self._log(logging.ERROR, message, exc_info=True, **context)

    def critical(self, message: str, **context):
        self._log(logging.CRITICAL, message, **context)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Log start, completion or failure of a block with its duration."""
        start_time = time.monotonic()
        self.info(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
        except Exception as e:
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round((time.monotonic() - start_time) * 1000, 2), **context)
            raise
        self.info(f"{operation} completed", operation=operation, status='completed',
                  duration_ms=round((time.monotonic() - start_time) * 1000, 2), **context)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name, get_log_config())


# =============================================================================
# ERROR HANDLING
# =============================================================================

class HebrewAnalysisError(Exception):
    """Base exception for the Hebrew analysis plugin."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 status_code: int = 500, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ValidationError(HebrewAnalysisError):
    """Input validation error."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400,
                         details={'field': field, **kwargs})


class DictionaryLoadError(HebrewAnalysisError):
    """A dictionary path exists but could not be read or parsed."""
    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        super().__init__(message, code="DICTIONARY_LOAD_ERROR", status_code=500,
                         details={'path': path, **kwargs})
        self.path = path


class DictionaryNotFoundError(HebrewAnalysisError):
    """No override or candidate path produced a dictionary."""
    def __init__(self, message: str = "Could not load any dictionary. Aborting!",
                 attempts: Optional[list] = None, **kwargs):
        attempts = list(attempts or [])
        super().__init__(message, code="DICTIONARY_NOT_FOUND", status_code=500,
                         details={'attempts': [a.to_dict() for a in attempts], **kwargs})
        self.attempts = attempts

    @property
    def attempted_paths(self) -> list:
        return [a.path for a in self.attempts]


class DictionaryAlreadyLoadedError(HebrewAnalysisError):
    """The shared dictionary slot was written twice."""
    def __init__(self, message: str = "Dictionary has already been loaded", **kwargs):
        super().__init__(message, code="DICTIONARY_ALREADY_LOADED", status_code=500, details=kwargs)


class DictionaryNotLoadedError(HebrewAnalysisError):
    """The shared dictionary was read before it was set."""
    def __init__(self, message: str = "Dictionary has not been loaded", **kwargs):
        super().__init__(message, code="DICTIONARY_NOT_LOADED", status_code=503, details=kwargs)


class PrivilegeError(HebrewAnalysisError):
    """Restricted caller attempted filesystem access without a capability."""
    def __init__(self, message: str = "Filesystem access denied", **kwargs):
        super().__init__(message, code="FORBIDDEN", status_code=403, details=kwargs)
