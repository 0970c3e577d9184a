"""
Main logger for Personio Client.
"""

import logging
from typing import Any, List, Optional

from .config import LoggingConfig, LogLevel
from .formatters import get_formatter
from .handlers import ExtraFieldsFilter, create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data

DEFAULT_LOGGER_NAME = "personio_client"


class PersonioLogger:
    """
    Logger with sanitized structured fields.

    Keyword arguments of the logging methods become ``extra`` fields of the
    record after passing through mask_sensitive_data, so secrets and tokens
    never reach a handler.

    Without a config the logger installs no handlers and propagates to the
    application's logging setup. With a config it adds its own handlers next
    to those of other configured instances sharing the logger name, and the
    logger stops propagating until the last of them is closed.

    Example:
        >>> logger = PersonioLogger(LoggingConfig.create(level="DEBUG", format="json"))
        >>> logger.info("Token fetched", status_code=200)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = DEFAULT_LOGGER_NAME):
        self.config = config
        self.name = name
        self._closed = False
        self._logger = logging.getLogger(name)
        self._handlers: List[logging.Handler] = []

        if config is None:
            return

        level = self._get_level(config.level)
        # Handlers filter by their own level; the shared logger passes the lowest one
        if self._logger.level == logging.NOTSET or level < self._logger.level:
            self._logger.setLevel(level)
        self._logger.propagate = False

        filters = []
        if config.extra_fields:
            filters.append(ExtraFieldsFilter(config.extra_fields))

        formatter = get_formatter(config.format.value)

        if config.enable_console:
            self._add_handler(create_console_handler(level, formatter, filters))

        if config.enable_file and config.file_path:
            self._add_handler(create_file_handler(
                file_path=config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=config.max_bytes,
                backup_count=config.backup_count,
                filters=filters
            ))

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, level.value)

    @property
    def handlers(self) -> List[logging.Handler]:
        """Handlers installed by this instance."""
        return list(self._handlers)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(message, extra=mask_sensitive_data(kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, extra=mask_sensitive_data(kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(message, extra=mask_sensitive_data(kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(message, extra=mask_sensitive_data(kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log with traceback; call from an exception handler."""
        self._logger.exception(message, extra=mask_sensitive_data(kwargs))

    def _add_handler(self, handler: logging.Handler) -> None:
        self._handlers.append(handler)
        self._logger.addHandler(handler)

    def _remove_handlers(self) -> None:
        for handler in self._handlers:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)
        self._handlers = []

        # Last configured instance gone: hand records back to the application
        if not any(not isinstance(h, logging.NullHandler) for h in self._logger.handlers):
            self._logger.propagate = True
            self._logger.setLevel(logging.NOTSET)

    def close(self) -> None:
        """
        Flush and close the handlers this instance installed.

        Idempotent. Handlers of other instances and of the application
        stay attached.
        """
        if self._closed:
            return

        if self.config is not None:
            self._remove_handlers()

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


_default_logger: Optional[PersonioLogger] = None


def get_logger(config: Optional[LoggingConfig] = None) -> PersonioLogger:
    """
    Get global logger instance.

    Args:
        config: Logging configuration (only used on first call)
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = PersonioLogger(config)

    return _default_logger


def configure_logging(config: LoggingConfig) -> PersonioLogger:
    """Replace global logger with a configured one."""
    global _default_logger

    if _default_logger is not None:
        _default_logger.close()

    _default_logger = PersonioLogger(config)
    return _default_logger
