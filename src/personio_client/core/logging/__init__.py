"""
Logging system for Personio Client.

Example:
    >>> from personio_client.core.logging import LoggingConfig, configure_logging
    >>>
    >>> logger = configure_logging(LoggingConfig.create(level="DEBUG", format="json"))
    >>> logger.info("Request sent", method="GET", status_code=200)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import PersonioLogger, get_logger, configure_logging
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .handlers import ExtraFieldsFilter, create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "PersonioLogger",
    "get_logger",
    "configure_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Handlers
    "ExtraFieldsFilter",
    "create_console_handler",
    "create_file_handler",
]
