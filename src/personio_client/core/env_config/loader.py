"""
Configuration loader from environment variables and .env files.
"""

from typing import Optional

from pydantic import ValidationError

from ..config import PersonioClientConfig, TimeoutConfig, default_user_agent
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig, LogFormat, LogLevel
from .settings import PersonioSettings


def load_settings(env_file: Optional[str] = None, **overrides) -> PersonioSettings:
    """
    Load and validate PersonioSettings.

    Priority (highest to lowest):
    1. **overrides
    2. Environment variables (PERSONIO_*)
    3. .env file
    4. Defaults

    Raises:
        ConfigurationError: Invalid settings
    """
    try:
        if env_file is None:
            return PersonioSettings(**overrides)
        return PersonioSettings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Personio settings: {e}") from e


def config_from_settings(settings: PersonioSettings) -> PersonioClientConfig:
    """Build PersonioClientConfig from validated settings."""
    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig(
            level=LogLevel(settings.log_level),
            format=LogFormat(settings.log_format),
            enable_console=settings.log_enable_console,
            enable_file=settings.log_enable_file,
            file_path=settings.log_file_path,
        )

    return PersonioClientConfig(
        base_url=settings.base_url,
        timeout=TimeoutConfig(connect=settings.timeout_connect, read=settings.timeout_read),
        verify_ssl=settings.verify_ssl,
        user_agent=default_user_agent(),
        logging=logging_config,
    )


def load_from_env(env_file: Optional[str] = None, **overrides) -> PersonioClientConfig:
    """
    Load PersonioClientConfig from environment variables.

    Args:
        env_file: Custom .env file path
        **overrides: Explicit settings (PersonioSettings field names)

    Example:
        >>> config = load_from_env(timeout_read=10)
    """
    return config_from_settings(load_settings(env_file, **overrides))


def client_from_env(env_file: Optional[str] = None, transport=None, **overrides):
    """
    Create PersonioApiClient from environment variables.

    Raises:
        ConfigurationError: Credentials missing or settings invalid

    Example:
        >>> with client_from_env() as client:
        ...     client.get("company/employees")
    """
    from ..api_client import PersonioApiClient

    settings = load_settings(env_file, **overrides)

    secret = settings.client_secret.get_secret_value() if settings.client_secret else None
    if not settings.client_id or not secret:
        raise ConfigurationError(
            "PERSONIO_CLIENT_ID and PERSONIO_CLIENT_SECRET must be set"
        )

    return PersonioApiClient.with_credentials(
        settings.client_id,
        secret,
        transport=transport,
        config=config_from_settings(settings),
    )
