"""
Pydantic settings for environment configuration.
"""

from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import BASE_URL


class PersonioSettings(BaseSettings):
    """
    Personio client configuration from environment variables.

    Reads from:
    1. Environment variables (PERSONIO_*)
    2. .env file
    3. Defaults

    Example .env file:
        PERSONIO_CLIENT_ID=papi-abc
        PERSONIO_CLIENT_SECRET=papi-secret
        PERSONIO_TIMEOUT_READ=15
        PERSONIO_LOG_LEVEL=DEBUG
        PERSONIO_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix='PERSONIO_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Credentials
    client_id: Optional[str] = None
    client_secret: Optional[SecretStr] = None

    base_url: str = Field(default=BASE_URL)

    # Transport
    timeout_connect: float = Field(default=5.0, gt=0)
    timeout_read: float = Field(default=30.0, gt=0)
    verify_ssl: bool = Field(default=True)

    # Logging
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_enable_file: bool = Field(default=False)
    log_file_path: Optional[str] = None

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Base URL must be absolute http(s) and end with "/"."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"base_url must start with http:// or https://, got {v!r}")
        return v if v.endswith('/') else v + '/'

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode='after')
    def validate_log_file_path(self) -> "PersonioSettings":
        """log_file_path is required when log_enable_file=True."""
        if self.log_enable_file and not self.log_file_path:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return self
