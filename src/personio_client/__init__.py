"""Personio Client - Personio HR API client with token handling and typed errors."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.api_client import PersonioApiClient
from .core.authenticator import Authenticator, Credentials
from .core.config import BASE_URL, USER_AGENT, PersonioClientConfig, TimeoutConfig
from .core.exceptions import (
    PersonioException,
    ApiClientError,
    InvalidArgument,
    ConfigurationError,
    TransportError,
    InvalidResponseError,
)
from .core.messages import InboundResponse, OutboundRequest
from .core.token_cache import TokenCache, TokenState
from .core.transport import RequestsTransport, Transport
from .core.logging import LoggingConfig
from .core.env_config import client_from_env, load_from_env
from .simple_api import SimpleApi

# Users configure logging themselves via logging.getLogger('personio_client')
logging.getLogger('personio_client').addHandler(logging.NullHandler())

try:
    __version__ = version("personio-client")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    # Client
    "PersonioApiClient",
    "SimpleApi",
    "Authenticator",
    "Credentials",
    "TokenCache",
    "TokenState",

    # Transport
    "Transport",
    "RequestsTransport",
    "OutboundRequest",
    "InboundResponse",

    # Config
    "BASE_URL",
    "USER_AGENT",
    "PersonioClientConfig",
    "TimeoutConfig",
    "LoggingConfig",
    "load_from_env",
    "client_from_env",

    # Exceptions
    "PersonioException",
    "ApiClientError",
    "InvalidArgument",
    "ConfigurationError",
    "TransportError",
    "InvalidResponseError",

    "__version__",
]
