"""Core request pipeline: builder, authentication, transport, error mapping."""

from .api_client import PersonioApiClient
from .authenticator import Authenticator, Credentials
from .config import BASE_URL, USER_AGENT, PersonioClientConfig, TimeoutConfig
from .error_handler import ErrorHandler
from .exceptions import (
    PersonioException,
    ApiClientError,
    InvalidArgument,
    ConfigurationError,
    TransportError,
    InvalidResponseError,
)
from .messages import InboundResponse, OutboundRequest
from .request_builder import build_request, build_url, encode_query
from .token_cache import TokenCache, TokenState
from .transport import RequestsTransport, Transport

__all__ = [
    "PersonioApiClient",
    "Authenticator",
    "Credentials",
    "BASE_URL",
    "USER_AGENT",
    "PersonioClientConfig",
    "TimeoutConfig",
    "ErrorHandler",
    "PersonioException",
    "ApiClientError",
    "InvalidArgument",
    "ConfigurationError",
    "TransportError",
    "InvalidResponseError",
    "InboundResponse",
    "OutboundRequest",
    "build_request",
    "build_url",
    "encode_query",
    "TokenCache",
    "TokenState",
    "RequestsTransport",
    "Transport",
]
