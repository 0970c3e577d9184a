# src/personio_client/core/authenticator.py
"""
Credential-to-token exchange and request authentication.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .config import BASE_URL
from .error_handler import ErrorHandler
from .exceptions import ApiClientError, InvalidArgument, InvalidResponseError
from .logging import PersonioLogger
from .messages import InboundResponse, OutboundRequest
from .request_builder import build_request, build_url
from .token_cache import TokenCache
from ..utils.sanitizer import mask_url

AUTH_ENDPOINT = 'auth'

SendFunc = Callable[[OutboundRequest], InboundResponse]


@dataclass(frozen=True)
class Credentials:
    """
    Client credentials issued in the Personio API settings.

    Attributes:
        client_id: Client identifier
        client_secret: Client secret (masked in repr)
    """

    client_id: str
    client_secret: str = field(repr=False)

    def __post_init__(self):
        for name in ('client_id', 'client_secret'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise InvalidArgument(f"{name} must be a non-empty string")
            try:
                value.encode('utf-8')
            except UnicodeEncodeError as e:
                raise InvalidArgument.because(f"{name} must be encodable as UTF-8", e)


class Authenticator:
    """
    Attaches bearer tokens to requests.

    The token comes from the TokenCache; an EMPTY cache triggers a
    credential exchange through ``send``, which must be the
    unauthenticated send path (the exchange never authenticates itself).

    Args:
        credentials: Client credentials
        cache: Token cache shared with the client
        send: Callable sending a request without authentication;
            transport failures must already be wrapped in ApiClientError
        base_url: API base URL
        user_agent: User-Agent for the exchange request
        logger: Logger
    """

    def __init__(
        self,
        credentials: Credentials,
        cache: TokenCache,
        send: SendFunc,
        base_url: str = BASE_URL,
        user_agent: Optional[str] = None,
        logger: Optional[PersonioLogger] = None,
    ):
        self.credentials = credentials
        self.cache = cache
        self._send = send
        self._base_url = base_url
        self._user_agent = user_agent
        self._logger = logger or PersonioLogger()

    def authenticate(self, request: OutboundRequest) -> OutboundRequest:
        """Return a copy of request with ``Authorization: Bearer <token>``."""
        token = self.cache.get_or_fetch(self.fetch_token)
        return request.with_header('Authorization', f"Bearer {token}")

    def fetch_token(self) -> str:
        """
        Exchange credentials for a token.

        Raises:
            ApiClientError: Transport failure, HTTP error, unsuccessful
                envelope or missing token
        """
        url = build_url(
            AUTH_ENDPOINT,
            {'client_id': self.credentials.client_id, 'client_secret': self.credentials.client_secret},
            base_url=self._base_url,
        )
        request = build_request('POST', url, user_agent=self._user_agent)

        self._logger.debug("Fetching authorization token", method=request.method, url=mask_url(request.url))
        response = self._send(request)

        if response.status_code >= 400:
            self._logger.warning(
                "Authorization request rejected", status_code=response.status_code
            )
            raise ApiClientError.from_request_and_response(request, response)

        data = self._decode(response)

        if not ErrorHandler.is_successful(response):
            raise ApiClientError.from_request_and_reason(request, "Unable to fetch authorization token")

        payload = data.get('data')
        token = payload.get('token') if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise ApiClientError.from_request_and_reason(request, "Unable to get token from authorization response")

        self._logger.info("Authorization token fetched", status_code=response.status_code)
        return token

    @staticmethod
    def _decode(response: InboundResponse) -> Any:
        try:
            data = response.json()
        except InvalidResponseError:
            return {}
        return data if isinstance(data, dict) else {}
