# src/personio_client/core/transport.py
"""
Transport capability consumed by the client.

The client only needs ``send(request) -> response``. Any HTTP library can
be plugged in by implementing :class:`Transport`; :class:`RequestsTransport`
is the default and is built on ``requests``.
"""

from abc import ABC, abstractmethod
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from .config import TimeoutConfig
from .exceptions import TransportError
from .messages import InboundResponse, OutboundRequest
from .session_manager import ThreadSafeSessionManager


class Transport(ABC):
    """
    HTTP send primitive.

    Implementations must return a response for every status code
    (including 4xx/5xx) and raise TransportError only when no response
    could be obtained.
    """

    @abstractmethod
    def send(self, request: OutboundRequest) -> InboundResponse:
        """
        Send request.

        Raises:
            TransportError: Connection refused, timeout, DNS, SSL, ...
        """

    def close(self) -> None:
        """Release resources. Default: nothing to release."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class RequestsTransport(Transport):
    """
    Transport on top of requests.

    Features:
        - Thread-local sessions (ThreadSafeSessionManager)
        - Connect/read timeouts from TimeoutConfig
        - No urllib3 retries: failures are surfaced once

    Example:
        >>> transport = RequestsTransport(timeout=TimeoutConfig(connect=3, read=10))
        >>> response = transport.send(OutboundRequest('GET', 'https://api.personio.de/v1/'))
    """

    def __init__(
        self,
        timeout: Optional[TimeoutConfig] = None,
        verify_ssl: bool = True,
    ):
        self.timeout = timeout or TimeoutConfig()
        self.verify_ssl = verify_ssl
        self._session_manager = ThreadSafeSessionManager(session_factory=self._create_session)

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=0)
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        return session

    @property
    def session(self) -> requests.Session:
        """Session of the current thread."""
        return self._session_manager.get_session()

    def send(self, request: OutboundRequest) -> InboundResponse:
        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                data=request.body,
                timeout=self.timeout.as_tuple(),
                verify=self.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", request.url) from e
        except requests.exceptions.ProxyError as e:
            raise TransportError(f"Proxy error: {e}", request.url) from e
        except requests.exceptions.SSLError as e:
            raise TransportError(f"SSL error: {e}", request.url) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {e}", request.url) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}", request.url) from e

        return InboundResponse(
            status_code=response.status_code,
            reason=response.reason or '',
            headers=response.headers,
            body=response.content,
            url=response.url,
        )

    def close(self) -> None:
        """Close sessions from all threads."""
        self._session_manager.close_all()
