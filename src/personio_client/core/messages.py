"""
Request and response value objects passed between the pipeline stages.

Both are transport-agnostic: the default transport converts them to and
from ``requests`` objects, a test stub can build them directly.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from .exceptions import InvalidResponseError


def _headers(values: Optional[Mapping[str, str]] = None) -> CaseInsensitiveDict:
    return CaseInsensitiveDict(values or {})


@dataclass(frozen=True)
class OutboundRequest:
    """
    Outbound HTTP request.

    Attributes:
        method: HTTP method (GET, POST, etc.)
        url: Absolute request URL including query string
        headers: Case-insensitive header mapping, last write wins
        body: Raw body or None for requests without data

    Example:
        >>> request = OutboundRequest('GET', 'https://api.personio.de/v1/company/employees')
        >>> request = request.with_header('Authorization', 'Bearer abc')
    """

    method: str
    url: str
    headers: CaseInsensitiveDict = field(default_factory=_headers)
    body: Optional[bytes] = None

    def __post_init__(self):
        object.__setattr__(self, 'method', self.method.upper())
        object.__setattr__(self, 'headers', _headers(self.headers))

    def with_header(self, name: str, value: str) -> 'OutboundRequest':
        """Return a copy with ``name`` set to ``value`` (overwrites)."""
        headers = self.headers.copy()
        headers[name] = value
        return replace(self, headers=headers)

    def header(self, name: str, default: str = '') -> str:
        return self.headers.get(name, default)


@dataclass(frozen=True)
class InboundResponse:
    """
    Response returned by a transport.

    Only the ``Authorization`` header and the JSON envelope
    (``success``, ``error.code``, ``error.message``) mean anything to
    the client; everything else is handed to the caller untouched.
    """

    status_code: int
    reason: str = ''
    headers: CaseInsensitiveDict = field(default_factory=_headers)
    body: bytes = b''
    url: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'headers', _headers(self.headers))

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    def header(self, name: str, default: str = '') -> str:
        return self.headers.get(name, default)

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            InvalidResponseError: Empty body or invalid JSON
        """
        if not self.body:
            raise InvalidResponseError("Response body is empty")

        try:
            return json.loads(self.body)
        except (ValueError, UnicodeDecodeError) as e:
            raise InvalidResponseError(f"Response body is not valid JSON: {e}") from e
