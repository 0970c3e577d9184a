# src/personio_client/core/request_builder.py
"""
Construction of outbound requests.

Builds URLs and requests independently of authentication state:

- URL: base URL + endpoint + RFC 3986 query string
- Headers: Accept, User-Agent and Content-Type for JSON bodies
- Body: JSON-encoded data, or nothing at all

Malformed input that can be detected before any I/O (unencodable
parameters or body data) raises InvalidArgument.
"""

import json
from typing import Any, Iterator, List, Mapping, Optional, Tuple
from urllib.parse import quote

from .config import BASE_URL, default_user_agent
from .exceptions import InvalidArgument
from .messages import OutboundRequest

_SCALARS = (str, int, float)


def build_url(
    endpoint: str,
    params: Optional[Mapping[str, Any]] = None,
    base_url: str = BASE_URL,
) -> str:
    """
    Build absolute URL for an endpoint.

    Args:
        endpoint: Endpoint path relative to the base URL (not validated)
        params: Query parameters; nested mappings and sequences are
            flattened with bracket notation
        base_url: API base URL

    Returns:
        Absolute URL, without "?" when params are empty

    Raises:
        InvalidArgument: If params cannot be encoded

    Examples:
        >>> build_url('company/employees')
        'https://api.personio.de/v1/company/employees'

        >>> build_url('company/time-offs', {'start_date': '2020-01-01', 'limit': 10})
        'https://api.personio.de/v1/company/time-offs?start_date=2020-01-01&limit=10'
    """
    url = base_url + endpoint

    if params:
        query = encode_query(params)
        if query:
            url += '?' + query

    return url


def encode_query(params: Mapping[str, Any]) -> str:
    """
    Encode params as RFC 3986 query string joined with "&".

    Spaces become "%20", "~" stays unescaped. Booleans are encoded as
    1/0 and None values are skipped.

    Examples:
        >>> encode_query({'name': 'Jane Doe', 'employees': [1, 2]})
        'name=Jane%20Doe&employees%5B0%5D=1&employees%5B1%5D=2'
    """
    if not isinstance(params, Mapping):
        raise InvalidArgument(
            f"Query parameters must be a mapping, got {type(params).__name__}"
        )

    pairs = []
    for name, value in _flatten(params, prefix=None):
        try:
            pairs.append(f"{quote(name, safe='')}={quote(value, safe='')}")
        except UnicodeEncodeError as e:
            raise InvalidArgument.because(f"Unable to encode query parameter {name!r} as UTF-8", e)

    return '&'.join(pairs)


def _flatten(value: Any, prefix: Optional[str]) -> Iterator[Tuple[str, str]]:
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    else:
        raise InvalidArgument(f"Unable to encode query parameter value of type {type(value).__name__}")

    for key, item in items:
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            raise InvalidArgument(f"Query parameter names must be strings, got {key!r}")

        name = str(key) if prefix is None else f"{prefix}[{key}]"

        if item is None:
            continue
        if isinstance(item, bool):
            yield name, '1' if item else '0'
        elif isinstance(item, _SCALARS):
            yield name, str(item)
        elif isinstance(item, (Mapping, list, tuple)):
            yield from _flatten(item, name)
        else:
            raise InvalidArgument(
                f"Unable to encode query parameter {name!r} of type {type(item).__name__}"
            )


def encode_json(data: Any) -> bytes:
    """
    Serialize request data as JSON.

    Raises:
        InvalidArgument: If data is not JSON serializable
    """
    try:
        return json.dumps(data, allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise InvalidArgument.because(f"Unable to encode request data as JSON: {e}", e)


def build_request(
    method: str,
    url: str,
    headers: Optional[Mapping[str, str]] = None,
    data: Optional[Any] = None,
    user_agent: Optional[str] = None,
) -> OutboundRequest:
    """
    Build an outbound request.

    Args:
        method: HTTP method
        url: Absolute URL
        headers: Extra headers (applied before the defaults)
        data: Request data, JSON-encoded when non-empty
        user_agent: User-Agent value (product token + requests token by default)

    Returns:
        OutboundRequest without Authorization header

    Example:
        >>> request = build_request('POST', url, data={'employee': 1})
        >>> request.header('Content-Type')
        'application/json'
    """
    merged: List[Tuple[str, str]] = list((headers or {}).items())
    merged.append(('Accept', 'application/json'))
    merged.append(('User-Agent', user_agent or default_user_agent()))

    body = None
    if data:
        body = encode_json(data)
        merged.append(('Content-Type', 'application/json'))

    request = OutboundRequest(method, url, body=body)
    for name, value in merged:
        request = request.with_header(str(name), value)

    return request
