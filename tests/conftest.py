"""
Pytest configuration and fixtures for personio-client tests.
"""

import json
import logging
from http.client import responses as reason_phrases
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qs, urlsplit

import pytest
import responses as responses_lib

from personio_client.core.api_client import PersonioApiClient
from personio_client.core.config import BASE_URL
from personio_client.core.messages import InboundResponse, OutboundRequest
from personio_client.core.transport import Transport

Outcome = Union[InboundResponse, BaseException, Callable[[OutboundRequest], InboundResponse]]


def make_response(
    status: int = 200,
    json_body: Any = None,
    body: Optional[bytes] = None,
    headers: Optional[Dict[str, str]] = None,
    reason: Optional[str] = None,
) -> InboundResponse:
    """Build InboundResponse with a JSON or raw body."""
    if body is None:
        body = json.dumps(json_body).encode() if json_body is not None else b''
    return InboundResponse(
        status_code=status,
        reason=reason if reason is not None else reason_phrases.get(status, ''),
        headers=headers or {},
        body=body,
    )


class StubTransport(Transport):
    """
    In-memory transport.

    Outcomes are registered per (method, endpoint). With several outcomes
    they are consumed in order and the last one sticks.
    """

    def __init__(self):
        self.requests: List[OutboundRequest] = []
        self._routes: Dict[Tuple[str, str], List[Outcome]] = {}
        self.closed = False

    def add(self, method: str, endpoint: str, outcome: Optional[Outcome] = None, **kwargs) -> None:
        if outcome is None:
            outcome = make_response(**kwargs)
        key = (method.upper(), urlsplit(BASE_URL + endpoint).path)
        self._routes.setdefault(key, []).append(outcome)

    def add_auth(self, token: str = "T1") -> None:
        self.add('POST', 'auth', json_body={'success': True, 'data': {'token': token}})

    def send(self, request: OutboundRequest) -> InboundResponse:
        self.requests.append(request)

        key = (request.method, urlsplit(request.url).path)
        outcomes = self._routes.get(key)
        if not outcomes:
            raise AssertionError(f"Unexpected request: {key}")

        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(request)
        return outcome

    def requests_to(self, endpoint: str) -> List[OutboundRequest]:
        path = urlsplit(BASE_URL + endpoint).path
        return [r for r in self.requests if urlsplit(r.url).path == path]

    def close(self) -> None:
        self.closed = True


def query_of(request: OutboundRequest) -> Dict[str, List[str]]:
    return parse_qs(urlsplit(request.url).query)


@pytest.fixture
def transport():
    """Stub transport without registered routes."""
    return StubTransport()


@pytest.fixture
def client(transport):
    """Client with credentials abc/xyz on the stub transport."""
    client = PersonioApiClient.with_credentials("abc", "xyz", transport=transport)
    yield client
    client.close()


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handler/propagation changes made by configured loggers."""
    yield
    logger = logging.getLogger('personio_client')
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
