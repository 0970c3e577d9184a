# src/personio_client/core/token_cache.py
"""
Thread-safe bearer token cache.

The cache is an explicit two-state machine:

    EMPTY ──(credential exchange)──▶ POPULATED ──(rotated header)──▶ POPULATED

There is no way back to EMPTY from the request pipeline: an expired or
revoked token is only discovered when the next request fails.
"""

import re
import threading
from enum import Enum
from typing import Callable, Optional

_BEARER_PREFIX = re.compile(r'^bearer(?:\s+|$)', re.IGNORECASE)


class TokenState(Enum):
    """Token cache states."""
    EMPTY = "empty"
    POPULATED = "populated"


def strip_bearer_prefix(header_value: str) -> str:
    """
    Remove a case-insensitive "Bearer " prefix.

    Examples:
        >>> strip_bearer_prefix('Bearer abc')
        'abc'
        >>> strip_bearer_prefix('bearer abc')
        'abc'
        >>> strip_bearer_prefix('abc')
        'abc'
    """
    return _BEARER_PREFIX.sub('', header_value.strip(), count=1)


class TokenCache:
    """
    Holds at most one bearer token.

    A single lock guards read-check-fetch-write so that concurrent callers
    perform at most one credential exchange, and nobody observes a token
    while it is being replaced.

    Example:
        >>> cache = TokenCache()
        >>> cache.state
        <TokenState.EMPTY: 'empty'>
        >>> cache.get_or_fetch(lambda: 'T1')
        'T1'
        >>> cache.refresh('Bearer T2')
        True
        >>> cache.token
        'T2'
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._state = TokenState.EMPTY
        self._token: Optional[str] = None

    @property
    def state(self) -> TokenState:
        with self._lock:
            return self._state

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    def get_or_fetch(self, fetcher: Callable[[], str]) -> str:
        """
        Return cached token, exchanging credentials first if EMPTY.

        The fetcher runs inside the critical section. If it raises, the
        cache stays EMPTY and the error propagates.

        Args:
            fetcher: Callable performing the credential exchange

        Returns:
            Current token
        """
        with self._lock:
            if self._state is TokenState.EMPTY:
                self._store(fetcher())
            return self._token

    def refresh(self, header_value: Optional[str]) -> bool:
        """
        Replace token with value from an Authorization header.

        Args:
            header_value: Raw header value, "Bearer " prefix optional

        Returns:
            True if the token was replaced, False for empty values
        """
        if not header_value:
            return False

        token = strip_bearer_prefix(header_value)
        if not token:
            return False

        with self._lock:
            self._store(token)
        return True

    def reset(self):
        """Drop the token. Not used by the request pipeline."""
        with self._lock:
            self._state = TokenState.EMPTY
            self._token = None

    def _store(self, token: str):
        self._token = token
        self._state = TokenState.POPULATED

    def __repr__(self) -> str:
        return f"TokenCache(state={self.state.value})"
