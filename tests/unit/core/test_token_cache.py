"""Tests for TokenCache state machine."""

import threading
import time

import pytest

from personio_client.core.token_cache import TokenCache, TokenState, strip_bearer_prefix


class TestStripBearerPrefix:

    @pytest.mark.parametrize('value, expected', [
        ('Bearer abc', 'abc'),
        ('bearer abc', 'abc'),
        ('BEARER abc', 'abc'),
        ('abc', 'abc'),
        ('Bearer', ''),
        ('Bearer   ', ''),
        ('Bearerabc', 'Bearerabc'),
    ])
    def test_strip(self, value, expected):
        assert strip_bearer_prefix(value) == expected


class TestTokenCache:

    def test_starts_empty(self):
        cache = TokenCache()

        assert cache.state is TokenState.EMPTY
        assert cache.token is None

    def test_get_or_fetch_populates_once(self):
        cache = TokenCache()
        calls = []

        def fetcher():
            calls.append(1)
            return 'T1'

        assert cache.get_or_fetch(fetcher) == 'T1'
        assert cache.get_or_fetch(fetcher) == 'T1'
        assert len(calls) == 1
        assert cache.state is TokenState.POPULATED

    def test_failed_fetch_keeps_cache_empty(self):
        cache = TokenCache()

        def fetcher():
            raise RuntimeError("exchange failed")

        with pytest.raises(RuntimeError):
            cache.get_or_fetch(fetcher)

        assert cache.state is TokenState.EMPTY

    def test_refresh_replaces_token(self):
        cache = TokenCache()
        cache.get_or_fetch(lambda: 'T1')

        assert cache.refresh('Bearer T2') is True
        assert cache.token == 'T2'
        assert cache.get_or_fetch(lambda: pytest.fail("must not fetch")) == 'T2'

    def test_refresh_populates_empty_cache(self):
        cache = TokenCache()

        assert cache.refresh('bearer T9') is True
        assert cache.state is TokenState.POPULATED

    @pytest.mark.parametrize('value', [None, '', 'Bearer ', 'bearer'])
    def test_empty_refresh_is_ignored(self, value):
        cache = TokenCache()
        cache.get_or_fetch(lambda: 'T1')

        assert cache.refresh(value) is False
        assert cache.token == 'T1'

    def test_reset(self):
        cache = TokenCache()
        cache.get_or_fetch(lambda: 'T1')
        cache.reset()

        assert cache.state is TokenState.EMPTY
        assert cache.token is None

    def test_concurrent_callers_fetch_once(self):
        cache = TokenCache()
        calls = []
        calls_lock = threading.Lock()

        def slow_fetcher():
            with calls_lock:
                calls.append(1)
            time.sleep(0.05)
            return 'T1'

        results = []
        threads = [
            threading.Thread(target=lambda: results.append(cache.get_or_fetch(slow_fetcher)))
            for _ in range(10)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert results == ['T1'] * 10
