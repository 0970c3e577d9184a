# src/personio_client/core/session_manager.py
"""
Thread-safe session management for RequestsTransport.

Each thread gets its own requests.Session, so connection pools are never
shared between threads.
"""
import threading
from typing import Callable, Set
import weakref

import requests


class ThreadSafeSessionManager:
    """
    Manages thread-local requests.Session instances.

    Sessions are lazily created on first access per thread and tracked
    through weak references so that close_all() reaches every thread.

    Example:
        >>> manager = ThreadSafeSessionManager(requests.Session)
        >>> session = manager.get_session()
        >>> manager.close_all()
    """

    def __init__(self, session_factory: Callable[[], requests.Session]):
        """
        Args:
            session_factory: Callable that creates and configures a new Session
        """
        self._session_factory = session_factory
        self._local = threading.local()

        self._all_sessions: Set[weakref.ref] = set()
        self._sessions_lock = threading.Lock()

    def get_session(self) -> requests.Session:
        """Get thread-local session, creating it if needed."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._session_factory()
            self._local.session = session

            with self._sessions_lock:
                self._all_sessions.add(weakref.ref(session, self._discard))

        return session

    def _discard(self, ref: weakref.ref):
        with self._sessions_lock:
            self._all_sessions.discard(ref)

    def close_all(self):
        """
        Close sessions from all threads.

        Safe to call multiple times.
        """
        self._local.session = None

        with self._sessions_lock:
            refs = list(self._all_sessions)
            self._all_sessions.clear()

        for ref in refs:
            session = ref()
            if session is not None:
                session.close()

    def get_active_sessions_count(self) -> int:
        """Count of sessions that are still alive."""
        with self._sessions_lock:
            return sum(1 for ref in self._all_sessions if ref() is not None)
