"""
In-memory registry of chat sessions.

Sessions expire after a period of inactivity and the least recently used
session is evicted when the store is full. Every session leaving the store
is closed, which cancels its pending timers.
Thread-safe implementation for concurrent access.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any

from lifeline.errors import SessionNotFoundError

from .constants import DEFAULT_REDIRECT_DELAY_SECONDS, DEFAULT_TYPING_DELAY_SECONDS
from .engine import DonorLookup
from .session import ChatSession

logger = logging.getLogger(__name__)


class ChatSessionStore:
    """Thread-safe store for chat sessions with idle TTL and LRU eviction."""

    def __init__(
        self,
        donor_lookup: DonorLookup,
        ttl_seconds: int = 1800,
        max_sessions: int = 500,
        typing_delay_seconds: float = DEFAULT_TYPING_DELAY_SECONDS,
        redirect_delay_seconds: float = DEFAULT_REDIRECT_DELAY_SECONDS,
    ):
        """Initialize the store.

        Args:
            donor_lookup: Donor query handed to every new session
            ttl_seconds: Idle time after which a session expires (default: 30 minutes)
            max_sessions: Maximum number of live sessions
            typing_delay_seconds: Delay before each bot reply
            redirect_delay_seconds: Delay before a requested redirect fires
        """
        self._sessions: dict[str, ChatSession] = {}
        self._donor_lookup = donor_lookup
        self._ttl = ttl_seconds
        self._max_size = max_sessions
        self._typing_delay = typing_delay_seconds
        self._redirect_delay = redirect_delay_seconds
        self._lock = threading.RLock()
        self._created_count = 0
        self._expired_count = 0
        self._evicted_count = 0

        logger.info(f"ChatSessionStore initialized with TTL={ttl_seconds}s, max_sessions={max_sessions}")

    def create(self) -> ChatSession:
        """Create and register a new session, evicting the LRU one if full."""
        session = ChatSession(
            donor_lookup=self._donor_lookup,
            typing_delay_seconds=self._typing_delay,
            redirect_delay_seconds=self._redirect_delay,
        )

        with self._lock:
            if len(self._sessions) >= self._max_size:
                self._evict_lru()
            self._sessions[session.id] = session
            self._created_count += 1

        logger.debug(f"Created chat session {session.id}")
        return session

    def get(self, session_id: str) -> ChatSession:
        """Return a live session.

        Raises:
            SessionNotFoundError: If the session is unknown or has expired
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)

            if self._is_expired(session, time.time()):
                logger.debug(f"Chat session {session_id} expired")
                self._remove(session_id)
                self._expired_count += 1
                raise SessionNotFoundError(session_id)

            return session

    def close(self, session_id: str) -> None:
        """Close and remove a session.

        Raises:
            SessionNotFoundError: If the session is unknown
        """
        with self._lock:
            if session_id not in self._sessions:
                raise SessionNotFoundError(session_id)
            self._remove(session_id)

        logger.info(f"Closed chat session {session_id}")

    def purge_expired(self) -> int:
        """Close every expired session.

        Returns:
            Number of sessions removed
        """
        with self._lock:
            now = time.time()
            expired = [sid for sid, session in self._sessions.items() if self._is_expired(session, now)]

            for session_id in expired:
                self._remove(session_id)
            self._expired_count += len(expired)

        if expired:
            logger.debug(f"Purged {len(expired)} expired chat sessions")
        return len(expired)

    def clear(self) -> None:
        """Close every session."""
        with self._lock:
            count = len(self._sessions)
            for session_id in list(self._sessions):
                self._remove(session_id)
        logger.info(f"Cleared {count} chat sessions")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def get_stats(self) -> dict[str, Any]:
        """Get store statistics."""
        with self._lock:
            return {
                "active_sessions": len(self._sessions),
                "created_count": self._created_count,
                "expired_count": self._expired_count,
                "evicted_count": self._evicted_count,
                "ttl_seconds": self._ttl,
                "max_sessions": self._max_size,
            }

    def _is_expired(self, session: ChatSession, now: float) -> bool:
        return now - session.last_activity > self._ttl

    def _remove(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            session.close()

    def _evict_lru(self) -> None:
        if not self._sessions:
            return

        lru_id = min(self._sessions.values(), key=lambda s: s.last_activity).id
        logger.debug(f"Evicting least recently used chat session {lru_id}")
        self._remove(lru_id)
        self._evicted_count += 1
