"""Domain error classes.

Routers translate these into HTTP responses; the dialogue engine recovers
from lookup failures locally.
"""

from __future__ import annotations


class LifelineError(Exception):
    """Base exception for LifeLine errors."""

    pass


class DonorLookupError(LifelineError):
    """Raised when the donor query against PocketBase fails."""

    pass


class CampStoreError(LifelineError):
    """Raised when donation camps cannot be read from PocketBase."""

    pass


class WatchlistError(LifelineError):
    """Raised when a watch request cannot be stored."""

    pass


class SessionNotFoundError(LifelineError):
    """Raised when a chat session does not exist or has expired."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Chat session {session_id} not found")


class SessionClosedError(LifelineError):
    """Raised when input is sent to a chat session that has been closed."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Chat session {session_id} is closed")
