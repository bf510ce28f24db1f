"""
Shared dependencies for the LifeLine API.

This module provides:
- PocketBase client management (global instance, admin auth on startup)
- Repository factories (mockable in tests)
- The async donor lookup handed to chat sessions
- The in-memory chat session store
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import date, datetime
from zoneinfo import ZoneInfo

from lifeline.chatbot.models import DonorSummary
from lifeline.chatbot.session_store import ChatSessionStore
from lifeline.data.repositories import CampRepository, DonorRepository, WatchlistRepository
from pocketbase import PocketBase

from .settings import get_settings

logger = logging.getLogger(__name__)

# ========================================
# PocketBase Client
# ========================================

_settings = get_settings()
pb_url = _settings.pocketbase_url
pb = PocketBase(pb_url)


async def authenticate_pb() -> None:
    """Authenticate with PocketBase as admin."""
    settings = get_settings()
    try:
        await asyncio.to_thread(
            pb.collection("_superusers").auth_with_password,
            settings.pocketbase_admin_email,
            settings.pocketbase_admin_password,
        )
        logger.info("Successfully authenticated with PocketBase")
    except Exception as e:
        logger.error(f"Failed to authenticate with PocketBase: {e}")
        raise


# ========================================
# Repositories
# ========================================


def get_donor_repository() -> DonorRepository:
    """Get a DonorRepository instance."""
    return DonorRepository(pb)


def get_camp_repository() -> CampRepository:
    """Get a CampRepository instance."""
    return CampRepository(pb)


def get_watchlist_repository() -> WatchlistRepository:
    """Get a WatchlistRepository instance."""
    return WatchlistRepository(pb)


async def lookup_eligible_donors(blood_type: str) -> Sequence[DonorSummary]:
    """Donor query used by the chat assistant (runs the blocking SDK call in a thread)."""
    return await asyncio.to_thread(get_donor_repository().find_eligible_donors, blood_type)


def local_today() -> date:
    """Today's date in the configured timezone."""
    return datetime.now(ZoneInfo(get_settings().tz)).date()


# ========================================
# Chat Sessions
# ========================================

_chat_store: ChatSessionStore | None = None


def get_chat_store() -> ChatSessionStore:
    """Get the process-wide chat session store, creating it on first use."""
    global _chat_store
    if _chat_store is None:
        settings = get_settings()
        _chat_store = ChatSessionStore(
            donor_lookup=lookup_eligible_donors,
            ttl_seconds=settings.chat_session_ttl_seconds,
            max_sessions=settings.chat_max_sessions,
            typing_delay_seconds=settings.typing_delay_seconds,
            redirect_delay_seconds=settings.redirect_delay_seconds,
        )
    return _chat_store


def reset_chat_store() -> None:
    """Close every chat session and drop the store (shutdown and tests)."""
    global _chat_store
    if _chat_store is not None:
        _chat_store.clear()
    _chat_store = None


__all__ = [
    "pb",
    "pb_url",
    "authenticate_pb",
    "get_donor_repository",
    "get_camp_repository",
    "get_watchlist_repository",
    "lookup_eligible_donors",
    "local_today",
    "get_chat_store",
    "reset_chat_store",
]
