"""Data repositories.

Provides the PocketBase access layer for donors, camps and the watchlist."""

from __future__ import annotations

from .camp_repository import CampRepository
from .donor_repository import DonorRepository
from .watchlist_repository import WatchlistRepository

__all__ = [
    "CampRepository",
    "DonorRepository",
    "WatchlistRepository",
]
