"""Watchlist Repository - Donor availability alerts

A watch request records that a signed-in user wants to hear when a donor of
a blood group becomes available in a city."""

from __future__ import annotations

import logging

from pocketbase import PocketBase

from lifeline.data.filters import escape_filter_value
from lifeline.errors import WatchlistError

logger = logging.getLogger(__name__)

WATCHLIST_COLLECTION = "donor_watchlist"


class WatchlistRepository:
    """Repository for donor watch requests"""

    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    def find(self, user_id: str, blood_group: str, city: str) -> str | None:
        """Return the id of an identical watch request, if one exists."""
        filter_str = (
            f'user = "{escape_filter_value(user_id)}" && blood_group = "{escape_filter_value(blood_group)}" '
            f'&& city = "{escape_filter_value(city)}"'
        )
        try:
            result = self.pb.collection(WATCHLIST_COLLECTION).get_list(1, 1, query_params={"filter": filter_str})
        except Exception as e:
            raise WatchlistError(f"Error looking up watch request: {e}") from e

        if result.items:
            record_id: str = result.items[0].id
            return record_id
        return None

    def add(self, user_id: str, blood_group: str, city: str) -> tuple[str, bool]:
        """Create a watch request unless an identical one exists.

        Returns:
            Tuple of (record id, created)

        Raises:
            WatchlistError: If PocketBase fails
        """
        existing = self.find(user_id, blood_group, city)
        if existing:
            logger.debug(f"Watch request {blood_group}/{city} already exists for user {user_id}")
            return existing, False

        try:
            record = self.pb.collection(WATCHLIST_COLLECTION).create(
                {"user": user_id, "blood_group": blood_group, "city": city}
            )
        except Exception as e:
            raise WatchlistError(f"Error creating watch request: {e}") from e

        logger.info(f"Created watch request {blood_group}/{city} for user {user_id}")
        return record.id, True
