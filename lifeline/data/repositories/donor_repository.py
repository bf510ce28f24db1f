"""Donor Repository - Eligible donor lookup

Donors are `users` records flagged `is_donor` and `is_eligible`, with their
blood type, phone and city stored in the `donor_profile` JSON field."""

from __future__ import annotations

import logging
from typing import Any

from pocketbase import PocketBase

from lifeline.chatbot.constants import BLOOD_GROUPS
from lifeline.chatbot.engine import match_donors_by_city
from lifeline.chatbot.models import DonorSummary
from lifeline.data.filters import escape_filter_value
from lifeline.errors import DonorLookupError
from lifeline.logging_config import TRACE

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
ANONYMOUS_DONOR_NAME = "Anonymous Hero"
MISSING_PHONE = "N/A"


class DonorRepository:
    """Repository for donor profiles"""

    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    @staticmethod
    def build_filter(blood_type: str) -> str:
        return f'is_donor = true && is_eligible = true && donor_profile.blood_type = "{escape_filter_value(blood_type)}"'

    def find_eligible_donors(self, blood_type: str) -> list[DonorSummary]:
        """Get every eligible donor with exactly this blood type.

        City matching is left to the caller.

        Args:
            blood_type: One of the eight ABO/Rh groups

        Returns:
            Donor summaries in store order; records without a donor profile are skipped

        Raises:
            DonorLookupError: If the blood type is invalid or PocketBase fails
        """
        if blood_type not in BLOOD_GROUPS:
            raise DonorLookupError(f"Invalid blood type: {blood_type!r}")

        filter_str = self.build_filter(blood_type)
        logger.debug(f"Querying {USERS_COLLECTION} with filter: {filter_str}")

        try:
            records = self.pb.collection(USERS_COLLECTION).get_full_list(query_params={"filter": filter_str})
        except Exception as e:
            raise DonorLookupError(f"Donor query for {blood_type} failed: {e}") from e

        donors = []
        for record in records:
            donor = self._map_record(record)
            if donor is not None:
                donors.append(donor)

        logger.debug(f"Found {len(donors)} eligible {blood_type} donors")
        return donors

    def search(self, blood_type: str, city: str) -> list[DonorSummary]:
        """All eligible donors of a blood type whose city contains `city`."""
        return match_donors_by_city(self.find_eligible_donors(blood_type), city)

    def _map_record(self, record: Any) -> DonorSummary | None:
        logger.log(TRACE, f"Donor record {record.id}: {getattr(record, '__dict__', record)}")
        profile = getattr(record, "donor_profile", None)
        if not profile:
            return None

        return DonorSummary(
            id=record.id,
            name=getattr(record, "name", "") or ANONYMOUS_DONOR_NAME,
            phone=profile.get("phone") or MISSING_PHONE,
            blood_type=profile.get("blood_type", ""),
            city=profile.get("city") or "",
        )
