"""Camp Repository - Donation camps stored in PocketBase

Reads the `donation_camps` collection and owns the retention policy for
old camps."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from pocketbase import PocketBase

from lifeline.camps.models import Camp, CampLocation
from lifeline.errors import CampStoreError
from lifeline.logging_config import TRACE

logger = logging.getLogger(__name__)

CAMPS_COLLECTION = "donation_camps"
DEFAULT_RETENTION_DAYS = 180


class CampRepository:
    """Repository for donation camps"""

    def __init__(self, pb_client: PocketBase) -> None:
        self.pb = pb_client

    def get_donation_camps(self) -> list[Camp]:
        """Get all donation camps.

        Raises:
            CampStoreError: If PocketBase cannot be read
        """
        try:
            records = self.pb.collection(CAMPS_COLLECTION).get_full_list(query_params={"sort": "date"})
        except Exception as e:
            raise CampStoreError(f"Failed to load donation camps: {e}") from e

        camps = [self._map_record(record) for record in records]
        logger.debug(f"Loaded {len(camps)} donation camps")
        return camps

    def delete_old_camps(self, retention_days: int = DEFAULT_RETENTION_DAYS, today: date | None = None) -> int:
        """Delete camps dated more than `retention_days` before today.

        Housekeeping only: failures are logged and never raised.

        Returns:
            Number of camps deleted
        """
        cutoff = (today or date.today()) - timedelta(days=retention_days)
        filter_str = f'date < "{cutoff.isoformat()}"'

        try:
            old_camps = self.pb.collection(CAMPS_COLLECTION).get_full_list(query_params={"filter": filter_str})
        except Exception as e:
            logger.error(f"Error listing camps older than {cutoff}: {e}")
            return 0

        deleted = 0
        for record in old_camps:
            try:
                self.pb.collection(CAMPS_COLLECTION).delete(record.id)
                deleted += 1
            except Exception as e:
                logger.warning(f"Error deleting camp {record.id}: {e}")

        if deleted:
            logger.info(f"Deleted {deleted} camps dated before {cutoff}")
        return deleted

    @staticmethod
    def _map_location(location: Any) -> CampLocation | None:
        # Older records store {lat, lng}; PocketBase geoPoint fields use {lat, lon}
        if not isinstance(location, dict):
            return None
        lat = location.get("lat")
        lng = location.get("lng", location.get("lon"))
        if lat is None or lng is None:
            return None
        try:
            return CampLocation(lat=float(lat), lng=float(lng))
        except (TypeError, ValueError):
            return None

    def _map_record(self, record: Any) -> Camp:
        logger.log(TRACE, f"Camp record {record.id}: {getattr(record, '__dict__', record)}")
        return Camp(
            id=record.id,
            camp_name=getattr(record, "camp_name", "") or "",
            organizer_name=getattr(record, "organizer_name", "") or "",
            date=str(getattr(record, "date", "") or "")[:10],
            start_time=getattr(record, "start_time", "") or "",
            end_time=getattr(record, "end_time", "") or "",
            address=getattr(record, "address", "") or "",
            contact=getattr(record, "contact", "") or "",
            location=self._map_location(getattr(record, "location", None)),
            status=getattr(record, "status", "") or "",
        )
