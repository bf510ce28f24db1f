"""Domain models for donation camps."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

ARCHIVED_STATUS = "archived"


class CampTab(str, Enum):
    UPCOMING = "upcoming"
    PAST = "past"


class SortOption(str, Enum):
    DATE = "date"
    NAME = "name"


@dataclass(frozen=True)
class CampLocation:
    lat: float
    lng: float


@dataclass(frozen=True)
class Camp:
    """A scheduled blood-donation event.

    `date` is an ISO date string (YYYY-MM-DD), which orders correctly as text.
    """

    id: str
    camp_name: str
    organizer_name: str
    date: str
    start_time: str = ""
    end_time: str = ""
    address: str = ""
    contact: str = ""
    location: CampLocation | None = None
    status: str = ""

    @property
    def is_archived(self) -> bool:
        return self.status == ARCHIVED_STATUS

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "camp_name": self.camp_name,
            "organizer_name": self.organizer_name,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "address": self.address,
            "contact": self.contact,
            "location": {"lat": self.location.lat, "lng": self.location.lng} if self.location else None,
            "status": self.status,
        }
