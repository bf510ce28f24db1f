"""
Pydantic schemas for donation camp endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CampLocationModel(BaseModel):
    lat: float
    lng: float


class CampModel(BaseModel):
    """A donation camp."""

    id: str
    camp_name: str
    organizer_name: str
    date: str = Field(description="YYYY-MM-DD")
    start_time: str
    end_time: str
    address: str
    contact: str
    location: CampLocationModel | None = None
    status: str


class CampListResponse(BaseModel):
    """One tab of the camps listing."""

    tab: str = Field(description="upcoming or past")
    sort: str = Field(description="date or name")
    search: str = Field(description="Search term applied")
    today: str = Field(description="Reference date used for the upcoming/past split")
    total: int = Field(description="Number of camps returned")
    upcoming_count: int = Field(description="Upcoming camps matching the search")
    past_count: int = Field(description="Past camps matching the search")
    camps: list[CampModel]
