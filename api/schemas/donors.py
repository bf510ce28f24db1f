"""
Pydantic schemas for the donor results view and the watchlist.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from lifeline.chatbot.constants import BLOOD_GROUPS
from lifeline.chatbot.engine import normalize_city

from .chat import DonorSummaryModel


class DonorSearchResponse(BaseModel):
    blood_group: str
    city: str
    total: int
    donors: list[DonorSummaryModel]


class WatchRequestCreate(BaseModel):
    """Request body for POST /api/watchlist."""

    blood_group: str = Field(description="One of A+, A-, B+, B-, AB+, AB-, O+, O-")
    city: str = Field(min_length=1, max_length=100)

    @field_validator("blood_group")
    @classmethod
    def validate_blood_group(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in BLOOD_GROUPS:
            raise ValueError(f"Invalid blood group: {v}")
        return v

    @field_validator("city")
    @classmethod
    def validate_city(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("City must not be blank")
        return normalize_city(v)


class WatchRequestResponse(BaseModel):
    id: str
    blood_group: str
    city: str
    created: bool = Field(description="False when an identical watch request already existed")
