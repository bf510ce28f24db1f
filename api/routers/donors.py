"""
Donors Router - Results view and donor availability alerts.

The chat assistant redirects here after a search. Signed-in users confirm a
watch request from this view when no donor matched.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from lifeline.auth_middleware import AuthUser, get_current_user
from lifeline.chatbot.engine import normalize_city, parse_blood_group
from lifeline.data.repositories import DonorRepository, WatchlistRepository
from lifeline.errors import DonorLookupError, WatchlistError

from ..dependencies import get_donor_repository, get_watchlist_repository
from ..schemas.donors import DonorSearchResponse, WatchRequestCreate, WatchRequestResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["donors"])


@router.get("/donors/search", response_model=DonorSearchResponse)
async def search_donors(
    blood_group: str = Query(..., description="One of A+, A-, B+, B-, AB+, AB-, O+, O-"),
    city: str = Query("", max_length=100, description="Case-insensitive substring of the donor's city"),
    repo: DonorRepository = Depends(get_donor_repository),
) -> dict[str, Any]:
    """All eligible donors of a blood group in a city."""
    group = parse_blood_group(blood_group)
    if group is None:
        raise HTTPException(status_code=422, detail=f"Invalid blood group: {blood_group}")

    city_name = normalize_city(city)
    try:
        donors = await asyncio.to_thread(repo.search, group, city_name)
    except DonorLookupError as e:
        logger.error(f"Error searching donors: {e}")
        raise HTTPException(status_code=502, detail="Donor search is unavailable right now") from e

    return {
        "blood_group": group,
        "city": city_name,
        "total": len(donors),
        "donors": [donor.to_dict() for donor in donors],
    }


@router.post("/watchlist", response_model=WatchRequestResponse)
async def add_watch_request(
    body: WatchRequestCreate,
    user: AuthUser = Depends(get_current_user),
    repo: WatchlistRepository = Depends(get_watchlist_repository),
) -> dict[str, Any]:
    """Confirm a "Notify Me" alert for the signed-in user."""
    try:
        record_id, created = await asyncio.to_thread(repo.add, user.user_id, body.blood_group, body.city)
    except WatchlistError as e:
        logger.error(f"Error saving watch request for {user.username}: {e}")
        raise HTTPException(status_code=502, detail="Could not save the alert right now") from e

    return {"id": record_id, "blood_group": body.blood_group, "city": body.city, "created": created}
