"""
Camps Router - Donation camp listing.

Each listing load runs the old-camp housekeeping in the background, then
reads every camp and computes the requested tab locally.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from lifeline.camps.listing import list_camps, matches_search, partition_camps
from lifeline.camps.models import CampTab, SortOption
from lifeline.data.repositories import CampRepository
from lifeline.errors import CampStoreError

from ..dependencies import get_camp_repository, local_today
from ..schemas.camps import CampListResponse
from ..settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/camps", tags=["camps"])


def run_camp_housekeeping(repo: CampRepository, retention_days: int) -> None:
    """Delete expired camps. Never raises."""
    deleted = repo.delete_old_camps(retention_days)
    logger.debug(f"Camp housekeeping removed {deleted} camps")


@router.get("", response_model=CampListResponse)
async def get_camps(
    background_tasks: BackgroundTasks,
    tab: CampTab = Query(CampTab.UPCOMING, description="upcoming or past"),
    search: str = Query("", max_length=100, description="Matches camp name, address or organizer"),
    sort: SortOption = Query(SortOption.DATE, description="date or name"),
    repo: CampRepository = Depends(get_camp_repository),
    today: date = Depends(local_today),
) -> dict[str, Any]:
    """List upcoming or past donation camps."""
    background_tasks.add_task(run_camp_housekeeping, repo, get_settings().camp_retention_days)

    try:
        all_camps = await asyncio.to_thread(repo.get_donation_camps)
    except CampStoreError as e:
        logger.error(f"Error loading camps: {e}")
        raise HTTPException(status_code=502, detail="Donation camps are unavailable right now") from e

    camps = list_camps(all_camps, today, tab, search, sort)
    upcoming, past = partition_camps(all_camps, today)

    return {
        "tab": tab.value,
        "sort": sort.value,
        "search": search,
        "today": today.isoformat(),
        "total": len(camps),
        "upcoming_count": sum(1 for camp in upcoming if matches_search(camp, search)),
        "past_count": sum(1 for camp in past if matches_search(camp, search)),
        "camps": [camp.to_dict() for camp in camps],
    }
