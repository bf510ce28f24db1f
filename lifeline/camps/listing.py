"""
Camp Listing - Partition, search and sort donation camps.

Everything here is pure: camps are fetched once from PocketBase and the
listing is recomputed locally for each tab/search/sort combination.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from .models import Camp, CampTab, SortOption


def _iso(today: date | str) -> str:
    return today if isinstance(today, str) else today.isoformat()


def partition_camps(camps: Iterable[Camp], today: date | str) -> tuple[list[Camp], list[Camp]]:
    """Split camps into (upcoming, past), dropping archived ones.

    A camp dated today is upcoming. Upcoming is ordered soonest first,
    past most recent first.
    """
    today_str = _iso(today)
    upcoming: list[Camp] = []
    past: list[Camp] = []

    for camp in camps:
        if camp.is_archived:
            continue
        if camp.date >= today_str:
            upcoming.append(camp)
        else:
            past.append(camp)

    upcoming.sort(key=lambda camp: camp.date)
    past.sort(key=lambda camp: camp.date, reverse=True)
    return upcoming, past


def matches_search(camp: Camp, search_term: str) -> bool:
    """Case-insensitive substring match on camp name, address and organizer."""
    term = search_term.lower()
    return any(term in (value or "").lower() for value in (camp.camp_name, camp.address, camp.organizer_name))


def sort_camps(camps: Iterable[Camp], tab: CampTab, sort_option: SortOption) -> list[Camp]:
    if sort_option == SortOption.NAME:
        return sorted(camps, key=lambda camp: (camp.camp_name or "").casefold())
    return sorted(camps, key=lambda camp: camp.date, reverse=tab == CampTab.PAST)


def list_camps(
    camps: Iterable[Camp],
    today: date | str,
    tab: CampTab = CampTab.UPCOMING,
    search_term: str = "",
    sort_option: SortOption = SortOption.DATE,
) -> list[Camp]:
    """Camps for one tab, filtered by search term and ordered by sort option.

    Args:
        camps: All camps as read from the store
        today: Reference date; camps on this date count as upcoming
        tab: Which half of the partition to return
        search_term: Free text matched against name, address, organizer
        sort_option: "date" keeps the tab's direction, "name" sorts A-Z

    Returns:
        Ordered list of camps
    """
    upcoming, past = partition_camps(camps, today)
    selected = upcoming if tab == CampTab.UPCOMING else past
    filtered = [camp for camp in selected if matches_search(camp, search_term)]
    return sort_camps(filtered, tab, sort_option)
