"""Donation camps - models and the upcoming/past listing."""

from .listing import list_camps, matches_search, partition_camps, sort_camps
from .models import Camp, CampLocation, CampTab, SortOption

__all__ = [
    "Camp",
    "CampLocation",
    "CampTab",
    "SortOption",
    "list_camps",
    "matches_search",
    "partition_camps",
    "sort_camps",
]
