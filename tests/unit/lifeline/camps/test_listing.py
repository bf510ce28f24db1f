"""Tests for camp partitioning, search and sorting."""

from __future__ import annotations

from datetime import date

from lifeline.camps.listing import list_camps, matches_search, partition_camps, sort_camps
from lifeline.camps.models import Camp, CampTab, SortOption

TODAY = date(2026, 3, 15)


def ids(camps: list[Camp]) -> list[str]:
    return [camp.id for camp in camps]


class TestPartition:
    def test_upcoming_and_past(self, sample_camps):
        upcoming, past = partition_camps(sample_camps, TODAY)

        assert ids(upcoming) == ["c2", "c1", "c7"]
        assert ids(past) == ["c3", "c4"]

    def test_camp_dated_today_is_upcoming(self, sample_camps):
        upcoming, _ = partition_camps(sample_camps, TODAY)

        assert "c2" in ids(upcoming)

    def test_archived_camps_are_dropped(self, sample_camps):
        upcoming, past = partition_camps(sample_camps, TODAY)

        assert not {"c5", "c6"} & set(ids(upcoming) + ids(past))

    def test_today_as_iso_string(self, sample_camps):
        assert partition_camps(sample_camps, "2026-03-15") == partition_camps(sample_camps, TODAY)

    def test_partition_covers_every_non_archived_camp(self, sample_camps):
        upcoming, past = partition_camps(sample_camps, TODAY)
        live = [camp for camp in sample_camps if not camp.is_archived]

        assert sorted(ids(upcoming) + ids(past)) == sorted(ids(live))

    def test_empty_input(self):
        assert partition_camps([], TODAY) == ([], [])


class TestSearch:
    def test_matches_name_address_and_organizer(self, sample_camps):
        by_id = {camp.id: camp for camp in sample_camps}

        assert matches_search(by_id["c1"], "rotary") is True
        assert matches_search(by_id["c1"], "mg road") is True
        assert matches_search(by_id["c2"], "CITY HOSPITAL") is True
        assert matches_search(by_id["c1"], "mumbai") is False

    def test_empty_term_matches_everything(self, sample_camps):
        assert all(matches_search(camp, "") for camp in sample_camps)

    def test_missing_fields_do_not_match(self):
        camp = Camp(id="x", camp_name="", organizer_name="", date="2026-01-01")

        assert matches_search(camp, "pune") is False


class TestSort:
    def test_name_sort_ignores_case(self):
        camps = [
            Camp(id="1", camp_name="beta", organizer_name="", date="2026-01-01"),
            Camp(id="2", camp_name="Alpha", organizer_name="", date="2026-01-02"),
            Camp(id="3", camp_name="Gamma", organizer_name="", date="2026-01-03"),
        ]

        assert ids(sort_camps(camps, CampTab.UPCOMING, SortOption.NAME)) == ["2", "1", "3"]

    def test_date_sort_follows_tab_direction(self, sample_camps):
        live = [camp for camp in sample_camps if not camp.is_archived]

        assert ids(sort_camps(live, CampTab.UPCOMING, SortOption.DATE)) == ["c4", "c3", "c2", "c1", "c7"]
        assert ids(sort_camps(live, CampTab.PAST, SortOption.DATE)) == ["c7", "c1", "c2", "c3", "c4"]


class TestListCamps:
    def test_defaults_to_upcoming_by_date(self, sample_camps):
        assert ids(list_camps(sample_camps, TODAY)) == ["c2", "c1", "c7"]

    def test_past_tab(self, sample_camps):
        assert ids(list_camps(sample_camps, TODAY, CampTab.PAST)) == ["c3", "c4"]

    def test_search_filters_within_tab(self, sample_camps):
        assert ids(list_camps(sample_camps, TODAY, CampTab.UPCOMING, "pune")) == ["c1", "c7"]
        assert ids(list_camps(sample_camps, TODAY, CampTab.PAST, "mumbai")) == ["c3", "c4"]

    def test_search_never_reaches_archived_camps(self, sample_camps):
        assert list_camps(sample_camps, TODAY, CampTab.UPCOMING, "thane") == []

    def test_name_sort(self, sample_camps):
        result = list_camps(sample_camps, TODAY, CampTab.UPCOMING, sort_option=SortOption.NAME)

        assert ids(result) == ["c7", "c2", "c1"]

    def test_input_is_not_mutated(self, sample_camps):
        before = list(sample_camps)

        list_camps(sample_camps, TODAY, CampTab.PAST, sort_option=SortOption.NAME)

        assert sample_camps == before
