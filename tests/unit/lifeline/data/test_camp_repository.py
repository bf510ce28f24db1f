"""Tests for CampRepository reads and retention."""

from __future__ import annotations

from datetime import date
from unittest.mock import Mock

import pytest

from lifeline.data.repositories import CampRepository
from lifeline.errors import CampStoreError


def make_camp_record(record_id: str, camp_date: str, **fields) -> Mock:
    record = Mock()
    record.id = record_id
    record.date = camp_date
    record.camp_name = fields.get("camp_name", "Camp")
    record.organizer_name = fields.get("organizer_name", "Org")
    record.start_time = fields.get("start_time", "09:00")
    record.end_time = fields.get("end_time", "17:00")
    record.address = fields.get("address", "")
    record.contact = fields.get("contact", "")
    record.location = fields.get("location")
    record.status = fields.get("status", "")
    return record


class TestGetDonationCamps:
    def test_reads_sorted_by_date(self, mock_pocketbase):
        repo = CampRepository(mock_pocketbase)

        repo.get_donation_camps()

        mock_pocketbase.collection.assert_called_with("donation_camps")
        mock_pocketbase.collection.return_value.get_full_list.assert_called_once_with(query_params={"sort": "date"})

    def test_maps_records(self, mock_pocketbase):
        mock_pocketbase.collection.return_value.get_full_list.return_value = [
            make_camp_record(
                "c1",
                "2026-03-20 00:00:00.000Z",
                camp_name="Rotary Drive",
                location={"lat": "19.07", "lng": 72.87},
                status="archived",
            ),
            make_camp_record("c2", "2026-04-01"),
        ]
        repo = CampRepository(mock_pocketbase)

        camps = repo.get_donation_camps()

        assert camps[0].id == "c1"
        assert camps[0].date == "2026-03-20"
        assert camps[0].camp_name == "Rotary Drive"
        assert camps[0].location.lat == pytest.approx(19.07)
        assert camps[0].is_archived is True
        assert camps[1].location is None
        assert camps[1].is_archived is False

    def test_failure_raises_store_error(self, mock_pocketbase):
        mock_pocketbase.collection.return_value.get_full_list.side_effect = RuntimeError("timeout")
        repo = CampRepository(mock_pocketbase)

        with pytest.raises(CampStoreError):
            repo.get_donation_camps()


class TestDeleteOldCamps:
    def test_deletes_camps_before_cutoff(self, mock_pocketbase):
        collection = mock_pocketbase.collection.return_value
        collection.get_full_list.return_value = [make_camp_record("old1", "2025-01-01"), make_camp_record("old2", "2025-02-01")]
        repo = CampRepository(mock_pocketbase)

        deleted = repo.delete_old_camps(retention_days=30, today=date(2026, 3, 31))

        assert deleted == 2
        collection.get_full_list.assert_called_once_with(query_params={"filter": 'date < "2026-03-01"'})
        assert [c.args[0] for c in collection.delete.call_args_list] == ["old1", "old2"]

    def test_default_retention(self, mock_pocketbase):
        collection = mock_pocketbase.collection.return_value
        repo = CampRepository(mock_pocketbase)

        repo.delete_old_camps(today=date(2026, 12, 31))

        collection.get_full_list.assert_called_once_with(query_params={"filter": 'date < "2026-07-04"'})

    def test_list_failure_is_swallowed(self, mock_pocketbase):
        mock_pocketbase.collection.return_value.get_full_list.side_effect = RuntimeError("down")
        repo = CampRepository(mock_pocketbase)

        assert repo.delete_old_camps(today=date(2026, 3, 31)) == 0

    def test_delete_failure_skips_record(self, mock_pocketbase):
        collection = mock_pocketbase.collection.return_value
        collection.get_full_list.return_value = [make_camp_record("old1", "2025-01-01"), make_camp_record("old2", "2025-02-01")]
        collection.delete.side_effect = [RuntimeError("forbidden"), None]
        repo = CampRepository(mock_pocketbase)

        assert repo.delete_old_camps(today=date(2026, 3, 31)) == 1


class TestLocationMapping:
    @pytest.mark.parametrize(
        "location,expected",
        [
            ({"lat": 19.0, "lon": 72.8}, (19.0, 72.8)),
            ({"lat": 19.0, "lng": 72.8}, (19.0, 72.8)),
            ({"lat": 19.0}, None),
            ({"lat": "north", "lng": 72.8}, None),
            ({}, None),
            (None, None),
        ],
    )
    def test_location_shapes(self, mock_pocketbase, location, expected):
        mock_pocketbase.collection.return_value.get_full_list.return_value = [
            make_camp_record("c1", "2026-03-20", location=location)
        ]
        repo = CampRepository(mock_pocketbase)

        camp = repo.get_donation_camps()[0]

        if expected is None:
            assert camp.location is None
        else:
            assert (camp.location.lat, camp.location.lng) == pytest.approx(expected)
