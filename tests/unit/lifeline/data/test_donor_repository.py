"""Tests for DonorRepository against a mocked PocketBase client."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from lifeline.data.repositories import DonorRepository
from lifeline.errors import DonorLookupError


def make_user_record(record_id: str, name: str | None, profile: dict | None) -> Mock:
    record = Mock()
    record.id = record_id
    record.name = name
    record.donor_profile = profile
    return record


class TestBuildFilter:
    def test_filter_requires_donor_and_eligibility(self):
        filter_str = DonorRepository.build_filter("AB-")

        assert filter_str == 'is_donor = true && is_eligible = true && donor_profile.blood_type = "AB-"'


class TestFindEligibleDonors:
    def test_queries_users_collection(self, mock_pocketbase):
        repo = DonorRepository(mock_pocketbase)

        repo.find_eligible_donors("O+")

        mock_pocketbase.collection.assert_called_with("users")
        mock_pocketbase.collection.return_value.get_full_list.assert_called_once_with(
            query_params={"filter": DonorRepository.build_filter("O+")}
        )

    def test_maps_records(self, mock_pocketbase):
        mock_pocketbase.collection.return_value.get_full_list.return_value = [
            make_user_record("u1", "Asha", {"blood_type": "O+", "phone": "98200", "city": "Mumbai"}),
            make_user_record("u2", "", {"blood_type": "O+", "city": "Pune"}),
        ]
        repo = DonorRepository(mock_pocketbase)

        donors = repo.find_eligible_donors("O+")

        assert [d.id for d in donors] == ["u1", "u2"]
        assert donors[0].name == "Asha"
        assert donors[0].phone == "98200"
        assert donors[1].name == "Anonymous Hero"
        assert donors[1].phone == "N/A"
        assert donors[1].city == "Pune"

    def test_records_without_profile_are_skipped(self, mock_pocketbase):
        mock_pocketbase.collection.return_value.get_full_list.return_value = [
            make_user_record("u1", "Asha", None),
            make_user_record("u2", "Ravi", {"blood_type": "O+", "city": "Mumbai"}),
        ]
        repo = DonorRepository(mock_pocketbase)

        assert [d.id for d in repo.find_eligible_donors("O+")] == ["u2"]

    def test_invalid_blood_type_raises(self, mock_pocketbase):
        repo = DonorRepository(mock_pocketbase)

        with pytest.raises(DonorLookupError):
            repo.find_eligible_donors("Z+")
        mock_pocketbase.collection.return_value.get_full_list.assert_not_called()

    def test_pocketbase_failure_raises_lookup_error(self, mock_pocketbase):
        mock_pocketbase.collection.return_value.get_full_list.side_effect = RuntimeError("connection refused")
        repo = DonorRepository(mock_pocketbase)

        with pytest.raises(DonorLookupError, match="connection refused"):
            repo.find_eligible_donors("O+")


class TestSearch:
    def test_search_filters_by_city_substring(self, mock_pocketbase):
        mock_pocketbase.collection.return_value.get_full_list.return_value = [
            make_user_record("u1", "Asha", {"blood_type": "B+", "city": "Navi Mumbai"}),
            make_user_record("u2", "Ravi", {"blood_type": "B+", "city": "Pune"}),
            make_user_record("u3", "Meera", {"blood_type": "B+", "city": "mumbai"}),
        ]
        repo = DonorRepository(mock_pocketbase)

        assert [d.id for d in repo.search("B+", "Mumbai")] == ["u1", "u3"]


class TestTraceLogging:
    def test_raw_records_logged_at_trace(self, mock_pocketbase, caplog):
        from lifeline.logging_config import TRACE

        mock_pocketbase.collection.return_value.get_full_list.return_value = [
            make_user_record("u1", "Asha", {"blood_type": "O+", "city": "Mumbai"}),
        ]
        repo = DonorRepository(mock_pocketbase)

        with caplog.at_level(TRACE, logger="lifeline.data.repositories.donor_repository"):
            repo.find_eligible_donors("O+")

        assert any(r.levelno == TRACE and "Donor record u1" in r.getMessage() for r in caplog.records)
