"""
Root test configuration and fixtures for LifeLine.

- unit/: Fast, isolated unit tests (no PocketBase, no network)

Note: sys.path manipulation is handled here so `api`, `lifeline` and
`scripts` import from the project root.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Settings are cached on first use, so these must be in place before any api import
os.environ.setdefault("SKIP_PB_AUTH", "true")
os.environ.setdefault("POCKETBASE_ADMIN_PASSWORD", "test-password-not-default")
os.environ.setdefault("TYPING_DELAY_SECONDS", "0")

from lifeline.camps.models import Camp, CampLocation  # noqa: E402
from lifeline.chatbot.models import DonorSummary  # noqa: E402


def create_mock_pocketbase():
    """Create a mock PocketBase instance."""
    mock_pb = Mock()
    mock_collection = Mock()

    mock_collection.auth_with_password = Mock(return_value=True)

    mock_list_response = Mock()
    mock_list_response.items = []
    mock_list_response.total_items = 0
    mock_list_response.total_pages = 1
    mock_list_response.page = 1
    mock_list_response.per_page = 30

    mock_collection.get_full_list = Mock(return_value=[])
    mock_collection.get_list = Mock(return_value=mock_list_response)
    mock_collection.get_one = Mock()
    mock_collection.create = Mock(return_value=Mock(id="mock-id"))
    mock_collection.update = Mock()
    mock_collection.delete = Mock()

    mock_pb.collection = Mock(return_value=mock_collection)

    mock_pb.auth_store = Mock()
    mock_pb.auth_store.base_token = "mock-token"

    return mock_pb


@pytest.fixture
def mock_pocketbase():
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture(autouse=True)
def mock_all_external_services():
    """Prevent any test from constructing a real PocketBase client."""
    mock_pb = create_mock_pocketbase()

    with patch("pocketbase.PocketBase") as mock_pb_class:
        mock_pb_class.return_value = mock_pb
        yield {"pocketbase": mock_pb}


def make_donor(donor_id: str, city: str, blood_type: str = "O+", name: str = "Donor") -> DonorSummary:
    return DonorSummary(id=donor_id, name=name, phone="9876543210", blood_type=blood_type, city=city)


def make_camp(
    camp_id: str,
    camp_date: str,
    camp_name: str = "Camp",
    status: str = "scheduled",
    address: str = "",
    organizer_name: str = "",
) -> Camp:
    return Camp(
        id=camp_id,
        camp_name=camp_name,
        organizer_name=organizer_name,
        date=camp_date,
        start_time="09:00",
        end_time="17:00",
        address=address,
        contact="022-5550100",
        location=CampLocation(lat=19.076, lng=72.8777),
        status=status,
    )


@pytest.fixture
def sample_donors() -> list[DonorSummary]:
    """O+ donors across a few cities."""
    return [
        make_donor("d1", "Mumbai", name="Asha"),
        make_donor("d2", "Navi Mumbai", name="Ravi"),
        make_donor("d3", "Pune", name="Meera"),
        make_donor("d4", "mumbai suburban", name="Karan"),
        make_donor("d5", "MUMBAI", name="Divya"),
    ]


@pytest.fixture
def donor_lookup(sample_donors):
    """Async donor lookup returning the sample donors for any blood type."""
    return AsyncMock(return_value=sample_donors)


@pytest.fixture
def sample_camps() -> list[Camp]:
    """Camps around 2026-03-15 (used as "today")."""
    return [
        make_camp("c1", "2026-03-20", "Rotary Blood Drive", address="MG Road, Pune", organizer_name="Rotary Club"),
        make_camp("c2", "2026-03-15", "City Hospital Camp", address="Andheri, Mumbai", organizer_name="City Hospital"),
        make_camp("c3", "2026-03-14", "College Fest Camp", address="Fort, Mumbai", organizer_name="NSS Unit"),
        make_camp("c4", "2026-01-02", "New Year Camp", address="Bandra, Mumbai", organizer_name="Red Cross"),
        make_camp("c5", "2026-04-01", "Archived Camp", status="archived", address="Thane"),
        make_camp("c6", "2025-12-01", "Old Archived Camp", status="archived", address="Thane"),
        make_camp("c7", "2026-05-10", "Apollo Donation Day", address="Baner, Pune", organizer_name="Apollo"),
    ]
