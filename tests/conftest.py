"""Shared test fixtures."""

import sys
from pathlib import Path

import pytest
import respx
from tenacity import wait_none

# Add src/ to path so tests can import carbonmrv
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from carbonmrv.core import client  # noqa: E402
from carbonmrv.core.config import settings  # noqa: E402

BACKEND_URL = "https://backend.test"


@pytest.fixture(autouse=True)
def backend_settings(monkeypatch):
    """Point the client at a fake backend for every test."""
    monkeypatch.setattr(settings, "backend_url", BACKEND_URL)
    monkeypatch.setattr(settings, "backend_anon_key", "test-anon-key")
    monkeypatch.setattr(settings, "backend_service_key", None)
    monkeypatch.setattr(settings, "strict_estimation", False)
    monkeypatch.setattr(settings, "remote_sensing_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "display_units", "metric")


@pytest.fixture
def mock_backend():
    """Mock backend REST API responses."""
    with respx.mock(base_url=BACKEND_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def no_retry_wait(monkeypatch):
    """Skip tenacity backoff sleeps."""
    monkeypatch.setattr(client.rest_with_retry.retry, "wait", wait_none())


@pytest.fixture
def sample_farm():
    """Sample `farms` row for an AWD rice farm."""
    return {
        "id": "farm-1",
        "farmer_id": "farmer-1",
        "name": "Green Paddy",
        "crop_type": "rice",
        "land_size": 5,
        "gps_location": {"x": 85.1376, "y": 25.5941},
        "practices": {
            "water_management": "alternate_wetting_drying",
            "fertilizer_usage": "Urea 50 kg/ha",
            "agroforestry_methods": [],
        },
        "images": [],
        "created_at": "2024-05-01T10:00:00Z",
        "updated_at": "2024-05-01T10:00:00Z",
    }


@pytest.fixture
def sample_submission_rows():
    """Submission rows with embedded farm, farmer and estimate, as the backend returns them."""
    return [
        {
            "id": "sub-1",
            "farm_id": "farm-1",
            "submission_date": "2024-05-02T08:30:00Z",
            "raw_data": {},
            "remote_sensing_data": {},
            "status": "verified",
            "created_at": "2024-05-02T08:30:00Z",
            "updated_at": "2024-05-03T09:00:00Z",
            "farms": {
                "id": "farm-1",
                "name": "Green Paddy",
                "crop_type": "rice",
                "land_size": 5,
                "gps_location": {"x": 85.1376, "y": 25.5941},
                "farmers": {"id": "farmer-1", "name": "Asha Devi", "contact": "+91 90000 00001"},
            },
            "carbon_estimates": [
                {
                    "id": "est-1",
                    "submission_id": "sub-1",
                    "biomass_estimate": 7.5,
                    "methane_emission": 59.3125,
                    "carbon_credits": 69.3125,
                    "confidence_score": 0.7,
                }
            ],
        },
        {
            "id": "sub-2",
            "farm_id": "farm-2",
            "submission_date": "2024-05-04T08:30:00Z",
            "raw_data": {},
            "remote_sensing_data": {"ndvi": 0.8},
            "status": "pending",
            "created_at": "2024-05-04T08:30:00Z",
            "updated_at": "2024-05-04T08:30:00Z",
            "farms": {
                "id": "farm-2",
                "name": "Hill Orchard",
                "crop_type": "agroforestry",
                "land_size": 10,
                "gps_location": None,
                "farmers": {"id": "farmer-2", "name": "Ravi Kumar", "contact": None},
            },
            "carbon_estimates": [
                {
                    "id": "est-2",
                    "submission_id": "sub-2",
                    "biomass_estimate": 48.0,
                    "methane_emission": 0.0,
                    "carbon_credits": 55.5,
                    "confidence_score": 0.9,
                }
            ],
        },
        {
            "id": "sub-3",
            "farm_id": None,
            "submission_date": "2024-05-05T08:30:00Z",
            "raw_data": {},
            "remote_sensing_data": {},
            "status": "rejected",
            "created_at": "2024-05-05T08:30:00Z",
            "updated_at": "2024-05-05T08:30:00Z",
            "farms": None,
            "carbon_estimates": [],
        },
    ]
