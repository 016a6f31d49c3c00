"""Row shapes for the backend tables and farm registration rules."""

import math
from typing import Literal, NotRequired, TypedDict

from carbonmrv.analysis.estimator import AGROFORESTRY_METHODS, KNOWN_CROP_TYPES, RICE_EMISSION_FACTORS
from carbonmrv.satellite.remote_sensing import GpsLocation

Role = Literal["farmer", "verifier", "admin"]
SubmissionStatus = Literal["pending", "verified", "rejected"]
ReportType = Literal["pdf", "csv"]

SUBMISSION_STATUSES: tuple[SubmissionStatus, ...] = ("pending", "verified", "rejected")
REVIEW_STATUSES: tuple[SubmissionStatus, ...] = ("verified", "rejected")

MIN_FARM_NAME_LENGTH = 2
MIN_LAND_SIZE_HA = 0.1


# =============================================================================
# Backend Rows
# =============================================================================


class Farmer(TypedDict):
    id: str
    name: str
    contact: NotRequired[str | None]
    language: str
    auth_id: str
    role: Role
    created_at: str
    updated_at: str


class Point(TypedDict):
    """GPS point as stored by the backend (x = longitude, y = latitude)."""

    x: float
    y: float


class Farm(TypedDict):
    id: str
    farmer_id: str
    name: str
    crop_type: str
    land_size: float
    gps_location: NotRequired[Point | None]
    practices: dict
    images: list[str]
    created_at: str
    updated_at: str


class Submission(TypedDict):
    id: str
    farm_id: str
    submission_date: str
    raw_data: dict
    remote_sensing_data: dict
    status: SubmissionStatus
    created_at: str
    updated_at: str


class CarbonEstimateRow(TypedDict):
    id: str
    submission_id: str
    biomass_estimate: float
    methane_emission: float
    carbon_credits: float
    confidence_score: float
    created_at: str
    updated_at: str


class Report(TypedDict):
    id: str
    estimate_id: str
    report_type: ReportType
    report_url: NotRequired[str | None]
    generated_by: NotRequired[str | None]
    created_at: str


class ReportData(TypedDict):
    """Joined record used for exports."""

    farmer: Farmer
    farm: Farm
    submission: Submission
    estimate: CarbonEstimateRow


class SubmissionSummary(TypedDict):
    """Flattened submission for the verifier table and map."""

    id: str
    farm_name: str
    farmer_name: str
    crop_type: str
    land_size: float
    carbon_credits: float
    confidence_score: float
    status: SubmissionStatus
    submission_date: str
    location: NotRequired[GpsLocation | None]


# =============================================================================
# Farm Registration
# =============================================================================


class FarmValidationError(ValueError):
    """Raised when farm registration data fails validation."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        messages = [f"{name}: {message}" for name, message in errors.items()]
        super().__init__(f"Invalid farm data: {'; '.join(messages)}")


def validate_farm(
    name: str,
    crop_type: str,
    land_size: float,
    latitude: float | None = None,
    longitude: float | None = None,
    water_management: str | None = None,
    agroforestry_methods: list[str] | None = None,
) -> None:
    """
    Validate farm registration data.

    Collects every problem before raising so forms can show them together.

    Raises:
        FarmValidationError: With a field -> message mapping
    """
    errors: dict[str, str] = {}

    if len((name or "").strip()) < MIN_FARM_NAME_LENGTH:
        errors["name"] = f"Farm name must be at least {MIN_FARM_NAME_LENGTH} characters"

    if not crop_type:
        errors["crop_type"] = "Please select a crop type"
    elif crop_type not in KNOWN_CROP_TYPES:
        errors["crop_type"] = f"Unknown crop type: {crop_type}"

    if (
        isinstance(land_size, bool)
        or not isinstance(land_size, (int, float))
        or not math.isfinite(land_size)
        or land_size < MIN_LAND_SIZE_HA
    ):
        errors["land_size"] = "Land size must be greater than 0"

    if (latitude is None) != (longitude is None):
        errors["gps_location"] = "Latitude and longitude must be given together"
    elif latitude is not None:
        try:
            GpsLocation(latitude=latitude, longitude=longitude)
        except ValueError as e:
            errors["gps_location"] = str(e)

    if water_management and water_management not in RICE_EMISSION_FACTORS:
        errors["water_management"] = f"Unknown water management practice: {water_management}"

    unknown_methods = sorted(set(agroforestry_methods or []) - AGROFORESTRY_METHODS)
    if unknown_methods:
        errors["agroforestry_methods"] = f"Unknown agroforestry methods: {', '.join(unknown_methods)}"

    if errors:
        raise FarmValidationError(errors)


def build_farm_record(
    farmer_id: str,
    name: str,
    crop_type: str,
    land_size: float,
    latitude: float | None = None,
    longitude: float | None = None,
    water_management: str | None = None,
    fertilizer_usage: str | None = None,
    agroforestry_methods: list[str] | None = None,
    images: list[str] | None = None,
) -> dict:
    """Validate and shape a `farms` row for insert or update."""
    validate_farm(
        name,
        crop_type,
        land_size,
        latitude=latitude,
        longitude=longitude,
        water_management=water_management,
        agroforestry_methods=agroforestry_methods,
    )

    gps_location = None
    if latitude is not None and longitude is not None:
        gps_location = GpsLocation(latitude=latitude, longitude=longitude).to_point()

    return {
        "farmer_id": farmer_id,
        "name": name.strip(),
        "crop_type": crop_type,
        "land_size": land_size,
        "gps_location": gps_location,
        "practices": {
            "water_management": water_management,
            "fertilizer_usage": fertilizer_usage,
            "agroforestry_methods": list(agroforestry_methods or []),
        },
        "images": list(images or []),
    }
