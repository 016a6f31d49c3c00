"""Dashboard aggregation over submission rows returned by the backend."""

from typing import TypedDict

from carbonmrv.data.models import SubmissionSummary
from carbonmrv.satellite.remote_sensing import GpsLocation


class FarmerStats(TypedDict):
    total_farms: int
    total_credits: float
    pending_submissions: int
    verified_submissions: int


class VerifierStats(TypedDict):
    total_submissions: int
    pending_submissions: int
    verified_submissions: int
    total_credits: float


def first_estimate(row: dict) -> dict:
    """Get the first embedded carbon estimate of a submission row (or {})."""
    estimates = row.get("carbon_estimates") or []
    if isinstance(estimates, dict):
        return estimates
    return estimates[0] if estimates else {}


def summarize_submission(row: dict) -> SubmissionSummary:
    """Flatten a submission row with embedded farm, farmer and estimate."""
    farm = row.get("farms") or {}
    farmer = farm.get("farmers") or {}
    estimate = first_estimate(row)

    location = None
    point = farm.get("gps_location")
    if point:
        location = GpsLocation.from_point(point)

    return {
        "id": row["id"],
        "farm_name": farm.get("name") or "Unknown Farm",
        "farmer_name": farmer.get("name") or "Unknown Farmer",
        "crop_type": farm.get("crop_type") or "Unknown",
        "land_size": farm.get("land_size") or 0,
        "carbon_credits": estimate.get("carbon_credits") or 0,
        "confidence_score": estimate.get("confidence_score") or 0,
        "status": row["status"],
        "submission_date": row.get("created_at", ""),
        "location": location,
    }


def farmer_dashboard_stats(farms: list[dict], submissions: list[dict]) -> FarmerStats:
    """
    Stats for a farmer's dashboard.

    Credits are summed over all of the farmer's submissions regardless of
    review status, since farmers track what they have submitted.
    """
    total_credits = sum(first_estimate(s).get("carbon_credits") or 0 for s in submissions)
    return {
        "total_farms": len(farms),
        "total_credits": total_credits,
        "pending_submissions": sum(1 for s in submissions if s["status"] == "pending"),
        "verified_submissions": sum(1 for s in submissions if s["status"] == "verified"),
    }


def verifier_dashboard_stats(summaries: list[SubmissionSummary]) -> VerifierStats:
    """Stats for the verifier dashboard. Credits count verified submissions only."""
    return {
        "total_submissions": len(summaries),
        "pending_submissions": sum(1 for s in summaries if s["status"] == "pending"),
        "verified_submissions": sum(1 for s in summaries if s["status"] == "verified"),
        "total_credits": sum(s["carbon_credits"] for s in summaries if s["status"] == "verified"),
    }


def filter_submissions(
    summaries: list[SubmissionSummary],
    search: str = "",
    status: str = "all",
) -> list[SubmissionSummary]:
    """Filter by case-insensitive search on farm/farmer/crop and by status."""
    term = search.lower()
    results = []
    for s in summaries:
        matches_search = (
            term in s["farm_name"].lower() or term in s["farmer_name"].lower() or term in s["crop_type"].lower()
        )
        matches_status = status == "all" or s["status"] == status
        if matches_search and matches_status:
            results.append(s)
    return results
