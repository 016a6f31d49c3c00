"""Farm and submission workflows backed by the managed backend."""

import logging
from datetime import UTC, datetime

from carbonmrv.analysis.estimator import EstimationInput, EstimationResult, estimate
from carbonmrv.core import client
from carbonmrv.core.client import eq, in_
from carbonmrv.core.config import settings
from carbonmrv.data.models import REVIEW_STATUSES, ReportData, ReportType, SubmissionStatus
from carbonmrv.data.stats import first_estimate

logger = logging.getLogger(__name__)

# Submission rows with their farm, the farm's farmer and the estimates embedded
SUBMISSION_SELECT = "*,farms(*,farmers(*)),carbon_estimates(*)"


# =============================================================================
# Farms
# =============================================================================


async def get_farms(farmer_id: str) -> list[dict]:
    """Fetch a farmer's farms, newest first."""
    return await client.select(
        "farms",
        filters={"farmer_id": eq(farmer_id)},
        order="created_at.desc",
    )


async def get_farm(farm_id: str) -> dict:
    """Fetch a single farm by ID."""
    rows = await client.select("farms", filters={"id": eq(farm_id)})
    if not rows:
        raise ValueError(f"Farm {farm_id} not found")
    return rows[0]


async def save_farm(record: dict, farm_id: str | None = None) -> dict:
    """
    Insert a new farm or update an existing one.

    Args:
        record: Row from `build_farm_record()` (already validated)
        farm_id: Existing farm to update; inserts when None

    Returns:
        The stored farm row
    """
    if farm_id:
        rows = await client.update("farms", record, filters={"id": eq(farm_id)})
        if not rows:
            raise ValueError(f"Farm {farm_id} not found")
    else:
        rows = await client.insert("farms", record)
    return rows[0]


async def delete_farm(farm_id: str) -> None:
    await client.delete("farms", filters={"id": eq(farm_id)})


# =============================================================================
# Submissions
# =============================================================================


async def get_submissions(
    farm_ids: list[str] | None = None,
    status: SubmissionStatus | None = None,
    ids: list[str] | None = None,
) -> list[dict]:
    """
    Fetch submissions with embedded farm, farmer and carbon estimates.

    Args:
        farm_ids: Restrict to these farms (farmer dashboard)
        status: Restrict to one review status
        ids: Restrict to these submission IDs (report export)

    Returns:
        Submission rows, newest first
    """
    filters: dict[str, str] = {}
    if farm_ids is not None:
        if not farm_ids:
            return []
        filters["farm_id"] = in_(farm_ids)
    if ids is not None:
        if not ids:
            return []
        filters["id"] = in_(ids)
    if status:
        filters["status"] = eq(status)

    return await client.select(
        "submissions",
        columns=SUBMISSION_SELECT,
        filters=filters,
        order="created_at.desc",
    )


async def create_submission(
    farm: dict,
    remote_sensing: dict | None = None,
    strict: bool | None = None,
) -> tuple[dict, dict]:
    """
    Submit a farm for verification and store its carbon estimate.

    The estimate is computed before anything is written, so invalid farm
    data leaves no pending submission behind.

    Args:
        farm: Stored `farms` row
        remote_sensing: Optional remote-sensing payload for the farm
        strict: Strict estimation; defaults to settings.strict_estimation

    Returns:
        Tuple of (submission row, carbon estimate row)

    Raises:
        InvalidInputError: If the farm data cannot be estimated
        BackendAPIError: If a write fails; a submission whose estimate
            could not be stored is deleted again
    """
    if strict is None:
        strict = settings.strict_estimation

    result: EstimationResult = estimate(EstimationInput.from_farm(farm, remote_sensing), strict=strict)

    submissions = await client.insert(
        "submissions",
        {
            "farm_id": farm["id"],
            "submission_date": datetime.now(UTC).isoformat(),
            "raw_data": {
                "crop_type": farm["crop_type"],
                "land_size": farm["land_size"],
                "practices": farm.get("practices") or {},
            },
            "remote_sensing_data": remote_sensing or {},
            "status": "pending",
        },
    )
    submission = submissions[0]

    try:
        estimates = await client.insert("carbon_estimates", result.to_row(submission["id"]))
    except (client.BackendAPIError, client.RetryableError):
        # A pending submission must not exist without its estimate
        logger.warning("Estimate insert failed for submission %s, removing it", submission["id"])
        await client.delete("submissions", filters={"id": eq(submission["id"])})
        raise

    logger.info(
        "Submission %s for farm %s: %.2f t CO2e (confidence %.2f)",
        submission["id"],
        farm["id"],
        result.carbon_credits,
        result.confidence_score,
    )
    return submission, estimates[0]


async def review_submission(submission_id: str, status: SubmissionStatus) -> dict:
    """
    Approve or reject a submission.

    Raises:
        ValueError: If status is not "verified" or "rejected", or the
            submission does not exist
    """
    if status not in REVIEW_STATUSES:
        raise ValueError(f"Review status must be one of {', '.join(REVIEW_STATUSES)}, got {status!r}")

    rows = await client.update("submissions", {"status": status}, filters={"id": eq(submission_id)})
    if not rows:
        raise ValueError(f"Submission {submission_id} not found")

    logger.info("Submission %s marked %s", submission_id, status)
    return rows[0]


# =============================================================================
# Reports
# =============================================================================


def to_report_data(rows: list[dict]) -> list[ReportData]:
    """Reshape joined submission rows into export records."""
    return [
        {
            "farmer": (row.get("farms") or {}).get("farmers") or {},
            "farm": row.get("farms") or {},
            "submission": row,
            "estimate": first_estimate(row),
        }
        for row in rows
    ]


async def get_report_data(
    ids: list[str] | None = None,
    status: SubmissionStatus | None = None,
) -> list[ReportData]:
    """Fetch export records for selected submissions or a status."""
    rows = await get_submissions(ids=ids, status=status)
    return to_report_data(rows)


async def record_report(
    estimate_id: str | None,
    report_type: ReportType,
    report_url: str,
    generated_by: str | None = None,
) -> dict:
    """Store a `reports` row for a generated export."""
    rows = await client.insert(
        "reports",
        {
            "estimate_id": estimate_id,
            "report_type": report_type,
            "report_url": report_url,
            "generated_by": generated_by,
        },
    )
    return rows[0]
