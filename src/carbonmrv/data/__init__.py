"""Data modules - backend rows, submission workflows and dashboard stats."""

from carbonmrv.data.models import (
    FarmValidationError,
    ReportData,
    SubmissionSummary,
    build_farm_record,
    validate_farm,
)
from carbonmrv.data.stats import (
    farmer_dashboard_stats,
    filter_submissions,
    summarize_submission,
    verifier_dashboard_stats,
)
from carbonmrv.data.submissions import (
    create_submission,
    delete_farm,
    get_farm,
    get_farms,
    get_report_data,
    get_submissions,
    record_report,
    review_submission,
    save_farm,
)

__all__ = [
    # models
    "FarmValidationError",
    "ReportData",
    "SubmissionSummary",
    "build_farm_record",
    "validate_farm",
    # stats
    "summarize_submission",
    "farmer_dashboard_stats",
    "verifier_dashboard_stats",
    "filter_submissions",
    # submissions
    "get_farm",
    "get_farms",
    "save_farm",
    "delete_farm",
    "get_submissions",
    "create_submission",
    "review_submission",
    "get_report_data",
    "record_report",
]
