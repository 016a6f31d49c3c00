"""CSV export of verified submissions for registries and buyers."""

import csv
import io
from pathlib import Path
from typing import TextIO

from carbonmrv.data.models import ReportData

CSV_COLUMNS = [
    "Farmer Name",
    "Farm Name",
    "Crop Type",
    "Land Size (ha)",
    "GPS Latitude",
    "GPS Longitude",
    "Submission Date",
    "Biomass Estimate (tonnes CO2)",
    "Methane Emission Reduction (tonnes CO2e)",
    "Total Carbon Credits (tonnes CO2e)",
    "Confidence Score",
    "Status",
    "Contact",
]


def _date_part(timestamp: str | None) -> str:
    return (timestamp or "")[:10]


def report_row(item: ReportData) -> dict[str, str | float]:
    """One CSV row for a farm's submission and estimate."""
    farmer = item["farmer"]
    farm = item["farm"]
    submission = item["submission"]
    estimate = item["estimate"]
    gps = farm.get("gps_location") or {}

    return {
        "Farmer Name": farmer.get("name", ""),
        "Farm Name": farm.get("name", ""),
        "Crop Type": farm.get("crop_type", ""),
        "Land Size (ha)": farm.get("land_size", ""),
        "GPS Latitude": gps.get("y", ""),
        "GPS Longitude": gps.get("x", ""),
        "Submission Date": _date_part(submission.get("submission_date")),
        "Biomass Estimate (tonnes CO2)": f"{estimate.get('biomass_estimate', 0):.2f}",
        "Methane Emission Reduction (tonnes CO2e)": f"{estimate.get('methane_emission', 0):.2f}",
        "Total Carbon Credits (tonnes CO2e)": f"{estimate.get('carbon_credits', 0):.2f}",
        "Confidence Score": f"{estimate.get('confidence_score', 0) * 100:.1f}%",
        "Status": submission.get("status", ""),
        "Contact": farmer.get("contact") or "",
    }


def write_csv(data: list[ReportData], f: TextIO) -> None:
    """Write report rows to an open text stream."""
    writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for item in data:
        writer.writerow(report_row(item))


def generate_csv(data: list[ReportData], path: Path | None = None) -> str:
    """
    Generate the CSV export.

    Args:
        data: Joined report records
        path: Optional file to write (UTF-8)

    Returns:
        The CSV text
    """
    buffer = io.StringIO()
    write_csv(data, buffer)
    text = buffer.getvalue()

    if path is not None:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)

    return text
