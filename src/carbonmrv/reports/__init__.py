"""Report exports - CSV, PDF and GeoJSON."""

from datetime import date

from carbonmrv.reports.csv_export import CSV_COLUMNS, generate_csv
from carbonmrv.reports.geojson import submissions_to_geojson
from carbonmrv.reports.pdf import build_pdf, generate_pdf, report_totals

REPORT_FILENAMES = {
    "pdf": "CarbonMRV_Report_{day}.pdf",
    "csv": "CarbonMRV_Data_{day}.csv",
    "geojson": "CarbonMRV_Map_{day}.geojson",
}


def report_filename(kind: str, today: date | None = None) -> str:
    """Dated download name, e.g. CarbonMRV_Report_2024-05-01.pdf."""
    day = (today or date.today()).isoformat()
    return REPORT_FILENAMES[kind].format(day=day)


__all__ = [
    "CSV_COLUMNS",
    "generate_csv",
    "build_pdf",
    "generate_pdf",
    "report_totals",
    "submissions_to_geojson",
    "report_filename",
]
