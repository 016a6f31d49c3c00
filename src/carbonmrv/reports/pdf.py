"""PDF verification report for a batch of submissions."""

from datetime import date
from io import BytesIO
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer

from carbonmrv.data.models import ReportData

REPORT_TITLE = "CarbonMRV+ Report"


def report_totals(data: list[ReportData]) -> dict[str, float]:
    """Summary figures shown at the top of the report."""
    return {
        "farmers": len(data),
        "total_area_ha": sum(item["farm"].get("land_size") or 0 for item in data),
        "total_credits": sum(item["estimate"].get("carbon_credits") or 0 for item in data),
    }


def _farm_block(index: int, item: ReportData, styles) -> KeepTogether:
    farm = item["farm"]
    estimate = item["estimate"]
    normal = styles["Normal"]

    lines = [
        f"Farm: {farm.get('name', '')}",
        f"Crop: {farm.get('crop_type', '')}",
        f"Area: {farm.get('land_size', 0)} ha",
        f"Carbon Credits: {estimate.get('carbon_credits', 0):.2f} tonnes CO2e",
        f"Confidence: {estimate.get('confidence_score', 0) * 100:.1f}%",
    ]
    flowables = [Paragraph(escape(f"{index}. {item['farmer'].get('name', '')}"), styles["Heading3"])]
    flowables += [Paragraph(escape(line), normal) for line in lines]
    flowables.append(Spacer(1, 0.3 * cm))
    return KeepTogether(flowables)


def build_pdf(data: list[ReportData], generated_on: date | None = None) -> bytes:
    """
    Render the report to PDF bytes.

    Layout: title, generation date, summary (farmers, total area, total
    credits), then one block per farm. Blocks are kept whole across pages.
    """
    generated_on = generated_on or date.today()
    totals = report_totals(data)
    styles = getSampleStyleSheet()
    normal = styles["Normal"]

    story = [
        Paragraph(REPORT_TITLE, styles["Title"]),
        Paragraph(f"Generated on: {generated_on.isoformat()}", normal),
        Spacer(1, 0.6 * cm),
        Paragraph("Summary", styles["Heading2"]),
        Paragraph(f"Total Farmers: {totals['farmers']}", normal),
        Paragraph(f"Total Area: {totals['total_area_ha']:.2f} hectares", normal),
        Paragraph(f"Total Carbon Credits: {totals['total_credits']:.2f} tonnes CO2e", normal),
        Spacer(1, 0.6 * cm),
        Paragraph("Individual Farm Reports", styles["Heading2"]),
    ]

    for i, item in enumerate(data, 1):
        story.append(_farm_block(i, item, styles))

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=REPORT_TITLE,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
    )
    doc.build(story)
    return buffer.getvalue()


def generate_pdf(data: list[ReportData], path: Path, generated_on: date | None = None) -> Path:
    """Write the PDF report to a file and return its path."""
    path.write_bytes(build_pdf(data, generated_on))
    return path
