"""Command-line interface for carbon estimation, review and reporting.

Estimation runs offline; the other commands talk to the configured backend.
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path

from carbonmrv.analysis.estimator import (
    EstimationInput,
    EstimationResult,
    Practices,
    RemoteSensing,
    estimate,
)
from carbonmrv.core import (
    BackendAPIError,
    BackendNotConfiguredError,
    RetryableError,
    format_area,
    format_confidence,
    format_credits,
    get_output_dir,
    settings,
)
from carbonmrv.data import submissions
from carbonmrv.data.models import SUBMISSION_STATUSES, build_farm_record
from carbonmrv.data.stats import (
    farmer_dashboard_stats,
    filter_submissions,
    summarize_submission,
    verifier_dashboard_stats,
)
from carbonmrv.i18n import (
    AGROFORESTRY_METHOD_OPTIONS,
    CROP_TYPE_OPTIONS,
    WATER_MANAGEMENT_OPTIONS,
    options,
    translate,
)
from carbonmrv.reports import generate_csv, generate_pdf, report_filename, submissions_to_geojson
from carbonmrv.satellite import GpsLocation, fetch_remote_sensing

# Errors reported to the user without a traceback
# (InvalidInputError and FarmValidationError are ValueErrors)
USER_ERRORS = (
    BackendAPIError,
    BackendNotConfiguredError,
    RetryableError,
    ValueError,
)


# -----------------------------------------------------------------------------
# Estimate Command
# -----------------------------------------------------------------------------


def _print_estimate(result: EstimationResult, language: str) -> None:
    b = result.breakdown
    print(f"{translate('biomass_estimate', language):<25} {format_credits(b.biomass_carbon_sequestration):>16}")
    print(f"{translate('soil_sequestration', language):<25} {format_credits(b.soil_carbon_sequestration):>16}")
    print(f"{translate('methane_reduction', language):<25} {format_credits(b.methane_reduction):>16}")
    print("-" * 42)
    print(f"{translate('total_credits', language):<25} {format_credits(result.carbon_credits):>16}")
    print(f"{translate('confidence', language):<25} {format_confidence(result.confidence_score):>16}")


async def cmd_estimate(args: argparse.Namespace) -> None:
    """Estimate carbon credits for farm attributes given on the command line."""
    remote_sensing = None
    if args.ndvi is not None:
        remote_sensing = RemoteSensing(ndvi=args.ndvi)
    elif args.lat is not None and args.lon is not None:
        signals = await fetch_remote_sensing(GpsLocation(latitude=args.lat, longitude=args.lon))
        remote_sensing = RemoteSensing.from_dict(signals)

    data = EstimationInput(
        crop_type=args.crop,
        land_size_hectares=args.land_size,
        practices=Practices(
            water_management=args.water_management,
            fertilizer_usage=args.fertilizer,
            agroforestry_methods=tuple(args.agroforestry or ()),
        ),
        remote_sensing=remote_sensing,
    )
    result = estimate(data, strict=args.strict or settings.strict_estimation)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"{translate('crop_type', args.language)}: {args.crop}, {format_area(args.land_size)}")
    if remote_sensing is not None:
        print(f"NDVI: {remote_sensing.ndvi:.3f}")
    print()
    _print_estimate(result, args.language)


async def cmd_options(args: argparse.Namespace) -> None:
    """List accepted crop types and practices with their labels."""
    groups = [
        ("crop_type", CROP_TYPE_OPTIONS),
        ("water_management", WATER_MANAGEMENT_OPTIONS),
        ("agroforestry_methods", AGROFORESTRY_METHOD_OPTIONS),
    ]
    for key, values in groups:
        print(translate(key, args.language))
        for value, label in options(values, args.language):
            print(f"  {value:<26} {label}")
        print()


# -----------------------------------------------------------------------------
# Farm and Submission Commands
# -----------------------------------------------------------------------------


async def cmd_add_farm(args: argparse.Namespace) -> None:
    """Register a farm for a farmer."""
    record = build_farm_record(
        farmer_id=args.farmer_id,
        name=args.name,
        crop_type=args.crop,
        land_size=args.land_size,
        latitude=args.lat,
        longitude=args.lon,
        water_management=args.water_management,
        fertilizer_usage=args.fertilizer,
        agroforestry_methods=args.agroforestry,
    )
    farm = await submissions.save_farm(record)
    print(f"Saved farm {farm['name']} ({farm['id']})")


async def cmd_submit(args: argparse.Namespace) -> None:
    """Submit a farm for verification with a fresh estimate."""
    farm = await submissions.get_farm(args.farm_id)

    remote_sensing = None
    if args.remote_sensing:
        if not farm.get("gps_location"):
            raise ValueError(f"Farm {farm['name']} has no GPS location for remote sensing")
        remote_sensing = await fetch_remote_sensing(GpsLocation.from_point(farm["gps_location"]))

    submission, estimate_row = await submissions.create_submission(farm, remote_sensing)
    print(f"Submitted {farm['name']} as {submission['id']} (status: {submission['status']})")
    print(f"  {translate('total_credits', args.language)}: {format_credits(estimate_row['carbon_credits'])}")
    print(f"  {translate('confidence', args.language)}: {format_confidence(estimate_row['confidence_score'])}")


async def cmd_review(args: argparse.Namespace) -> None:
    """Approve or reject a submission."""
    row = await submissions.review_submission(args.submission_id, args.status)
    print(f"Submission {row['id']}: {translate(row['status'], args.language)}")


async def cmd_stats(args: argparse.Namespace) -> None:
    """Show dashboard stats (farmer or verifier view)."""
    lang = args.language

    if args.farmer_id:
        farms = await submissions.get_farms(args.farmer_id)
        rows = await submissions.get_submissions(farm_ids=[f["id"] for f in farms])
        stats = farmer_dashboard_stats(farms, rows)
        print(f"{translate('total_farms', lang):<25} {stats['total_farms']:>10}")
        print(f"{translate('total_credits', lang):<25} {format_credits(stats['total_credits']):>10}")
        print(f"{translate('pending_submissions', lang):<25} {stats['pending_submissions']:>10}")
        print(f"{translate('verified_submissions', lang):<25} {stats['verified_submissions']:>10}")
        return

    summaries = [summarize_submission(row) for row in await submissions.get_submissions()]
    stats = verifier_dashboard_stats(summaries)
    print(f"{translate('total_submissions', lang):<25} {stats['total_submissions']:>10}")
    print(f"{translate('pending', lang):<25} {stats['pending_submissions']:>10}")
    print(f"{translate('verified', lang):<25} {stats['verified_submissions']:>10}")
    print(f"{translate('total_credits', lang):<25} {format_credits(stats['total_credits']):>10}")
    print()

    shown = filter_submissions(summaries, search=args.search, status=args.status)
    if not shown:
        print(translate("no_data", lang))
        return

    print(f"{'Farm':<22} {'Farmer':<18} {'Crop':<14} {'Credits':>10} {'Conf':>7}  Status")
    print("-" * 85)
    for s in shown:
        print(
            f"{s['farm_name'][:21]:<22} {s['farmer_name'][:17]:<18} {s['crop_type'][:13]:<14} "
            f"{s['carbon_credits']:>10.2f} {format_confidence(s['confidence_score']):>7}  {s['status']}"
        )


# -----------------------------------------------------------------------------
# Export Command
# -----------------------------------------------------------------------------


async def cmd_export(args: argparse.Namespace) -> None:
    """Export submissions as CSV, PDF or GeoJSON."""
    ids = args.ids or None
    status = args.status
    if ids is None and status is None and args.format == "csv":
        # Registry exports only cover verified work unless asked otherwise
        status = "verified"

    output = args.output or get_output_dir() / report_filename(args.format, date.today())

    if args.format == "geojson":
        rows = await submissions.get_submissions(ids=ids, status=status)
        collection = submissions_to_geojson([summarize_submission(r) for r in rows])
        with open(output, "w") as f:
            json.dump(collection, f, indent=2)
        print(f"Wrote {len(collection['features'])} located submissions to {output}")
        return

    data = await submissions.get_report_data(ids=ids, status=status)
    if not data:
        print(translate("no_data", args.language))
        return

    if args.format == "csv":
        generate_csv(data, output)
    else:
        generate_pdf(data, output)
    print(f"Wrote {len(data)} submissions to {output}")

    if args.record:
        estimate_id = data[0]["estimate"].get("id")
        await submissions.record_report(estimate_id, args.format, str(output), generated_by=args.generated_by)
        print("Report recorded")


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------


def _add_practice_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--crop", required=True, help="Crop type, e.g. rice, agroforestry, mixed_crops")
    parser.add_argument("--land-size", type=float, required=True, help="Land size in hectares")
    parser.add_argument("--water-management", help="Rice water management practice")
    parser.add_argument("--fertilizer", help="Fertilizer usage notes")
    parser.add_argument("--agroforestry", nargs="*", help="Agroforestry methods in use")
    parser.add_argument("--lat", type=float, help="Latitude (degrees)")
    parser.add_argument("--lon", type=float, help="Longitude (degrees)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Carbon-credit MRV for smallholder farms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  carbonmrv estimate --crop agroforestry --land-size 10 --agroforestry tree_plantation
  carbonmrv estimate --crop rice --land-size 5 --water-management alternate_wetting_drying
  carbonmrv estimate --crop rice --land-size 1 --ndvi 0.8 --json
  carbonmrv submit FARM_ID --remote-sensing     Submit a farm with satellite signals
  carbonmrv review SUBMISSION_ID verified       Approve a submission
  carbonmrv stats --status pending              Verifier dashboard, pending only
  carbonmrv export csv                          Verified submissions as CSV
""",
    )
    parser.add_argument("--language", choices=["en", "hi"], default=settings.ui_language, help="Label language")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # estimate - offline estimate
    estimate_parser = subparsers.add_parser("estimate", help="Estimate carbon credits for a farm")
    _add_practice_arguments(estimate_parser)
    estimate_parser.add_argument("--ndvi", type=float, help="Observed NDVI (skips remote-sensing lookup)")
    estimate_parser.add_argument("--strict", action="store_true", help="Fail on unrecognized crop/practice")
    estimate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("options", help="List crop types and practices")

    # add-farm - register a farm
    farm_parser = subparsers.add_parser("add-farm", help="Register a farm")
    farm_parser.add_argument("farmer_id", help="Owning farmer ID")
    farm_parser.add_argument("--name", required=True, help="Farm name")
    _add_practice_arguments(farm_parser)

    # submit - create a submission with its estimate
    submit_parser = subparsers.add_parser("submit", help="Submit a farm for verification")
    submit_parser.add_argument("farm_id", help="Farm ID")
    submit_parser.add_argument("--remote-sensing", action="store_true", help="Fetch remote-sensing signals")

    # review - verifier decision
    review_parser = subparsers.add_parser("review", help="Approve or reject a submission")
    review_parser.add_argument("submission_id", help="Submission ID")
    review_parser.add_argument("status", choices=["verified", "rejected"], help="Decision")

    # stats - dashboards
    stats_parser = subparsers.add_parser("stats", help="Dashboard statistics")
    stats_parser.add_argument("--farmer-id", help="Show a farmer's dashboard instead of the verifier view")
    stats_parser.add_argument("--search", default="", help="Filter by farm, farmer or crop")
    stats_parser.add_argument("--status", choices=["all", *SUBMISSION_STATUSES], default="all")

    # export - reports
    export_parser = subparsers.add_parser("export", help="Export submissions")
    export_parser.add_argument("format", choices=["csv", "pdf", "geojson"])
    export_parser.add_argument("--ids", nargs="*", help="Submission IDs to include")
    export_parser.add_argument("--status", choices=SUBMISSION_STATUSES, help="Only this status")
    export_parser.add_argument("--output", type=Path, help="Output file (default: reports/ directory)")
    export_parser.add_argument("--record", action="store_true", help="Store a report record in the backend")
    export_parser.add_argument("--generated-by", help="Farmer/verifier ID recorded as report author")

    return parser


COMMANDS = {
    "estimate": cmd_estimate,
    "options": cmd_options,
    "add-farm": cmd_add_farm,
    "submit": cmd_submit,
    "review": cmd_review,
    "stats": cmd_stats,
    "export": cmd_export,
}


async def cli_main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        await command(args)
    except USER_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cli() -> None:
    """CLI entry point."""
    sys.exit(asyncio.run(cli_main()))


if __name__ == "__main__":
    cli()
