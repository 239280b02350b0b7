#!/usr/bin/env python3
"""
Unified CLI for the vehicle trip logbook.

Commands:
  init           - Create an empty logbook file
  add-vehicle    - Register a vehicle
  vehicles       - List vehicles
  use            - Select the active vehicle
  start-logbook  - Start a 12-week logbook period for the active vehicle
  add-trip       - Record a completed trip
  trips          - List trips for the active vehicle
  edit-trip      - Change fields of a recorded trip
  delete-trip    - Delete a trip
  start          - Start tracking a trip live
  stop           - Stop tracking and record the trip
  cancel         - Discard the live tracking session
  status         - Show tracking, totals, weekly summaries and compliance
  export         - Write trips as CSV or the full logbook as JSON
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from logbook import (
    BUSINESS_PURPOSES,
    ComplianceStatus,
    Logbook,
    Result,
    Trip,
    Vehicle,
    WeeklySummary,
    YamlStore,
    format_distance,
    format_duration,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance in km for tables."""
    return f"{km:,.1f}" if km is not None else "-"


def format_odometer(reading: Optional[float]) -> str:
    """Format an odometer reading for display."""
    return f"{reading:,.0f}" if reading is not None else "-"


def format_percentage(pct: Optional[float]) -> str:
    """Format a percentage for display."""
    return f"{pct:.1f}%" if pct is not None else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def print_errors(result: Result) -> int:
    """Print a failed result's errors and return the exit status."""
    for error in result.errors:
        print(f"Error: {error}")
    return 1


def print_warnings(result: Result) -> None:
    for warning in result.warnings:
        print(f"Warning: {warning}")


# =============================================================================
# Table builders
# =============================================================================


def make_vehicle_table(vehicles: List[Vehicle], active_id: Optional[str]) -> List[List[str]]:
    """Convert vehicles to table rows; the active vehicle is starred."""
    rows = []
    for v in vehicles:
        rows.append(
            [
                "*" if v.id == active_id else "",
                v.id,
                v.display_name,
                " ".join(str(p) for p in (v.year, v.make, v.model) if p) or "-",
                format_odometer(v.odometer_reading),
                v.odometer_date or "-",
            ]
        )
    return rows


def make_trip_table(trips: List[Trip]) -> List[List[str]]:
    """Convert trips to table rows."""
    rows = []
    for trip in trips:
        times = "-"
        if trip.start_time or trip.end_time:
            times = f"{trip.start_time or '?'}-{trip.end_time or '?'}"
        rows.append(
            [
                trip.id,
                trip.date,
                times,
                trip.trip_type.value,
                format_km(trip.distance),
                truncate(trip.purpose),
                trip.tracking_method.value,
            ]
        )
    return rows


def make_week_table(summaries: List[WeeklySummary]) -> List[List[str]]:
    """Convert weekly summaries to table rows."""
    rows = []
    for s in summaries:
        rows.append(
            [
                s.week_index + 1,
                f"{s.week_start} to {s.week_end}",
                s.total_trips,
                format_km(s.total_distance),
                format_km(s.business_distance),
                format_percentage(s.business_percentage),
            ]
        )
    return rows


def print_compliance(compliance: ComplianceStatus) -> None:
    if compliance.can_be_used_for_tax:
        print("Compliance: VALID - can be used for tax")
    else:
        print("Compliance: NOT YET VALID")
    print(f"Consecutive weeks: {compliance.consecutive_weeks}")
    if compliance.expiry_date:
        print(f"Expires: {compliance.expiry_date}")
    for warning in compliance.warnings:
        print(f"  ! {warning}")


# =============================================================================
# Command handlers
# =============================================================================


def open_logbook(args) -> Logbook:
    return Logbook(YamlStore(args.logbook_file))


def require_vehicle(logbook: Logbook) -> Optional[Vehicle]:
    vehicle = logbook.active_vehicle
    if vehicle is None:
        print("Error: No vehicle selected (use 'add-vehicle' or 'use' first)")
    return vehicle


def cmd_init(args):
    """Create an empty logbook file."""
    if args.logbook_file.exists():
        print(f"Error: File already exists: {args.logbook_file}")
        return 1
    YamlStore(args.logbook_file).save()
    print(f"Created {args.logbook_file}")
    return 0


def cmd_add_vehicle(args):
    """Register a vehicle."""
    logbook = open_logbook(args)
    result = logbook.add_vehicle(
        args.name,
        args.registration,
        make=args.make,
        model=args.model,
        year=args.year,
        odometer_reading=args.odometer,
        odometer_date=args.odometer_date,
    )
    if not result.success:
        return print_errors(result)
    print(f"Added vehicle {result.vehicle.display_name} [{result.vehicle.id}]")
    return 0


def cmd_vehicles(args):
    """List vehicles."""
    logbook = open_logbook(args)
    vehicles = logbook.vehicles.list_vehicles()
    if not vehicles:
        print("No vehicles registered.")
        return 0
    headers = ["", "ID", "Vehicle", "Details", "Odometer", "As Of"]
    rows = make_vehicle_table(vehicles, logbook.active_vehicle_id)
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_use(args):
    """Select the active vehicle."""
    logbook = open_logbook(args)
    result = logbook.set_active_vehicle(args.vehicle_id)
    if not result.success:
        return print_errors(result)
    print(f"Active vehicle: {result.vehicle.display_name}")
    return 0


def cmd_start_logbook(args):
    """Start a logbook period for the active vehicle."""
    logbook = open_logbook(args)
    if require_vehicle(logbook) is None:
        return 1
    previous = logbook.active_period()
    result = logbook.start_logbook_period(start_date=args.date)
    if not result.success:
        return print_errors(result)
    if previous is not None:
        print(f"Archived previous logbook started {previous.start_date}")
    period = result.value
    print(f"Logbook started {period.start_date} (valid until {period.expiry_date})")
    return 0


def cmd_add_trip(args):
    """Record a completed trip for the active vehicle."""
    logbook = open_logbook(args)
    vehicle = require_vehicle(logbook)
    if vehicle is None:
        return 1

    result = logbook.trips.add_trip(
        vehicle_id=vehicle.id,
        date=args.date or date.today().isoformat(),
        start_odometer=args.start_odometer,
        end_odometer=args.end_odometer,
        trip_type=args.type,
        purpose=args.purpose,
        start_time=args.start_time,
        end_time=args.end_time,
        start_location=args.start_location,
        end_location=args.end_location,
    )
    if not result.success:
        return print_errors(result)
    trip = result.trip
    print(f"Recorded {trip.trip_type.value} trip of {format_distance(trip.distance)} [{trip.id}]")
    print_warnings(result)
    return 0


def cmd_trips(args):
    """List trips for the active vehicle."""
    logbook = open_logbook(args)
    vehicle = require_vehicle(logbook)
    if vehicle is None:
        return 1

    if args.since or args.until:
        trips = logbook.trips.trips_in_date_range(
            args.since or "0000-01-01", args.until or "9999-12-31", vehicle.id
        )
    else:
        trips = logbook.vehicle_trips(vehicle.id)

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Trips: {len(trips)}")
    print()
    if not trips:
        print("No trips found.")
        return 0

    headers = ["ID", "Date", "Time", "Type", "Distance (km)", "Purpose", "Method"]
    print(tabulate(make_trip_table(trips), headers=headers, tablefmt="simple"))
    return 0


def cmd_edit_trip(args):
    """Change fields of a recorded trip."""
    logbook = open_logbook(args)
    changes = {
        name: value
        for name, value in (
            ("date", args.date),
            ("start_odometer", args.start_odometer),
            ("end_odometer", args.end_odometer),
            ("trip_type", args.type),
            ("purpose", args.purpose),
            ("start_time", args.start_time),
            ("end_time", args.end_time),
        )
        if value is not None
    }
    if not changes:
        print("Error: Nothing to change")
        return 1
    result = logbook.trips.update_trip(args.trip_id, **changes)
    if not result.success:
        return print_errors(result)
    print(f"Updated trip {args.trip_id}")
    return 0


def cmd_delete_trip(args):
    """Delete a trip (the vehicle odometer is not rolled back)."""
    logbook = open_logbook(args)
    if not logbook.trips.delete_trip(args.trip_id):
        print(f"Error: Unknown trip '{args.trip_id}'")
        return 1
    print(f"Deleted trip {args.trip_id}")
    return 0


def cmd_start(args):
    """Start tracking a trip live."""
    logbook = open_logbook(args)
    if require_vehicle(logbook) is None:
        return 1
    result = logbook.start_tracking(
        trip_type=args.type,
        purpose=args.purpose,
        start_odometer=args.odometer,
        start_location=args.start_location,
    )
    if not result.success:
        return print_errors(result)
    session = result.value
    print(
        f"Tracking {session.trip_type.value} trip from "
        f"{format_odometer(session.start_odometer)} "
        f"(started {session.started_at.strftime('%H:%M')})"
    )
    return 0


def cmd_stop(args):
    """Stop tracking and record the trip."""
    logbook = open_logbook(args)
    result = logbook.stop_tracking(
        args.end_odometer, purpose=args.purpose, end_location=args.end_location
    )
    if not result.success:
        print_errors(result)
        if logbook.is_tracking:
            print("Tracking is still running; correct the reading and stop again.")
        return 1
    trip = result.trip
    print(f"Recorded {trip.trip_type.value} trip of {format_distance(trip.distance)} [{trip.id}]")
    print_warnings(result)
    return 0


def cmd_cancel(args):
    """Discard the live tracking session."""
    logbook = open_logbook(args)
    if not logbook.cancel_tracking():
        print("Error: No trip is currently being tracked")
        return 1
    print("Tracking cancelled; no trip recorded.")
    return 0


def cmd_status(args):
    """Show tracking state, totals, weekly summaries and compliance."""
    logbook = open_logbook(args)
    vehicle = require_vehicle(logbook)
    if vehicle is None:
        return 1

    print(f"Vehicle: {vehicle.display_name}")
    print(f"Odometer: {format_odometer(vehicle.odometer_reading)} (as of {vehicle.odometer_date or '-'})")

    session = logbook.active_tracking
    if session is not None:
        print(
            f"Tracking: {session.trip_type.value} trip since "
            f"{session.started_at.strftime('%Y-%m-%d %H:%M')} "
            f"({format_duration(logbook.tracking_duration())})"
        )

    stats = logbook.stats(vehicle.id)
    print(
        f"All trips: {stats.total_trips}, {format_distance(stats.total_distance)} "
        f"({format_percentage(stats.business_percentage)} business)"
    )
    print()

    period = logbook.active_period(vehicle.id)
    if period is None:
        print("No logbook period started (use 'start-logbook').")
        return 0

    print(f"Logbook period: {period.start_date} to {period.expiry_date}")
    summaries = logbook.weekly_summaries(vehicle.id)
    if summaries:
        headers = ["Week", "Dates", "Trips", "Total (km)", "Business (km)", "Business %"]
        print(tabulate(make_week_table(summaries), headers=headers, tablefmt="simple"))
        print()

    print_compliance(logbook.compliance(vehicle.id))
    return 0


def cmd_export(args):
    """Write trips as CSV or the full logbook as JSON."""
    logbook = open_logbook(args)
    if require_vehicle(logbook) is None:
        return 1

    if args.format == "csv":
        content = logbook.export_csv()
    else:
        content = json.dumps(logbook.export_data(), indent=2) + "\n"

    if args.output:
        args.output.write_text(content, encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(content)
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle trip logbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s logbook.yaml init
  %(prog)s logbook.yaml add-vehicle "Work ute" ABC123 --odometer 10000
  %(prog)s logbook.yaml start-logbook --date 2025-01-06
  %(prog)s logbook.yaml add-trip 10000 10042 --type business \\
      --purpose "Client visit" --date 2025-01-06
  %(prog)s logbook.yaml start --type business --purpose "Client visit"
  %(prog)s logbook.yaml stop 10042
  %(prog)s logbook.yaml status
  %(prog)s logbook.yaml export --format csv --output trips.csv
""",
    )
    parser.add_argument(
        "logbook_file",
        type=Path,
        help="Path to logbook YAML file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log engine activity to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create an empty logbook file")

    # Add vehicle subcommand
    vehicle_parser = subparsers.add_parser("add-vehicle", help="Register a vehicle")
    vehicle_parser.add_argument("name", type=str, help="Vehicle name (e.g., 'Work ute')")
    vehicle_parser.add_argument("registration", type=str, help="Registration plate")
    vehicle_parser.add_argument("--make", type=str, help="Manufacturer")
    vehicle_parser.add_argument("--model", type=str, help="Model")
    vehicle_parser.add_argument("--year", type=int, help="Model year")
    vehicle_parser.add_argument(
        "--odometer", type=float, default=0, help="Current odometer reading (km)"
    )
    vehicle_parser.add_argument(
        "--odometer-date",
        type=str,
        help="Date of the odometer reading in YYYY-MM-DD format (default: today)",
    )

    subparsers.add_parser("vehicles", help="List vehicles")

    use_parser = subparsers.add_parser("use", help="Select the active vehicle")
    use_parser.add_argument("vehicle_id", type=str, help="Vehicle ID")

    logbook_parser = subparsers.add_parser(
        "start-logbook", help="Start a logbook period for the active vehicle"
    )
    logbook_parser.add_argument(
        "--date", type=str, help="Start date in YYYY-MM-DD format (default: today)"
    )

    # Add trip subcommand
    trip_parser = subparsers.add_parser("add-trip", help="Record a completed trip")
    trip_parser.add_argument("start_odometer", type=float, help="Odometer at start (km)")
    trip_parser.add_argument("end_odometer", type=float, help="Odometer at end (km)")
    trip_parser.add_argument(
        "--type", choices=["business", "personal"], default="personal", help="Trip type"
    )
    trip_parser.add_argument(
        "--purpose",
        type=str,
        help=f"Business purpose (e.g., '{BUSINESS_PURPOSES[1]}')",
    )
    trip_parser.add_argument(
        "--date", type=str, help="Trip date in YYYY-MM-DD format (default: today)"
    )
    trip_parser.add_argument("--start-time", type=str, help="Start time (HH:MM)")
    trip_parser.add_argument("--end-time", type=str, help="End time (HH:MM)")
    trip_parser.add_argument("--from", dest="start_location", type=str, help="Start location")
    trip_parser.add_argument("--to", dest="end_location", type=str, help="End location")

    trips_parser = subparsers.add_parser("trips", help="List trips for the active vehicle")
    trips_parser.add_argument("--since", type=str, help="Only trips on or after date (YYYY-MM-DD)")
    trips_parser.add_argument("--until", type=str, help="Only trips on or before date (YYYY-MM-DD)")

    edit_parser = subparsers.add_parser("edit-trip", help="Change fields of a trip")
    edit_parser.add_argument("trip_id", type=str, help="Trip ID")
    edit_parser.add_argument("--start-odometer", type=float, help="Odometer at start (km)")
    edit_parser.add_argument("--end-odometer", type=float, help="Odometer at end (km)")
    edit_parser.add_argument("--type", choices=["business", "personal"], help="Trip type")
    edit_parser.add_argument("--purpose", type=str, help="Business purpose")
    edit_parser.add_argument("--date", type=str, help="Trip date (YYYY-MM-DD)")
    edit_parser.add_argument("--start-time", type=str, help="Start time (HH:MM)")
    edit_parser.add_argument("--end-time", type=str, help="End time (HH:MM)")

    delete_parser = subparsers.add_parser("delete-trip", help="Delete a trip")
    delete_parser.add_argument("trip_id", type=str, help="Trip ID")

    # Tracking subcommands
    start_parser = subparsers.add_parser("start", help="Start tracking a trip live")
    start_parser.add_argument(
        "--type", choices=["business", "personal"], default="business", help="Trip type"
    )
    start_parser.add_argument("--purpose", type=str, help="Business purpose")
    start_parser.add_argument(
        "--odometer",
        type=float,
        help="Odometer at start (default: vehicle's current reading)",
    )
    start_parser.add_argument("--from", dest="start_location", type=str, help="Start location")

    stop_parser = subparsers.add_parser("stop", help="Stop tracking and record the trip")
    stop_parser.add_argument("end_odometer", type=float, help="Odometer at end (km)")
    stop_parser.add_argument("--purpose", type=str, help="Business purpose (overrides start)")
    stop_parser.add_argument("--to", dest="end_location", type=str, help="End location")

    subparsers.add_parser("cancel", help="Discard the live tracking session")

    subparsers.add_parser(
        "status", help="Show tracking, totals, weekly summaries and compliance"
    )

    export_parser = subparsers.add_parser("export", help="Export the active vehicle's logbook")
    export_parser.add_argument(
        "--format", choices=["csv", "json"], default="csv", help="Output format (default: csv)"
    )
    export_parser.add_argument("--output", type=Path, help="Output file (default: stdout)")

    return parser


COMMANDS = {
    "init": cmd_init,
    "add-vehicle": cmd_add_vehicle,
    "vehicles": cmd_vehicles,
    "use": cmd_use,
    "start-logbook": cmd_start_logbook,
    "add-trip": cmd_add_trip,
    "trips": cmd_trips,
    "edit-trip": cmd_edit_trip,
    "delete-trip": cmd_delete_trip,
    "start": cmd_start,
    "stop": cmd_stop,
    "cancel": cmd_cancel,
    "status": cmd_status,
    "export": cmd_export,
}


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Every command except init works on an existing file
    if args.command != "init" and not args.logbook_file.exists():
        print(f"Error: File not found: {args.logbook_file}")
        return 1

    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main() or 0)
