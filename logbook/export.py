"""CSV and JSON-ready exports of a vehicle's logbook."""

import csv
import io
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .compliance_status import ComplianceStatus
from .logbook_period import LogbookPeriod
from .logbook_stats import LogbookStats
from .loader import period_to_dict, trip_to_dict, vehicle_to_dict
from .trip import Trip
from .vehicle import Vehicle
from .weekly_summary import WeeklySummary

CSV_HEADERS = [
    "Date",
    "Start Time",
    "End Time",
    "Type",
    "Purpose",
    "Start Location",
    "End Location",
    "Distance (km)",
    "Method",
]


def _sorted_trips(trips: Iterable[Trip]) -> List[Trip]:
    return sorted(trips, key=lambda t: (t.date, t.start_time or "", t.start_odometer))


def make_csv_row(trip: Trip) -> List[str]:
    """Convert a trip to CSV cells in header order."""
    return [
        trip.date,
        trip.start_time or "",
        trip.end_time or "",
        trip.trip_type.value,
        trip.purpose or "",
        trip.start_location or "",
        trip.end_location or "",
        f"{trip.distance:.1f}",
        trip.tracking_method.value,
    ]


def export_csv(trips: Iterable[Trip]) -> str:
    """
    Trips as CSV text: a header line then one line per trip, oldest first.

    Values containing commas, quotes or newlines are quoted.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for trip in _sorted_trips(trips):
        writer.writerow(make_csv_row(trip))
    return buf.getvalue()


def summary_to_dict(summary: WeeklySummary) -> Dict[str, Any]:
    return {
        "weekIndex": summary.week_index,
        "weekStart": summary.week_start,
        "weekEnd": summary.week_end,
        "totalTrips": summary.total_trips,
        "businessTrips": summary.business_trips,
        "personalTrips": summary.personal_trips,
        "totalDistance": summary.total_distance,
        "businessDistance": summary.business_distance,
        "businessPercentage": summary.business_percentage,
        "isComplete": summary.is_complete,
    }


def compliance_to_dict(compliance: ComplianceStatus) -> Dict[str, Any]:
    return {
        "canBeUsedForTax": compliance.can_be_used_for_tax,
        "isValid": compliance.is_valid,
        "warnings": list(compliance.warnings),
        "expiryDate": compliance.expiry_date,
        "consecutiveWeeks": compliance.consecutive_weeks,
        "periodWeeks": compliance.period_weeks,
        "gapWeeks": list(compliance.gap_weeks),
        "isExpired": compliance.is_expired,
    }


def stats_to_dict(stats: LogbookStats) -> Dict[str, Any]:
    keys = {
        "total_trips": "totalTrips",
        "business_trips": "businessTrips",
        "personal_trips": "personalTrips",
        "total_distance": "totalDistance",
        "business_distance": "businessDistance",
        "business_percentage": "businessPercentage",
        "avg_trip_distance": "avgTripDistance",
        "avg_business_distance": "avgBusinessDistance",
    }
    return {keys[k]: v for k, v in asdict(stats).items()}


def export_data(
    vehicle: Optional[Vehicle],
    trips: Iterable[Trip],
    summaries: Sequence[WeeklySummary],
    compliance: ComplianceStatus,
    stats: Optional[LogbookStats] = None,
    period: Optional[LogbookPeriod] = None,
    exported_at: Optional[datetime] = None,
) -> Optional[Dict[str, Any]]:
    """
    Combine a vehicle's logbook into one JSON-serializable dict.

    Returns None when there is no vehicle to export.
    """
    if vehicle is None:
        return None

    trips = _sorted_trips(trips)
    data: Dict[str, Any] = {
        "vehicle": vehicle_to_dict(vehicle),
        "period": {
            "startDate": trips[0].date if trips else None,
            "endDate": trips[-1].date if trips else None,
            "weeks": len(summaries),
        },
        "trips": [trip_to_dict(t, include_distance=True) for t in trips],
        "weeklySummaries": [summary_to_dict(s) for s in summaries],
        "compliance": compliance_to_dict(compliance),
        "exportedAt": (exported_at or datetime.now()).isoformat(timespec="seconds"),
    }
    if stats is not None:
        data["summary"] = stats_to_dict(stats)
    if period is not None:
        data["logbookPeriod"] = period_to_dict(period)
    return data
