"""
Vehicle trip logbook and compliance engine.

This package records trips against vehicles and checks whether the record
meets the 12-consecutive-week logbook rule (valid for 5 years):
- Vehicle / VehicleRegistry: vehicles and their odometer readings
- Trip / TripStore: completed trips and their validation rules
- Tracker: the single live tracking session
- compute_weekly_summaries: per-week totals anchored to a LogbookPeriod
- compute_compliance: gaps, tax usability and expiry
- export_csv / export_data: CSV text and JSON-ready dicts
- Logbook: the engine tying these together over a MemoryStore or YamlStore
"""

from .config import BUSINESS_PURPOSES, LOGBOOK_VALID_YEARS, MINIMUM_LOGBOOK_WEEKS
from .errors import LogbookError, NotFoundError, SessionConflictError, ValidationError
from .result import Result
from .trip_type import TrackingMethod, TripType
from .vehicle import Vehicle, validate_vehicle
from .trip import Trip, trip_warnings, validate_trip
from .logbook_period import LogbookPeriod, LogbookStatus
from .tracking_session import TrackingSession
from .weekly_summary import WeeklySummary
from .compliance_status import ComplianceStatus
from .logbook_stats import LogbookStats
from .calculations import (
    calc_business_percentage,
    calc_expiry_date,
    elapsed,
    format_distance,
    format_duration,
    is_iso_date,
    is_number,
    week_bounds,
    week_index,
)
from .aggregator import compute_stats, compute_weekly_summaries
from .compliance import compute_compliance
from .export import export_csv, export_data
from .store import MemoryStore, YamlStore
from .registry import VehicleRegistry
from .trip_store import TripStore
from .periods import PeriodRegistry
from .tracker import Tracker
from .engine import Logbook

__all__ = [
    "BUSINESS_PURPOSES",
    "LOGBOOK_VALID_YEARS",
    "MINIMUM_LOGBOOK_WEEKS",
    "LogbookError",
    "NotFoundError",
    "SessionConflictError",
    "ValidationError",
    "Result",
    "TrackingMethod",
    "TripType",
    "Vehicle",
    "validate_vehicle",
    "Trip",
    "validate_trip",
    "trip_warnings",
    "LogbookPeriod",
    "LogbookStatus",
    "TrackingSession",
    "WeeklySummary",
    "ComplianceStatus",
    "LogbookStats",
    "calc_business_percentage",
    "calc_expiry_date",
    "elapsed",
    "format_distance",
    "format_duration",
    "week_bounds",
    "week_index",
    "is_iso_date",
    "is_number",
    "compute_stats",
    "compute_weekly_summaries",
    "compute_compliance",
    "export_csv",
    "export_data",
    "MemoryStore",
    "YamlStore",
    "VehicleRegistry",
    "TripStore",
    "PeriodRegistry",
    "Tracker",
    "Logbook",
]
