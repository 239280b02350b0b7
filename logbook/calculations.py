"""Helper functions for logbook distance, week and expiry calculations."""

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Tuple

from dateutil.relativedelta import relativedelta

from .config import DAYS_PER_WEEK, LOGBOOK_VALID_YEARS

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_number(value: Any) -> bool:
    """True for a finite int or float reading (bools are not readings)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_iso_date(value: Any) -> bool:
    """
    True for a real calendar date written exactly as YYYY-MM-DD.

    Dates are stored and compared as strings, so compact or other
    ISO 8601 spellings are not accepted.
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def calc_business_percentage(business_distance: float, total_distance: float) -> float:
    """Business share of total distance as a percentage (0 when nothing driven)."""
    if total_distance == 0:
        return 0
    return business_distance / total_distance * 100


def calc_expiry_date(start_date: date, years: int = LOGBOOK_VALID_YEARS) -> date:
    """Date a logbook started on start_date stops being usable."""
    return start_date + relativedelta(years=years)


def week_index(period_start: date, day: date) -> int:
    """
    Zero-based week number of day within a period.

    Weeks are 7-day windows anchored to the period start, not calendar weeks.
    Days before the start give negative indices.
    """
    return (day - period_start).days // DAYS_PER_WEEK


def week_bounds(period_start: date, index: int) -> Tuple[date, date]:
    """First and last day (inclusive) of the week with the given index."""
    start = period_start + timedelta(days=DAYS_PER_WEEK * index)
    return start, start + timedelta(days=DAYS_PER_WEEK - 1)


def elapsed(now: datetime, started_at: datetime) -> int:
    """Whole seconds between started_at and now, never negative."""
    return max(0, int((now - started_at).total_seconds()))


def format_distance(km: float) -> str:
    """Format a distance for display (e.g., '0 km', '750 m', '42.0 km')."""
    if km == 0:
        return "0 km"
    if km < 1:
        return f"{km * 1000:.0f} m"
    return f"{km:,.1f} km"


def format_duration(seconds: int) -> str:
    """Format an elapsed duration as H:MM:SS."""
    hours, remainder = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"
