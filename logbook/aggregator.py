"""Weekly aggregation of trips relative to a logbook period."""

import logging
from typing import Dict, Iterable, List

from .calculations import calc_business_percentage, week_bounds, week_index
from .logbook_period import LogbookPeriod
from .logbook_stats import LogbookStats
from .trip import Trip
from .weekly_summary import WeeklySummary

logger = logging.getLogger(__name__)


def _summarize(index: int, period: LogbookPeriod, trips: List[Trip]) -> WeeklySummary:
    """Build the summary for one week's trips."""
    start, end = week_bounds(period.start, index)
    business = [t for t in trips if t.is_business]
    total_distance = sum(t.distance for t in trips)
    business_distance = sum(t.distance for t in business)
    return WeeklySummary(
        week_index=index,
        week_start=start.isoformat(),
        week_end=end.isoformat(),
        total_trips=len(trips),
        business_trips=len(business),
        personal_trips=len(trips) - len(business),
        total_distance=total_distance,
        business_distance=business_distance,
        business_percentage=calc_business_percentage(business_distance, total_distance),
    )


def compute_weekly_summaries(
    trips: Iterable[Trip], period: LogbookPeriod
) -> List[WeeklySummary]:
    """
    Group a period's trips into 7-day windows anchored at its start date.

    Logic:
    - Only trips for the period's vehicle dated within [start, expiry) count
    - Window i covers [start + 7i days, start + 7(i+1) days)
    - Only windows with at least one trip are returned, oldest first

    The input is never modified; the same trips and period always produce
    equal summaries.
    """
    weeks: Dict[int, List[Trip]] = {}
    for trip in trips:
        if trip.vehicle_id != period.vehicle_id:
            continue
        day = trip.trip_date
        if not period.contains(day):
            continue
        weeks.setdefault(week_index(period.start, day), []).append(trip)

    summaries = [_summarize(i, period, weeks[i]) for i in sorted(weeks)]
    logger.debug(
        "Computed %d weekly summaries for period %s (vehicle %s)",
        len(summaries),
        period.id,
        period.vehicle_id,
    )
    return summaries


def compute_stats(trips: Iterable[Trip]) -> LogbookStats:
    """Aggregate totals and averages across all of a vehicle's trips."""
    trips = list(trips)
    business = [t for t in trips if t.is_business]
    total_distance = sum(t.distance for t in trips)
    business_distance = sum(t.distance for t in business)
    return LogbookStats(
        total_trips=len(trips),
        business_trips=len(business),
        personal_trips=len(trips) - len(business),
        total_distance=total_distance,
        business_distance=business_distance,
        business_percentage=calc_business_percentage(business_distance, total_distance),
        avg_trip_distance=total_distance / len(trips) if trips else 0,
        avg_business_distance=business_distance / len(business) if business else 0,
    )
