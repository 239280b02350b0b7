"""LogbookStats dataclass for whole-history trip totals."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LogbookStats:
    """Totals over every trip recorded for a vehicle."""

    total_trips: int = 0
    business_trips: int = 0
    personal_trips: int = 0
    total_distance: float = 0
    business_distance: float = 0
    business_percentage: float = 0
    avg_trip_distance: float = 0
    avg_business_distance: float = 0
