"""WeeklySummary dataclass for per-week trip statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeeklySummary:
    """Trip totals for one 7-day window of a logbook period."""

    week_index: int
    week_start: str
    week_end: str
    total_trips: int = 0
    business_trips: int = 0
    personal_trips: int = 0
    total_distance: float = 0
    business_distance: float = 0
    business_percentage: float = 0

    @property
    def is_complete(self) -> bool:
        return self.total_trips > 0
