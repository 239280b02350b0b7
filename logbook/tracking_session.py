"""TrackingSession dataclass for a trip being recorded live."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .calculations import elapsed
from .trip_type import TripType


@dataclass
class TrackingSession:
    """The single in-progress trip; becomes a Trip only when stopped."""

    vehicle_id: str
    trip_type: TripType
    start_odometer: float
    started_at: datetime
    purpose: Optional[str] = None
    start_location: Optional[str] = None

    def duration(self, now: datetime) -> int:
        """Seconds elapsed since the session started."""
        return elapsed(now, self.started_at)
