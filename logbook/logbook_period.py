"""LogbookPeriod class for the statutory observation window of a vehicle."""

from datetime import date
from enum import Enum
from typing import Optional

from .calculations import calc_expiry_date
from .config import MINIMUM_LOGBOOK_WEEKS


class LogbookStatus(Enum):
    ACTIVE = "active"
    EXPIRED = "expired"  # Replaced by a newer period


class LogbookPeriod:
    """A logbook observation period started on a given date for one vehicle."""

    def __init__(
        self,
        id: str,
        vehicle_id: str,
        start_date: str,
        status: LogbookStatus = LogbookStatus.ACTIVE,
        end_date: Optional[str] = None,
        target_weeks: int = MINIMUM_LOGBOOK_WEEKS,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.start_date = start_date
        self.status = status
        self.end_date = end_date
        self.target_weeks = target_weeks or MINIMUM_LOGBOOK_WEEKS

    @property
    def start(self) -> date:
        return date.fromisoformat(self.start_date)

    @property
    def expiry(self) -> date:
        return calc_expiry_date(self.start)

    @property
    def expiry_date(self) -> str:
        """Start date plus the validity window, as YYYY-MM-DD."""
        return self.expiry.isoformat()

    @property
    def is_active(self) -> bool:
        return self.status == LogbookStatus.ACTIVE

    def contains(self, day: date) -> bool:
        """Check if day falls within [start, expiry)."""
        return self.start <= day < self.expiry

    def archive(self, end_date: str) -> None:
        """Close this period; its history is kept but no longer active."""
        self.status = LogbookStatus.EXPIRED
        self.end_date = end_date
