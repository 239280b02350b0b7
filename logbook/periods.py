"""Logbook period records: starting, archiving and looking up periods."""

import logging
from datetime import date
from typing import Callable, List, Optional, Union

from .calculations import is_iso_date
from .errors import ValidationError
from .loader import period_from_dict, period_to_dict
from .logbook_period import LogbookPeriod
from .result import Result
from .store import new_id

logger = logging.getLogger(__name__)

KIND = "periods"


class PeriodRegistry:
    """Keeps at most one active LogbookPeriod per vehicle."""

    def __init__(self, store, id_factory: Callable[[], str] = new_id):
        self.store = store
        self.id_factory = id_factory

    def periods_for_vehicle(self, vehicle_id: str) -> List[LogbookPeriod]:
        """All periods of a vehicle, oldest start first."""
        periods = [
            period_from_dict(r)
            for r in self.store.list(KIND)
            if r.get("vehicleId") == vehicle_id
        ]
        return sorted(periods, key=lambda p: p.start_date)

    def active_period(self, vehicle_id: str) -> Optional[LogbookPeriod]:
        for period in self.periods_for_vehicle(vehicle_id):
            if period.is_active:
                return period
        return None

    def start_period(self, vehicle_id: str, start_date: Union[str, date]) -> Result:
        """
        Begin a new logbook period for a vehicle.

        A period that is still active is archived (marked expired, ending on
        the new start date) rather than merged with the new one.
        """
        if isinstance(start_date, date):
            start_date = start_date.isoformat()
        if not is_iso_date(start_date):
            return Result.failure(
                ValidationError(f"Invalid start date: {start_date!r} (expected YYYY-MM-DD)")
            )

        previous = self.active_period(vehicle_id)
        if previous is not None:
            previous.archive(start_date)
            self.store.put(KIND, previous.id, period_to_dict(previous))
            logger.info(
                "Archived logbook period %s (started %s) for vehicle %s",
                previous.id,
                previous.start_date,
                vehicle_id,
            )

        period = LogbookPeriod(self.id_factory(), vehicle_id, start_date)
        self.store.put(KIND, period.id, period_to_dict(period))
        logger.info(
            "Started logbook period %s for vehicle %s on %s (expires %s)",
            period.id,
            vehicle_id,
            start_date,
            period.expiry_date,
        )
        return Result.ok(period)

    def delete_periods_for_vehicle(self, vehicle_id: str) -> int:
        periods = self.periods_for_vehicle(vehicle_id)
        for period in periods:
            self.store.delete(KIND, period.id)
        return len(periods)
