"""Logbook class - wires the registry, trip store, periods and tracker together."""

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Union

from .aggregator import compute_stats, compute_weekly_summaries
from .compliance import compute_compliance
from .compliance_status import ComplianceStatus
from .errors import NotFoundError
from .export import export_csv, export_data
from .logbook_period import LogbookPeriod
from .logbook_stats import LogbookStats
from .periods import PeriodRegistry
from .registry import VehicleRegistry
from .result import Result
from .store import MemoryStore, new_id
from .tracker import Tracker
from .trip_store import TripStore
from .tracking_session import TrackingSession
from .trip import Trip
from .trip_type import TripType
from .vehicle import Vehicle
from .weekly_summary import WeeklySummary

logger = logging.getLogger(__name__)

CONTEXT_KIND = "context"
ACTIVE_VEHICLE_KEY = "activeVehicle"


class Logbook:
    """
    Vehicle logbook over an injected record store.

    Components are reachable directly for plain reads and writes
    (vehicles, trips, periods, tracker). This class adds the operations that
    span components and the derived views: stats, weekly summaries and
    compliance, all recomputed from stored trips on every call.
    """

    def __init__(
        self,
        store=None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = new_id,
    ):
        self.store = store if store is not None else MemoryStore()
        self.clock = clock
        self.vehicles = VehicleRegistry(self.store, id_factory)
        self.trips = TripStore(self.store, self.vehicles, id_factory, clock)
        self.periods = PeriodRegistry(self.store, id_factory)
        self.tracker = Tracker(self.store, self.vehicles, self.trips, clock)

    def today(self) -> date:
        return self.clock().date()

    # -------------------------------------------------------------------------
    # Vehicles
    # -------------------------------------------------------------------------

    @property
    def active_vehicle_id(self) -> Optional[str]:
        record = self.store.get(CONTEXT_KIND, ACTIVE_VEHICLE_KEY)
        return record.get("vehicleId") if record else None

    @property
    def active_vehicle(self) -> Optional[Vehicle]:
        vehicle_id = self.active_vehicle_id
        return self.vehicles.get_vehicle(vehicle_id) if vehicle_id else None

    def set_active_vehicle(self, vehicle_id: Optional[str]) -> Result:
        """Select the vehicle later operations default to (None clears it)."""
        if vehicle_id is None:
            self.store.delete(CONTEXT_KIND, ACTIVE_VEHICLE_KEY)
            return Result.ok(None)
        vehicle = self.vehicles.get_vehicle(vehicle_id)
        if vehicle is None:
            return Result.failure(NotFoundError(f"Unknown vehicle '{vehicle_id}'"))
        self.store.put(CONTEXT_KIND, ACTIVE_VEHICLE_KEY, {"vehicleId": vehicle.id})
        logger.debug("Active vehicle is now %s", vehicle.id)
        return Result.ok(vehicle)

    def add_vehicle(self, *args, **kwargs) -> Result:
        """Register a vehicle; the first one becomes the active vehicle."""
        result = self.vehicles.add_vehicle(*args, **kwargs)
        if result.success and self.active_vehicle_id is None:
            self.set_active_vehicle(result.vehicle.id)
        return result

    def delete_vehicle(self, vehicle_id: str) -> Result:
        """
        Delete a vehicle and everything recorded against it.

        Cascades to its trips and logbook periods, discards a live tracking
        session for it, and clears the active-vehicle selection if needed.
        """
        if self.vehicles.get_vehicle(vehicle_id) is None:
            return Result.failure(NotFoundError(f"Unknown vehicle '{vehicle_id}'"))

        session = self.tracker.active_tracking
        if session is not None and session.vehicle_id == vehicle_id:
            self.tracker.cancel_tracking()
        trip_count = self.trips.delete_trips_for_vehicle(vehicle_id)
        period_count = self.periods.delete_periods_for_vehicle(vehicle_id)
        self.vehicles.remove(vehicle_id)
        if self.active_vehicle_id == vehicle_id:
            self.set_active_vehicle(None)

        logger.info(
            "Deleted vehicle %s with %d trip(s) and %d logbook period(s)",
            vehicle_id,
            trip_count,
            period_count,
        )
        return Result.ok(vehicle_id)

    def is_logbook_active(self, vehicle_id: str) -> bool:
        return self.periods.active_period(vehicle_id) is not None

    # -------------------------------------------------------------------------
    # Logbook periods
    # -------------------------------------------------------------------------

    def start_logbook_period(
        self,
        vehicle_id: Optional[str] = None,
        start_date: Union[str, date, None] = None,
    ) -> Result:
        """Start a new period (default: active vehicle, today)."""
        vehicle_id = vehicle_id or self.active_vehicle_id
        if vehicle_id is None or self.vehicles.get_vehicle(vehicle_id) is None:
            return Result.failure(NotFoundError("No vehicle selected"))
        return self.periods.start_period(vehicle_id, start_date or self.today())

    def active_period(self, vehicle_id: Optional[str] = None) -> Optional[LogbookPeriod]:
        vehicle_id = vehicle_id or self.active_vehicle_id
        return self.periods.active_period(vehicle_id) if vehicle_id else None

    # -------------------------------------------------------------------------
    # Tracking
    # -------------------------------------------------------------------------

    def start_tracking(
        self,
        vehicle_id: Optional[str] = None,
        trip_type: Union[str, TripType] = TripType.BUSINESS,
        purpose: Optional[str] = None,
        start_odometer: Optional[float] = None,
        start_location: Optional[str] = None,
    ) -> Result:
        """Start live tracking (default vehicle: the active one)."""
        vehicle_id = vehicle_id or self.active_vehicle_id
        if vehicle_id is None:
            return Result.failure(NotFoundError("No vehicle selected"))
        return self.tracker.start_tracking(
            vehicle_id, trip_type, purpose, start_odometer, start_location
        )

    def stop_tracking(self, end_odometer: float, **kwargs) -> Result:
        return self.tracker.stop_tracking(end_odometer, **kwargs)

    def cancel_tracking(self) -> bool:
        return self.tracker.cancel_tracking()

    @property
    def is_tracking(self) -> bool:
        return self.tracker.is_tracking

    @property
    def active_tracking(self) -> Optional[TrackingSession]:
        return self.tracker.active_tracking

    def tracking_duration(self, now: Optional[datetime] = None) -> int:
        return self.tracker.tracking_duration(now)

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    def vehicle_trips(self, vehicle_id: Optional[str] = None) -> List[Trip]:
        vehicle_id = vehicle_id or self.active_vehicle_id
        return self.trips.trips_for_vehicle(vehicle_id) if vehicle_id else []

    def stats(self, vehicle_id: Optional[str] = None) -> LogbookStats:
        """Totals over all of a vehicle's trips, not just the current period."""
        return compute_stats(self.vehicle_trips(vehicle_id))

    def weekly_summaries(self, vehicle_id: Optional[str] = None) -> List[WeeklySummary]:
        """Summaries for the vehicle's active period (empty if none)."""
        period = self.active_period(vehicle_id)
        if period is None:
            return []
        return compute_weekly_summaries(self.vehicle_trips(period.vehicle_id), period)

    def compliance(
        self, vehicle_id: Optional[str] = None, today: Optional[date] = None
    ) -> ComplianceStatus:
        """Evaluate the active period as of today (recomputed on every call)."""
        period = self.active_period(vehicle_id)
        return compute_compliance(
            period, self.weekly_summaries(vehicle_id), today or self.today()
        )

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_csv(self, vehicle_id: Optional[str] = None) -> str:
        return export_csv(self.vehicle_trips(vehicle_id))

    def export_data(
        self, vehicle_id: Optional[str] = None, today: Optional[date] = None
    ) -> Optional[Dict[str, Any]]:
        """Everything about one vehicle as a JSON-ready dict (None if no vehicle)."""
        vehicle_id = vehicle_id or self.active_vehicle_id
        vehicle = self.vehicles.get_vehicle(vehicle_id) if vehicle_id else None
        if vehicle is None:
            return None
        data = export_data(
            vehicle,
            self.vehicle_trips(vehicle.id),
            self.weekly_summaries(vehicle.id),
            self.compliance(vehicle.id, today),
            stats=self.stats(vehicle.id),
            period=self.active_period(vehicle.id),
            exported_at=self.clock(),
        )
        data["vehicle"]["isLogbookActive"] = self.is_logbook_active(vehicle.id)
        return data
