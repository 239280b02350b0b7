"""Trip store: completed trips and the odometer side effects of recording them."""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from .errors import LogbookError, NotFoundError, ValidationError
from .loader import trip_from_dict, trip_to_dict
from .registry import VehicleRegistry
from .result import Result
from .store import new_id
from .trip import (
    Trip,
    parse_tracking_method,
    parse_trip_type,
    trip_warnings,
    validate_trip,
)
from .trip_type import TrackingMethod, TripType

logger = logging.getLogger(__name__)

KIND = "trips"

# Fields a caller may change through update_trip
EDITABLE_FIELDS = (
    "date",
    "start_time",
    "end_time",
    "start_odometer",
    "end_odometer",
    "trip_type",
    "purpose",
    "start_location",
    "end_location",
)


def _as_iso(day: Union[str, date]) -> str:
    return day.isoformat() if isinstance(day, date) else day


class TripStore:
    """Validates, stores and queries Trip records."""

    def __init__(
        self,
        store,
        registry: VehicleRegistry,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.registry = registry
        self.id_factory = id_factory
        self.clock = clock

    def _save(self, trip: Trip) -> None:
        self.store.put(KIND, trip.id, trip_to_dict(trip))

    def _check(self, trip: Trip) -> None:
        """Raise if the trip breaks any rule or references an unknown vehicle."""
        errors = validate_trip(trip)
        if errors:
            raise ValidationError(errors)
        self.registry.require_vehicle(trip.vehicle_id)

    def _warn(self, trip: Trip) -> List[str]:
        warnings = trip_warnings(trip)
        for warning in warnings:
            logger.warning("Trip %s: %s", trip.id, warning)
        return warnings

    def add_trip(
        self,
        vehicle_id: str,
        date: Union[str, date],
        start_odometer: float,
        end_odometer: float,
        trip_type: Union[str, TripType] = TripType.PERSONAL,
        purpose: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        start_location: Optional[str] = None,
        end_location: Optional[str] = None,
        tracking_method: Union[str, TrackingMethod] = TrackingMethod.MANUAL,
    ) -> Result:
        """
        Record a completed trip.

        Never raises for bad input: returns Result(success=False, errors=[...])
        instead. On success the owning vehicle's odometer advances to the
        trip's end reading if that is higher.
        """
        now = self.clock().isoformat(timespec="seconds")
        try:
            trip = Trip(
                self.id_factory(),
                vehicle_id,
                _as_iso(date),
                start_odometer,
                end_odometer,
                parse_trip_type(trip_type),
                purpose,
                start_time,
                end_time,
                start_location,
                end_location,
                parse_tracking_method(tracking_method),
                created_at=now,
                updated_at=now,
            )
            self._check(trip)
        except LogbookError as e:
            logger.warning("Rejected trip for vehicle %s: %s", vehicle_id, e)
            return Result.failure(e)

        self._save(trip)
        self.registry.advance_odometer(trip.vehicle_id, trip.end_odometer, trip.date)
        logger.info(
            "Recorded %s trip %s: %s km on %s",
            trip.trip_type.value,
            trip.id,
            trip.distance,
            trip.date,
        )
        return Result.ok(trip, self._warn(trip))

    def get_trip(self, trip_id: str) -> Optional[Trip]:
        if not isinstance(trip_id, str):
            return None
        record = self.store.get(KIND, trip_id)
        return trip_from_dict(record) if record else None

    def update_trip(self, trip_id: str, **changes) -> Result:
        """
        Edit a trip, re-validating every rule.

        Distance follows from the new odometer readings. The vehicle odometer
        may advance but is never moved back.
        """
        try:
            trip = self.get_trip(trip_id)
            if trip is None:
                raise NotFoundError(f"Unknown trip '{trip_id}'")
            unknown = set(changes) - set(EDITABLE_FIELDS)
            if unknown:
                raise ValidationError(
                    [f"Field '{f}' cannot be changed" for f in sorted(unknown)]
                )
            for field_name, value in changes.items():
                if field_name == "trip_type":
                    value = parse_trip_type(value)
                elif field_name == "date":
                    value = _as_iso(value)
                setattr(trip, field_name, value)
            self._check(trip)
        except LogbookError as e:
            logger.warning("Rejected edit of trip %s: %s", trip_id, e)
            return Result.failure(e)

        trip.updated_at = self.clock().isoformat(timespec="seconds")
        self._save(trip)
        self.registry.advance_odometer(trip.vehicle_id, trip.end_odometer, trip.date)
        logger.info("Updated trip %s", trip.id)
        return Result.ok(trip, self._warn(trip))

    def delete_trip(self, trip_id: str) -> bool:
        """
        Remove a trip.

        The vehicle's odometer is left alone: it reflects the last known
        physical reading, not a replay of the remaining trips.
        """
        removed = self.store.delete(KIND, trip_id)
        if removed:
            logger.info("Deleted trip %s", trip_id)
        return removed

    def delete_trips_for_vehicle(self, vehicle_id: str) -> int:
        trips = self.trips_for_vehicle(vehicle_id)
        for trip in trips:
            self.store.delete(KIND, trip.id)
        return len(trips)

    def all_trips(self) -> List[Trip]:
        """Every trip, oldest first."""
        trips = [trip_from_dict(r) for r in self.store.list(KIND)]
        return sorted(trips, key=lambda t: (t.date, t.start_time or "", t.start_odometer))

    def trips_for_vehicle(self, vehicle_id: str) -> List[Trip]:
        """A vehicle's trips, oldest first."""
        return [t for t in self.all_trips() if t.vehicle_id == vehicle_id]

    def trips_in_date_range(
        self,
        start: Union[str, date],
        end: Union[str, date],
        vehicle_id: Optional[str] = None,
    ) -> List[Trip]:
        """Trips dated between start and end (both inclusive), oldest first."""
        start, end = _as_iso(start), _as_iso(end)
        trips = self.trips_for_vehicle(vehicle_id) if vehicle_id else self.all_trips()
        return [t for t in trips if start <= t.date <= end]
