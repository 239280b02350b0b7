"""Vehicle registry: vehicle records and their current odometer readings."""

import logging
from datetime import date
from typing import Callable, List, Optional

from .calculations import is_number
from .errors import LogbookError, NotFoundError, ValidationError
from .loader import vehicle_from_dict, vehicle_to_dict
from .result import Result
from .store import new_id
from .vehicle import Vehicle, validate_vehicle

logger = logging.getLogger(__name__)

KIND = "vehicles"

# Fields a caller may change through update_vehicle
EDITABLE_FIELDS = ("name", "registration", "make", "model", "year")


class VehicleRegistry:
    """Creates, reads and updates Vehicle records held in a store."""

    def __init__(self, store, id_factory: Callable[[], str] = new_id):
        self.store = store
        self.id_factory = id_factory

    def get_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        """Find a vehicle by id."""
        if not isinstance(vehicle_id, str):
            return None
        record = self.store.get(KIND, vehicle_id)
        return vehicle_from_dict(record) if record else None

    def require_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = self.get_vehicle(vehicle_id)
        if vehicle is None:
            raise NotFoundError(f"Unknown vehicle '{vehicle_id}'")
        return vehicle

    def list_vehicles(self) -> List[Vehicle]:
        """All vehicles, sorted by name."""
        vehicles = [vehicle_from_dict(r) for r in self.store.list(KIND)]
        return sorted(vehicles, key=lambda v: (v.name.lower(), v.registration))

    def add_vehicle(
        self,
        name: str,
        registration: str,
        make: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[int] = None,
        odometer_reading: float = 0,
        odometer_date: Optional[str] = None,
    ) -> Result:
        """Register a new vehicle. Fails if name or registration is empty."""
        vehicle = Vehicle(
            self.id_factory(),
            name.strip() if isinstance(name, str) else name,
            registration.strip() if isinstance(registration, str) else registration,
            make,
            model,
            year,
            odometer_reading,
            odometer_date or date.today().isoformat(),
        )
        errors = validate_vehicle(vehicle)
        if errors:
            logger.warning("Rejected vehicle %r: %s", name, "; ".join(errors))
            return Result.failure(ValidationError(errors))

        self.store.put(KIND, vehicle.id, vehicle_to_dict(vehicle))
        logger.info("Added vehicle %s (%s)", vehicle.id, vehicle.display_name)
        return Result.ok(vehicle)

    def update_vehicle(self, vehicle_id: str, **changes) -> Result:
        """
        Change descriptive fields of a vehicle.

        The odometer can only move forward here too; use
        odometer_reading/odometer_date keywords for that.
        """
        try:
            vehicle = self.require_vehicle(vehicle_id)
            unknown = set(changes) - set(EDITABLE_FIELDS) - {
                "odometer_reading",
                "odometer_date",
            }
            if unknown:
                raise ValidationError(
                    [f"Field '{f}' cannot be changed" for f in sorted(unknown)]
                )
            for field_name in EDITABLE_FIELDS:
                if field_name in changes:
                    setattr(vehicle, field_name, changes[field_name])
            reading = changes.get("odometer_reading")
            if reading is not None:
                if not is_number(reading):
                    raise ValidationError("Odometer reading must be a number")
                if reading < vehicle.odometer_reading:
                    raise ValidationError(
                        "Odometer reading cannot be lower than the current reading"
                    )
                vehicle.advance_odometer(reading, changes.get("odometer_date"))
            errors = validate_vehicle(vehicle)
            if errors:
                raise ValidationError(errors)
        except LogbookError as e:
            logger.warning("Rejected update of vehicle %s: %s", vehicle_id, e)
            return Result.failure(e)

        self.store.put(KIND, vehicle.id, vehicle_to_dict(vehicle))
        logger.info("Updated vehicle %s", vehicle.id)
        return Result.ok(vehicle)

    def advance_odometer(
        self, vehicle_id: str, reading: float, as_of: Optional[str] = None
    ) -> Optional[Vehicle]:
        """
        Raise a vehicle's odometer to reading if it is higher.

        Keeps the stored reading monotonic: max(current, reading).
        """
        vehicle = self.get_vehicle(vehicle_id)
        if vehicle is None:
            return None
        if vehicle.advance_odometer(reading, as_of):
            self.store.put(KIND, vehicle.id, vehicle_to_dict(vehicle))
            logger.debug("Vehicle %s odometer now %s", vehicle.id, reading)
        return vehicle

    def remove(self, vehicle_id: str) -> bool:
        """Delete only the vehicle record (see Logbook.delete_vehicle for cascade)."""
        return self.store.delete(KIND, vehicle_id)
