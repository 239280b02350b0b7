"""Vehicle class for registered vehicles and their odometer state."""

from typing import List, Optional

from .calculations import is_iso_date, is_number


class Vehicle:
    """A registered vehicle with its latest known odometer reading."""

    def __init__(
        self,
        id: str,
        name: str,
        registration: str,
        make: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[int] = None,
        odometer_reading: float = 0,
        odometer_date: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.registration = registration
        self.make = make
        self.model = model
        self.year = year
        self.odometer_reading = odometer_reading or 0
        self.odometer_date = odometer_date

    @property
    def display_name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.name} ({self.registration})"

    def advance_odometer(self, reading: float, as_of: Optional[str] = None) -> bool:
        """
        Move the odometer forward to reading.

        The stored reading never goes backwards; returns True if it changed.
        """
        if not is_number(reading) or reading <= self.odometer_reading:
            return False
        self.odometer_reading = reading
        if as_of is not None:
            self.odometer_date = as_of
        return True


def validate_vehicle(vehicle: Vehicle) -> List[str]:
    """Return a list of problems with a vehicle's fields (empty if valid)."""
    errors = []
    for attr, label in (("name", "Vehicle name"), ("registration", "Vehicle registration")):
        value = getattr(vehicle, attr)
        if value is not None and not isinstance(value, str):
            errors.append(f"{label} must be text")
        elif not (value or "").strip():
            errors.append(f"{label} is required")
    for attr, label in (("make", "Make"), ("model", "Model")):
        value = getattr(vehicle, attr)
        if value is not None and not isinstance(value, str):
            errors.append(f"{label} must be text")
    if vehicle.year is not None and (
        isinstance(vehicle.year, bool) or not isinstance(vehicle.year, int)
    ):
        errors.append("Year must be a whole number")
    if not is_number(vehicle.odometer_reading):
        errors.append("Odometer reading must be a number")
    elif vehicle.odometer_reading < 0:
        errors.append("Odometer reading cannot be negative")
    if vehicle.odometer_date is not None and not is_iso_date(vehicle.odometer_date):
        errors.append(
            f"Invalid odometer date: {vehicle.odometer_date!r} (expected YYYY-MM-DD)"
        )
    return errors
