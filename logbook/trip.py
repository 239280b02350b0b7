"""Trip class for completed journeys and the rules they must satisfy."""

from datetime import date as date_cls
from typing import List, Optional, Union

from .calculations import is_iso_date, is_number
from .config import LONG_TRIP_KM
from .errors import ValidationError
from .trip_type import TrackingMethod, TripType


class Trip:
    """A completed journey recorded against a vehicle."""

    def __init__(
        self,
        id: str,
        vehicle_id: str,
        date: str,
        start_odometer: float,
        end_odometer: float,
        trip_type: TripType = TripType.PERSONAL,
        purpose: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        start_location: Optional[str] = None,
        end_location: Optional[str] = None,
        tracking_method: TrackingMethod = TrackingMethod.MANUAL,
        created_at: Optional[str] = None,
        updated_at: Optional[str] = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.date = date
        self.start_odometer = start_odometer
        self.end_odometer = end_odometer
        self.trip_type = trip_type
        self.purpose = purpose
        self.start_time = start_time
        self.end_time = end_time
        self.start_location = start_location
        self.end_location = end_location
        self.tracking_method = tracking_method
        self.created_at = created_at
        self.updated_at = updated_at

    @property
    def distance(self) -> float:
        """Distance travelled, always derived from the odometer readings."""
        return self.end_odometer - self.start_odometer

    @property
    def is_business(self) -> bool:
        return self.trip_type == TripType.BUSINESS

    @property
    def trip_date(self) -> date_cls:
        return date_cls.fromisoformat(self.date)


# Optional free-text fields and how they are named in errors
TEXT_FIELDS = (
    ("purpose", "Purpose"),
    ("start_time", "Start time"),
    ("end_time", "End time"),
    ("start_location", "Start location"),
    ("end_location", "End location"),
)


def validate_trip(trip: Trip) -> List[str]:
    """Return a list of problems with a trip's fields (empty if valid)."""
    errors = []

    if not isinstance(trip.vehicle_id, str) or not trip.vehicle_id:
        errors.append("Trip must belong to a vehicle")

    if not is_iso_date(trip.date):
        errors.append(f"Invalid trip date: {trip.date!r} (expected YYYY-MM-DD)")

    start_ok = is_number(trip.start_odometer)
    end_ok = is_number(trip.end_odometer)
    if not start_ok:
        errors.append("Start odometer must be a number")
    elif trip.start_odometer < 0:
        errors.append("Start odometer cannot be negative")
    if not end_ok:
        errors.append("End odometer must be a number")
    elif start_ok and trip.end_odometer < trip.start_odometer:
        errors.append("End odometer must be greater than or equal to start odometer")

    for attr, label in TEXT_FIELDS:
        value = getattr(trip, attr)
        if value is not None and not isinstance(value, str):
            errors.append(f"{label} must be text")

    purpose = trip.purpose
    if trip.trip_type == TripType.BUSINESS and (
        purpose is None or (isinstance(purpose, str) and not purpose.strip())
    ):
        errors.append("Business trips require a purpose")

    return errors


def trip_warnings(trip: Trip) -> List[str]:
    """Non-blocking remarks about a valid trip, such as a suspicious distance."""
    warnings = []
    if trip.distance > LONG_TRIP_KM:
        warnings.append(
            f"Trip distance of {trip.distance:,.1f} km is over {LONG_TRIP_KM:,} km; "
            f"check the odometer readings"
        )
    return warnings


def parse_trip_type(value: Union[str, TripType]) -> TripType:
    """Coerce a wire value into a TripType, raising ValidationError if unknown."""
    if isinstance(value, TripType):
        return value
    try:
        return TripType(str(value).lower())
    except ValueError:
        allowed = ", ".join(t.value for t in TripType)
        raise ValidationError(f"Unknown trip type {value!r} (expected one of: {allowed})")


def parse_tracking_method(value: Union[str, TrackingMethod]) -> TrackingMethod:
    """Coerce a wire value into a TrackingMethod, raising ValidationError if unknown."""
    if isinstance(value, TrackingMethod):
        return value
    try:
        return TrackingMethod(str(value).lower())
    except ValueError:
        allowed = ", ".join(m.value for m in TrackingMethod)
        raise ValidationError(
            f"Unknown tracking method {value!r} (expected one of: {allowed})"
        )
