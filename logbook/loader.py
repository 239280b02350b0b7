"""Conversion between logbook objects and their camelCase record dicts."""

from datetime import date, datetime
from typing import Any, Dict

from .logbook_period import LogbookPeriod, LogbookStatus
from .trip import Trip
from .trip_type import TrackingMethod, TripType
from .tracking_session import TrackingSession
from .vehicle import Vehicle


def _iso(value: Any) -> Any:
    """Hand-edited YAML may hold unquoted dates; keep them as ISO strings."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    """Omit None values for cleaner YAML."""
    return {k: v for k, v in d.items() if v is not None}


def vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a Vehicle to the record format (camelCase keys)."""
    return _drop_none(
        {
            "id": vehicle.id,
            "name": vehicle.name,
            "registration": vehicle.registration,
            "make": vehicle.make,
            "model": vehicle.model,
            "year": vehicle.year,
            "odometerReading": vehicle.odometer_reading,
            "odometerDate": vehicle.odometer_date,
        }
    )


def vehicle_from_dict(dct: Dict[str, Any]) -> Vehicle:
    return Vehicle(
        dct["id"],
        dct["name"],
        dct["registration"],
        dct.get("make"),
        dct.get("model"),
        dct.get("year"),
        dct.get("odometerReading", 0),
        _iso(dct.get("odometerDate")),
    )


def trip_to_dict(trip: Trip, include_distance: bool = False) -> Dict[str, Any]:
    """
    Serialize a Trip to the record format (camelCase keys).

    Distance is derived, so it is only written for exports, never for storage.
    """
    d = {
        "id": trip.id,
        "vehicleId": trip.vehicle_id,
        "date": trip.date,
        "startTime": trip.start_time,
        "endTime": trip.end_time,
        "startOdometer": trip.start_odometer,
        "endOdometer": trip.end_odometer,
        "type": trip.trip_type.value,
        "purpose": trip.purpose,
        "startLocation": trip.start_location,
        "endLocation": trip.end_location,
        "trackingMethod": trip.tracking_method.value,
        "createdAt": trip.created_at,
        "updatedAt": trip.updated_at,
    }
    if include_distance:
        d["distance"] = trip.distance
    return _drop_none(d)


def trip_from_dict(dct: Dict[str, Any]) -> Trip:
    return Trip(
        dct["id"],
        dct["vehicleId"],
        _iso(dct["date"]),
        dct["startOdometer"],
        dct["endOdometer"],
        TripType(dct.get("type", TripType.PERSONAL.value)),
        dct.get("purpose"),
        dct.get("startTime"),
        dct.get("endTime"),
        dct.get("startLocation"),
        dct.get("endLocation"),
        TrackingMethod(dct.get("trackingMethod", TrackingMethod.MANUAL.value)),
        dct.get("createdAt"),
        dct.get("updatedAt"),
    )


def period_to_dict(period: LogbookPeriod) -> Dict[str, Any]:
    """Serialize a LogbookPeriod; expiryDate is included for readers of the file."""
    return _drop_none(
        {
            "id": period.id,
            "vehicleId": period.vehicle_id,
            "startDate": period.start_date,
            "status": period.status.value,
            "endDate": period.end_date,
            "targetWeeks": period.target_weeks,
            "expiryDate": period.expiry_date,
        }
    )


def period_from_dict(dct: Dict[str, Any]) -> LogbookPeriod:
    return LogbookPeriod(
        dct["id"],
        dct["vehicleId"],
        _iso(dct["startDate"]),
        LogbookStatus(dct.get("status", LogbookStatus.ACTIVE.value)),
        _iso(dct.get("endDate")),
        dct.get("targetWeeks"),
    )


def session_to_dict(session: TrackingSession) -> Dict[str, Any]:
    return _drop_none(
        {
            "vehicleId": session.vehicle_id,
            "type": session.trip_type.value,
            "purpose": session.purpose,
            "startOdometer": session.start_odometer,
            "startedAt": session.started_at.isoformat(),
            "startLocation": session.start_location,
        }
    )


def session_from_dict(dct: Dict[str, Any]) -> TrackingSession:
    return TrackingSession(
        vehicle_id=dct["vehicleId"],
        trip_type=TripType(dct["type"]),
        start_odometer=dct["startOdometer"],
        started_at=datetime.fromisoformat(_iso(dct["startedAt"])),
        purpose=dct.get("purpose"),
        start_location=dct.get("startLocation"),
    )
