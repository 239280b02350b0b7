"""
Live trip tracking.

A two-state machine (idle / tracking) with a single session slot shared by
all vehicles. The tracker keeps only the session's start instant; callers
drive any elapsed-time display from their own clock via tracking_duration().
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from .calculations import is_number
from .errors import LogbookError, SessionConflictError, ValidationError
from .loader import session_from_dict, session_to_dict
from .registry import VehicleRegistry
from .result import Result
from .trip import parse_trip_type
from .trip_store import TripStore
from .trip_type import TrackingMethod, TripType
from .tracking_session import TrackingSession

logger = logging.getLogger(__name__)

KIND = "sessions"
SLOT = "active"  # The one and only session key


class Tracker:
    """Starts, stops and cancels the live tracking session."""

    def __init__(
        self,
        store,
        registry: VehicleRegistry,
        trip_store: TripStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.registry = registry
        self.trip_store = trip_store
        self.clock = clock

    @property
    def active_tracking(self) -> Optional[TrackingSession]:
        """The live session, or None when idle."""
        record = self.store.get(KIND, SLOT)
        return session_from_dict(record) if record else None

    @property
    def is_tracking(self) -> bool:
        return self.active_tracking is not None

    def tracking_duration(self, now: Optional[datetime] = None) -> int:
        """Seconds since the live session started (0 when idle)."""
        session = self.active_tracking
        if session is None:
            return 0
        return session.duration(now or self.clock())

    def start_tracking(
        self,
        vehicle_id: str,
        trip_type: Union[str, TripType],
        purpose: Optional[str] = None,
        start_odometer: Optional[float] = None,
        start_location: Optional[str] = None,
    ) -> Result:
        """
        Idle -> tracking.

        Fails with SessionConflictError while another session is live; the
        existing session is left untouched. start_odometer defaults to the
        vehicle's current reading.
        """
        try:
            current = self.active_tracking
            if current is not None:
                raise SessionConflictError(
                    f"A trip is already being tracked for vehicle "
                    f"'{current.vehicle_id}'; stop it before starting another"
                )
            vehicle = self.registry.require_vehicle(vehicle_id)
            if start_odometer is None:
                start_odometer = vehicle.odometer_reading
            errors = []
            if not is_number(start_odometer):
                errors.append("Start odometer must be a number")
            elif start_odometer < 0:
                errors.append("Start odometer cannot be negative")
            for value, label in ((purpose, "Purpose"), (start_location, "Start location")):
                if value is not None and not isinstance(value, str):
                    errors.append(f"{label} must be text")
            if errors:
                raise ValidationError(errors)
            session = TrackingSession(
                vehicle_id=vehicle.id,
                trip_type=parse_trip_type(trip_type),
                start_odometer=start_odometer,
                started_at=self.clock(),
                purpose=purpose,
                start_location=start_location,
            )
        except LogbookError as e:
            logger.warning("Could not start tracking: %s", e)
            return Result.failure(e)

        self.store.put(KIND, SLOT, session_to_dict(session))
        logger.info(
            "Started tracking %s trip for vehicle %s at %s",
            session.trip_type.value,
            session.vehicle_id,
            session.start_odometer,
        )
        return Result.ok(session)

    def stop_tracking(
        self,
        end_odometer: float,
        purpose: Optional[str] = None,
        end_location: Optional[str] = None,
    ) -> Result:
        """
        Tracking -> idle, recording the session as a GPS trip.

        If the trip fails validation the session stays live so the caller
        can retry with a corrected reading.
        """
        session = self.active_tracking
        if session is None:
            error = SessionConflictError("No trip is currently being tracked")
            logger.warning("Could not stop tracking: %s", error)
            return Result.failure(error)

        now = self.clock()
        if not is_number(end_odometer):
            error = ValidationError("End odometer must be a number")
            logger.warning("Could not stop tracking: %s", error)
            return Result.failure(error)
        if end_odometer < session.start_odometer:
            error = ValidationError(
                f"End odometer ({end_odometer}) must be at least the start "
                f"odometer ({session.start_odometer})"
            )
            logger.warning("Could not stop tracking: %s", error)
            return Result.failure(error)

        result = self.trip_store.add_trip(
            vehicle_id=session.vehicle_id,
            date=session.started_at.date().isoformat(),
            start_odometer=session.start_odometer,
            end_odometer=end_odometer,
            trip_type=session.trip_type,
            purpose=purpose or session.purpose,
            start_time=session.started_at.strftime("%H:%M"),
            end_time=now.strftime("%H:%M"),
            start_location=session.start_location,
            end_location=end_location,
            tracking_method=TrackingMethod.GPS,
        )
        if not result.success:
            return result

        self.store.delete(KIND, SLOT)
        logger.info(
            "Stopped tracking after %ss; recorded trip %s",
            session.duration(now),
            result.trip.id,
        )
        return result

    def cancel_tracking(self) -> bool:
        """Discard the live session without recording a trip."""
        removed = self.store.delete(KIND, SLOT)
        if removed:
            logger.info("Cancelled tracking session")
        return removed
