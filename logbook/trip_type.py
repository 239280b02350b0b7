"""Enumerations for trip classification."""

from enum import Enum


class TripType(Enum):
    """Why the vehicle was driven."""

    BUSINESS = "business"
    PERSONAL = "personal"


class TrackingMethod(Enum):
    """How a trip was captured."""

    MANUAL = "manual"
    GPS = "gps"  # Recorded live through a tracking session
