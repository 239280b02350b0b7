"""Logbook rule constants and environment-driven settings."""

import os
from pathlib import Path

# A logbook must cover 12 consecutive weeks and stays valid for 5 years
MINIMUM_LOGBOOK_WEEKS = 12
LOGBOOK_VALID_YEARS = 5
DAYS_PER_WEEK = 7

BUSINESS_PURPOSES = [
    "Travel between workplaces",
    "Travel to client/customer site",
    "Travel to conference or training",
    "Travel to pick up supplies/equipment",
    "Travel for work-related errand",
    "Other work-related travel",
]

DEFAULT_LOGBOOK_FILE = "logbook.yaml"


def default_logbook_file() -> Path:
    """Logbook file used when none is given explicitly."""
    return Path(os.environ.get("TRIPLOG_FILE", DEFAULT_LOGBOOK_FILE))

# Trips longer than this are recorded but flagged for a second look
LONG_TRIP_KM = 2000
