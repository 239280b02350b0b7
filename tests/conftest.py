"""Shared fixtures for logbook tests."""

from datetime import datetime, timedelta

import pytest

from logbook import Logbook, MemoryStore


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 6, 9, 0, 0))


@pytest.fixture
def logbook(clock):
    return Logbook(MemoryStore(), clock=clock)


@pytest.fixture
def vehicle(logbook):
    result = logbook.add_vehicle(
        "Work ute", "ABC123", make="Toyota", model="Hilux", year=2020,
        odometer_reading=10000, odometer_date="2025-01-01",
    )
    return result.vehicle
