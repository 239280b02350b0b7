#!/usr/bin/env python3
"""Tests for MemoryStore, YamlStore and record conversion."""

from datetime import datetime

import yaml

from logbook import LogbookPeriod, MemoryStore, TrackingMethod, Trip, TripType, YamlStore
from logbook.loader import (
    period_from_dict,
    period_to_dict,
    session_from_dict,
    trip_from_dict,
    trip_to_dict,
    vehicle_from_dict,
)


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_put_get_list_delete(self):
        store = MemoryStore()
        store.put("vehicles", "v1", {"id": "v1", "name": "Ute"})
        assert store.get("vehicles", "v1") == {"id": "v1", "name": "Ute"}
        assert store.list("vehicles") == [{"id": "v1", "name": "Ute"}]
        assert store.delete("vehicles", "v1") is True
        assert store.get("vehicles", "v1") is None
        assert store.delete("vehicles", "v1") is False

    def test_records_are_copied(self):
        store = MemoryStore()
        record = {"id": "v1", "name": "Ute"}
        store.put("vehicles", "v1", record)
        record["name"] = "Changed"
        store.get("vehicles", "v1")["name"] = "Also changed"
        assert store.get("vehicles", "v1")["name"] == "Ute"

    def test_unknown_kind_is_empty(self):
        assert MemoryStore().list("nothing") == []


class TestYamlStore:
    """Tests for YamlStore."""

    def test_missing_file_starts_empty(self, tmp_path):
        store = YamlStore(tmp_path / "new.yaml")
        assert store.list("vehicles") == []
        assert not (tmp_path / "new.yaml").exists()

    def test_writes_through_on_put(self, tmp_path):
        path = tmp_path / "logbook.yaml"
        YamlStore(path).put("vehicles", "v1", {"id": "v1", "name": "Ute"})

        with open(path) as fp:
            data = yaml.safe_load(fp)
        assert data == {"vehicles": {"v1": {"id": "v1", "name": "Ute"}}}
        assert YamlStore(path).get("vehicles", "v1")["name"] == "Ute"

    def test_delete_persists(self, tmp_path):
        path = tmp_path / "logbook.yaml"
        store = YamlStore(path)
        store.put("trips", "t1", {"id": "t1"})
        store.delete("trips", "t1")
        assert YamlStore(path).get("trips", "t1") is None

    def test_dates_stay_strings(self, tmp_path):
        """ISO dates are written quoted so they load back as strings."""
        path = tmp_path / "logbook.yaml"
        YamlStore(path).put("periods", "p1", {"id": "p1", "startDate": "2025-01-06"})
        assert YamlStore(path).get("periods", "p1")["startDate"] == "2025-01-06"

    def test_save_creates_empty_file(self, tmp_path):
        path = tmp_path / "logbook.yaml"
        YamlStore(path).save()
        assert path.exists()


class TestLoader:
    """Tests for record conversion."""

    def test_trip_record_omits_distance(self):
        trip = Trip("t1", "v1", "2025-01-06", 100, 142, TripType.BUSINESS, purpose="Client")
        record = trip_to_dict(trip)
        assert "distance" not in record
        assert record["type"] == "business"
        assert record["trackingMethod"] == "manual"
        assert "startTime" not in record
        assert trip_to_dict(trip, include_distance=True)["distance"] == 42

    def test_trip_round_trip(self):
        trip = Trip("t1", "v1", "2025-01-06", 100, 142, TripType.BUSINESS,
                    purpose="Client", start_time="09:00", tracking_method=TrackingMethod.GPS)
        loaded = trip_from_dict(trip_to_dict(trip))
        assert loaded.distance == 42
        assert loaded.trip_type == TripType.BUSINESS
        assert loaded.tracking_method == TrackingMethod.GPS
        assert loaded.start_time == "09:00"

    def test_period_record_includes_expiry(self):
        record = period_to_dict(LogbookPeriod("p1", "v1", "2025-01-06"))
        assert record["expiryDate"] == "2030-01-06"
        assert record["status"] == "active"
        assert period_from_dict(record).target_weeks == 12

    def test_unquoted_yaml_dates_accepted(self):
        """Hand-edited files may contain date objects instead of strings."""
        data = yaml.safe_load(
            """
id: t1
vehicleId: v1
date: 2025-01-06
startOdometer: 100
endOdometer: 120
"""
        )
        assert trip_from_dict(data).date == "2025-01-06"

    def test_vehicle_defaults(self):
        vehicle = vehicle_from_dict({"id": "v1", "name": "Ute", "registration": "ABC"})
        assert vehicle.odometer_reading == 0
        assert vehicle.make is None

    def test_session_started_at_parsed(self):
        session = session_from_dict(
            {"vehicleId": "v1", "type": "business", "startOdometer": 5,
             "startedAt": "2025-01-06T09:00:00"}
        )
        assert session.started_at == datetime(2025, 1, 6, 9, 0, 0)
        assert session.trip_type == TripType.BUSINESS
