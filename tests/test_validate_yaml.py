#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

from datetime import datetime

from logbook import Logbook, YamlStore
from validate_yaml import load_schema, validate_logbook_file


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        schema = load_schema()
        assert "vehicles" in schema["properties"]
        assert "trips" in schema["properties"]


class TestValidateLogbookFile:
    """Tests for validate_logbook_file function."""

    def test_file_written_by_engine_is_valid(self, tmp_path):
        """A logbook produced by the engine passes validation."""
        path = tmp_path / "logbook.yaml"
        logbook = Logbook(YamlStore(path), clock=lambda: datetime(2025, 1, 6, 9, 0))
        vehicle = logbook.add_vehicle("Work ute", "ABC123", odometer_reading=10000).vehicle
        logbook.start_logbook_period(vehicle.id, "2025-01-06")
        logbook.trips.add_trip(vehicle.id, "2025-01-06", 10000, 10042, "business", "Client visit",
                               start_time="09:00", end_time="09:35")
        logbook.start_tracking(vehicle.id, "personal")

        assert validate_logbook_file(path, load_schema()) == []

    def test_missing_required_field_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  v1:
    id: v1
    name: Work ute
    odometerReading: 100
""")
        errors = validate_logbook_file(path, load_schema())
        assert len(errors) >= 1
        assert any("Schema validation" in e for e in errors)

    def test_odometer_order_checked(self, tmp_path):
        path = tmp_path / "bad-trip.yaml"
        path.write_text("""
vehicles:
  v1: {id: v1, name: Ute, registration: ABC, odometerReading: 100}
trips:
  t1:
    id: t1
    vehicleId: v1
    date: '2025-01-06'
    startOdometer: 100
    endOdometer: 80
    type: business
    trackingMethod: manual
""")
        errors = validate_logbook_file(path, load_schema())
        assert "Trip t1: end odometer is below start odometer" in errors
        assert "Trip t1: business trip has no purpose" in errors

    def test_two_active_periods_flagged(self, tmp_path):
        path = tmp_path / "periods.yaml"
        path.write_text("""
vehicles:
  v1: {id: v1, name: Ute, registration: ABC, odometerReading: 0}
periods:
  p1: {id: p1, vehicleId: v1, startDate: '2025-01-06', status: active}
  p2: {id: p2, vehicleId: v1, startDate: '2025-03-06', status: active}
""")
        errors = validate_logbook_file(path, load_schema())
        assert len(errors) == 1
        assert "more than one active logbook period" in errors[0]

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("""
vehicles:
  v1: [unclosed
""")
        errors = validate_logbook_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_logbook_file(tmp_path / "does_not_exist.yaml", load_schema())
        assert len(errors) >= 1
        assert errors[0].startswith("Error")
