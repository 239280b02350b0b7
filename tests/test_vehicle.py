#!/usr/bin/env python3
"""Tests for Vehicle class."""

from logbook import Vehicle, validate_vehicle


class TestVehicle:
    """Tests for Vehicle class."""

    def test_attributes(self):
        """All attributes are stored correctly."""
        v = Vehicle("v1", "Work ute", "ABC123", "Toyota", "Hilux", 2020, 10000, "2025-01-01")
        assert v.id == "v1"
        assert v.name == "Work ute"
        assert v.registration == "ABC123"
        assert v.make == "Toyota"
        assert v.model == "Hilux"
        assert v.year == 2020
        assert v.odometer_reading == 10000
        assert v.odometer_date == "2025-01-01"

    def test_display_name(self):
        v = Vehicle("v1", "Work ute", "ABC123")
        assert v.display_name == "Work ute (ABC123)"

    def test_odometer_defaults_to_zero(self):
        v = Vehicle("v1", "Work ute", "ABC123", odometer_reading=None)
        assert v.odometer_reading == 0


class TestAdvanceOdometer:
    """Tests for Vehicle.advance_odometer."""

    def test_higher_reading_advances(self):
        v = Vehicle("v1", "Work ute", "ABC123", odometer_reading=10000)
        assert v.advance_odometer(10042, "2025-01-06") is True
        assert v.odometer_reading == 10042
        assert v.odometer_date == "2025-01-06"

    def test_lower_reading_ignored(self):
        """Reading never goes backwards."""
        v = Vehicle("v1", "Work ute", "ABC123", odometer_reading=10000, odometer_date="2025-01-01")
        assert v.advance_odometer(9000, "2025-01-06") is False
        assert v.odometer_reading == 10000
        assert v.odometer_date == "2025-01-01"

    def test_equal_reading_ignored(self):
        v = Vehicle("v1", "Work ute", "ABC123", odometer_reading=10000)
        assert v.advance_odometer(10000) is False


class TestValidateVehicle:
    """Tests for validate_vehicle."""

    def test_valid(self):
        assert validate_vehicle(Vehicle("v1", "Work ute", "ABC123")) == []

    def test_empty_name(self):
        errors = validate_vehicle(Vehicle("v1", "  ", "ABC123"))
        assert errors == ["Vehicle name is required"]

    def test_empty_registration(self):
        errors = validate_vehicle(Vehicle("v1", "Work ute", ""))
        assert errors == ["Vehicle registration is required"]

    def test_negative_odometer(self):
        errors = validate_vehicle(Vehicle("v1", "Work ute", "ABC123", odometer_reading=-1))
        assert len(errors) == 1

    def test_non_text_name(self):
        errors = validate_vehicle(Vehicle("v1", 123, "ABC123"))
        assert errors == ["Vehicle name must be text"]

    def test_string_odometer(self):
        errors = validate_vehicle(Vehicle("v1", "Work ute", "ABC123", odometer_reading="10000"))
        assert errors == ["Odometer reading must be a number"]

    def test_non_integer_year(self):
        errors = validate_vehicle(Vehicle("v1", "Work ute", "ABC123", year="2020"))
        assert errors == ["Year must be a whole number"]

    def test_bad_odometer_date(self):
        errors = validate_vehicle(Vehicle("v1", "Work ute", "ABC123", odometer_date="20250101"))
        assert len(errors) == 1
        assert "Invalid odometer date" in errors[0]
