#!/usr/bin/env python3
"""Tests for the Logbook engine: cross-component operations and derived views."""

from datetime import date, timedelta

import pytest

from logbook import LogbookStatus


def add_weekly_trips(logbook, vehicle, start, weeks, odometer=10000):
    """One business trip on the first day of each week index given."""
    for i in weeks:
        day = start + timedelta(days=7 * i)
        result = logbook.trips.add_trip(
            vehicle_id=vehicle.id,
            date=day,
            start_odometer=odometer + i * 100,
            end_odometer=odometer + i * 100 + 50,
            trip_type="business",
            purpose="Client visit",
        )
        assert result.success


class TestActiveVehicle:
    """Tests for the active-vehicle selection."""

    def test_first_vehicle_becomes_active(self, logbook, vehicle):
        assert logbook.active_vehicle_id == vehicle.id
        assert logbook.active_vehicle.name == "Work ute"

    def test_second_vehicle_does_not_steal_selection(self, logbook, vehicle):
        logbook.add_vehicle("Family car", "XYZ789")
        assert logbook.active_vehicle_id == vehicle.id

    def test_set_active_vehicle(self, logbook, vehicle):
        other = logbook.add_vehicle("Family car", "XYZ789").vehicle
        assert logbook.set_active_vehicle(other.id).success
        assert logbook.active_vehicle_id == other.id

    def test_unknown_vehicle_rejected(self, logbook, vehicle):
        result = logbook.set_active_vehicle("missing")
        assert result.error_type == "NotFoundError"
        assert logbook.active_vehicle_id == vehicle.id

    def test_clear(self, logbook, vehicle):
        logbook.set_active_vehicle(None)
        assert logbook.active_vehicle is None


class TestDeleteVehicle:
    """Tests for the cascading vehicle delete."""

    def test_cascades_to_trips_periods_and_session(self, logbook, vehicle):
        logbook.start_logbook_period(vehicle.id, "2025-01-06")
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(2))
        logbook.start_tracking(vehicle.id, "personal")

        assert logbook.delete_vehicle(vehicle.id).success

        assert logbook.vehicles.get_vehicle(vehicle.id) is None
        assert logbook.trips.all_trips() == []
        assert logbook.periods.periods_for_vehicle(vehicle.id) == []
        assert not logbook.is_tracking
        assert logbook.active_vehicle_id is None

    def test_other_vehicles_untouched(self, logbook, vehicle):
        other = logbook.add_vehicle("Family car", "XYZ789").vehicle
        add_weekly_trips(logbook, other, date(2025, 1, 6), range(1), odometer=0)
        logbook.start_tracking(other.id, "personal")

        logbook.delete_vehicle(vehicle.id)

        assert len(logbook.trips.trips_for_vehicle(other.id)) == 1
        assert logbook.is_tracking

    def test_unknown_vehicle(self, logbook):
        assert logbook.delete_vehicle("missing").error_type == "NotFoundError"


class TestLogbookPeriods:
    """Tests for starting and archiving logbook periods."""

    def test_start_period(self, logbook, vehicle):
        result = logbook.start_logbook_period(vehicle.id, "2025-01-06")
        assert result.success
        period = result.value
        assert period.expiry_date == "2030-01-06"
        assert logbook.is_logbook_active(vehicle.id)

    def test_compact_start_date_rejected(self, logbook, vehicle):
        result = logbook.start_logbook_period(vehicle.id, "20250106")
        assert result.error_type == "ValidationError"
        assert logbook.active_period(vehicle.id) is None

    def test_non_string_start_date_rejected(self, logbook, vehicle):
        result = logbook.start_logbook_period(vehicle.id, 20250106)
        assert result.error_type == "ValidationError"

    def test_defaults_to_active_vehicle_and_today(self, logbook, vehicle):
        period = logbook.start_logbook_period().value
        assert period.vehicle_id == vehicle.id
        assert period.start_date == "2025-01-06"

    def test_restart_archives_previous(self, logbook, vehicle):
        first = logbook.start_logbook_period(vehicle.id, "2025-01-06").value
        second = logbook.start_logbook_period(vehicle.id, "2025-06-02").value

        periods = {p.id: p for p in logbook.periods.periods_for_vehicle(vehicle.id)}
        assert periods[first.id].status == LogbookStatus.EXPIRED
        assert periods[first.id].end_date == "2025-06-02"
        assert periods[second.id].is_active
        assert logbook.active_period(vehicle.id).id == second.id

    def test_invalid_date(self, logbook, vehicle):
        result = logbook.start_logbook_period(vehicle.id, "June 2nd")
        assert result.error_type == "ValidationError"
        assert not logbook.is_logbook_active(vehicle.id)

    def test_no_vehicle(self, logbook):
        assert logbook.start_logbook_period().error_type == "NotFoundError"


class TestDerivedViews:
    """Tests for stats, weekly summaries and compliance."""

    def test_no_period_means_no_summaries(self, logbook, vehicle):
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(2))
        assert logbook.weekly_summaries() == []
        assert logbook.compliance().can_be_used_for_tax is False

    def test_stats_cover_all_trips(self, logbook, vehicle):
        """Stats include trips from before the logbook period started."""
        add_weekly_trips(logbook, vehicle, date(2024, 12, 2), range(2))
        logbook.start_logbook_period(vehicle.id, "2025-01-06")
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(1), odometer=20000)

        assert logbook.stats().total_trips == 3
        assert len(logbook.weekly_summaries()) == 1

    def test_full_logbook_is_compliant(self, logbook, vehicle):
        logbook.start_logbook_period(vehicle.id, "2025-01-06")
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(12))

        compliance = logbook.compliance(today=date(2025, 4, 1))
        assert compliance.can_be_used_for_tax
        assert compliance.warnings == []

    def test_deleting_a_week_breaks_compliance(self, logbook, vehicle):
        logbook.start_logbook_period(vehicle.id, "2025-01-06")
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(12))
        week_five = logbook.trips.trips_in_date_range("2025-02-03", "2025-02-09")[0]

        logbook.trips.delete_trip(week_five.id)

        compliance = logbook.compliance(today=date(2025, 4, 1))
        assert not compliance.can_be_used_for_tax
        assert compliance.gap_weeks == [4]

    def test_compliance_recomputed_against_clock(self, logbook, vehicle, clock):
        logbook.start_logbook_period(vehicle.id, "2025-01-06")
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(12))
        assert logbook.compliance().can_be_used_for_tax

        clock.advance(days=365 * 5 + 2)
        assert not logbook.compliance().can_be_used_for_tax


class TestExport:
    """Tests for the engine's export views."""

    def test_export_data_without_vehicle(self, logbook):
        assert logbook.export_data() is None

    def test_export_data(self, logbook, vehicle):
        logbook.start_logbook_period(vehicle.id, "2025-01-06")
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(3))

        data = logbook.export_data()

        assert data["vehicle"]["id"] == vehicle.id
        assert data["vehicle"]["isLogbookActive"] is True
        assert len(data["trips"]) == 3
        assert len(data["weeklySummaries"]) == 3
        assert data["summary"]["totalTrips"] == 3
        assert data["logbookPeriod"]["startDate"] == "2025-01-06"
        assert data["compliance"]["canBeUsedForTax"] is False

    def test_export_csv_for_active_vehicle(self, logbook, vehicle):
        other = logbook.add_vehicle("Family car", "XYZ789").vehicle
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(2))
        add_weekly_trips(logbook, other, date(2025, 1, 6), range(1), odometer=0)
        assert len(logbook.export_csv().splitlines()) == 3

    @pytest.mark.parametrize("weeks", [0, 1])
    def test_export_csv_line_count(self, logbook, vehicle, weeks):
        add_weekly_trips(logbook, vehicle, date(2025, 1, 6), range(weeks))
        assert len(logbook.export_csv().splitlines()) == 1 + weeks
