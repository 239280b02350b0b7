#!/usr/bin/env python3
"""Tests for CSV and JSON exports."""

import csv
import io
import json
from datetime import datetime

from logbook import (
    ComplianceStatus,
    Trip,
    TrackingMethod,
    TripType,
    Vehicle,
    export_csv,
    export_data,
)
from logbook.export import CSV_HEADERS


def make_trips():
    return [
        Trip("t2", "v1", "2025-01-07", 10042, 10060, TripType.PERSONAL,
             start_time="17:00", end_time="17:20", start_location='The "Old" Pub'),
        Trip("t1", "v1", "2025-01-06", 10000, 10042, TripType.BUSINESS,
             purpose="Client visit, site inspection", start_time="09:00", end_time="09:35",
             start_location="Depot", end_location="Smith & Co, Level 2",
             tracking_method=TrackingMethod.GPS),
    ]


class TestExportCsv:
    """Tests for export_csv."""

    def test_header_plus_one_line_per_trip(self):
        lines = export_csv(make_trips()).splitlines()
        assert len(lines) == 3

    def test_stable_column_order(self):
        header = export_csv([]).splitlines()[0]
        assert header == (
            "Date,Start Time,End Time,Type,Purpose,Start Location,"
            "End Location,Distance (km),Method"
        )
        assert len(CSV_HEADERS) == 9

    def test_quotes_commas_and_quotes(self):
        text = export_csv(make_trips())
        assert '"Client visit, site inspection"' in text
        assert '"Smith & Co, Level 2"' in text
        assert '"The ""Old"" Pub"' in text

    def test_rows_parse_back(self):
        rows = list(csv.reader(io.StringIO(export_csv(make_trips()))))
        assert rows[1] == [
            "2025-01-06", "09:00", "09:35", "business", "Client visit, site inspection",
            "Depot", "Smith & Co, Level 2", "42.0", "gps",
        ]
        assert rows[2][0] == "2025-01-07"
        assert rows[2][4] == ""
        assert rows[2][7] == "18.0"

    def test_deterministic(self):
        trips = make_trips()
        assert export_csv(trips) == export_csv(list(reversed(trips)))


class TestExportData:
    """Tests for export_data."""

    def test_no_vehicle_returns_none(self):
        assert export_data(None, [], [], ComplianceStatus(can_be_used_for_tax=False)) is None

    def test_combines_everything(self):
        vehicle = Vehicle("v1", "Work ute", "ABC123", odometer_reading=10060)
        compliance = ComplianceStatus(
            can_be_used_for_tax=False, warnings=["Week 2 has no trips"], expiry_date="2030-01-06"
        )
        data = export_data(
            vehicle, make_trips(), [], compliance, exported_at=datetime(2025, 3, 1, 12, 0)
        )

        assert data["vehicle"]["registration"] == "ABC123"
        assert [t["id"] for t in data["trips"]] == ["t1", "t2"]
        assert data["trips"][0]["distance"] == 42
        assert data["period"] == {"startDate": "2025-01-06", "endDate": "2025-01-07", "weeks": 0}
        assert data["compliance"]["canBeUsedForTax"] is False
        assert data["compliance"]["warnings"] == ["Week 2 has no trips"]
        assert data["compliance"]["expiryDate"] == "2030-01-06"
        assert data["weeklySummaries"] == []
        assert data["exportedAt"] == "2025-03-01T12:00:00"

    def test_json_serializable(self):
        vehicle = Vehicle("v1", "Work ute", "ABC123")
        data = export_data(vehicle, make_trips(), [], ComplianceStatus(can_be_used_for_tax=False))
        assert json.loads(json.dumps(data))["vehicle"]["id"] == "v1"
