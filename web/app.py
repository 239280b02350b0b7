"""Flask JSON API for the vehicle trip logbook."""

from datetime import date
from pathlib import Path
from typing import Optional

from flask import Flask, Response, jsonify, request

from logbook import BUSINESS_PURPOSES, MINIMUM_LOGBOOK_WEEKS, Logbook, Result, YamlStore
from logbook.config import default_logbook_file
from logbook.export import compliance_to_dict, stats_to_dict, summary_to_dict
from logbook.loader import period_to_dict, session_to_dict, trip_to_dict, vehicle_to_dict

app = Flask(__name__)
app.config.setdefault("LOGBOOK_FILE", default_logbook_file())

# HTTP status per error type
ERROR_STATUS = {
    "ValidationError": 400,
    "NotFoundError": 404,
    "SessionConflictError": 409,
}


def get_logbook() -> Logbook:
    """Open the configured logbook file (re-read on every request)."""
    return Logbook(YamlStore(Path(app.config["LOGBOOK_FILE"])))


def error_response(result: Result):
    status = ERROR_STATUS.get(result.error_type, 400)
    return jsonify({"success": False, "errors": result.errors}), status


def trip_response(result: Result):
    return jsonify(
        {
            "success": True,
            "trip": trip_to_dict(result.trip, include_distance=True),
            "warnings": result.warnings,
        }
    )


def parse_number(value) -> Optional[float]:
    """A JSON number or numeric string as float; None when absent."""
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{value!r} is not a number")
    return float(value)


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@app.errorhandler(ValueError)
def bad_number(error):
    return jsonify({"success": False, "errors": [f"Invalid value: {error}"]}), 400


# =============================================================================
# Vehicles
# =============================================================================


@app.route("/api/vehicles", methods=["GET"])
def list_vehicles():
    """All vehicles, flagging the active one and open logbooks."""
    logbook = get_logbook()
    active_id = logbook.active_vehicle_id
    vehicles = []
    for vehicle in logbook.vehicles.list_vehicles():
        d = vehicle_to_dict(vehicle)
        d["isActive"] = vehicle.id == active_id
        d["isLogbookActive"] = logbook.is_logbook_active(vehicle.id)
        vehicles.append(d)
    return jsonify({"vehicles": vehicles, "activeVehicleId": active_id})


@app.route("/api/vehicles", methods=["POST"])
def add_vehicle():
    body = json_body()
    result = get_logbook().add_vehicle(
        body.get("name"),
        body.get("registration"),
        make=body.get("make"),
        model=body.get("model"),
        year=body.get("year"),
        odometer_reading=parse_number(body.get("odometerReading")),
        odometer_date=body.get("odometerDate"),
    )
    if not result.success:
        return error_response(result)
    return jsonify({"success": True, "vehicle": vehicle_to_dict(result.vehicle)}), 201


@app.route("/api/vehicles/<vehicle_id>", methods=["DELETE"])
def delete_vehicle(vehicle_id: str):
    result = get_logbook().delete_vehicle(vehicle_id)
    if not result.success:
        return error_response(result)
    return jsonify({"success": True})


@app.route("/api/active-vehicle", methods=["PUT"])
def set_active_vehicle():
    result = get_logbook().set_active_vehicle(json_body().get("vehicleId"))
    if not result.success:
        return error_response(result)
    vehicle = result.vehicle
    return jsonify({"success": True, "vehicle": vehicle_to_dict(vehicle) if vehicle else None})


@app.route("/api/logbook-period", methods=["POST"])
def start_logbook_period():
    body = json_body()
    result = get_logbook().start_logbook_period(
        vehicle_id=body.get("vehicleId"), start_date=body.get("startDate")
    )
    if not result.success:
        return error_response(result)
    return jsonify({"success": True, "period": period_to_dict(result.value)}), 201


# =============================================================================
# Trips
# =============================================================================


@app.route("/api/trips", methods=["GET"])
def list_trips():
    """Trips for the active vehicle, optionally limited to ?start=&end= dates."""
    logbook = get_logbook()
    vehicle_id = request.args.get("vehicleId") or logbook.active_vehicle_id
    start = request.args.get("start")
    end = request.args.get("end")
    if vehicle_id is None:
        trips = []
    elif start or end:
        trips = logbook.trips.trips_in_date_range(
            start or "0000-01-01", end or "9999-12-31", vehicle_id
        )
    else:
        trips = logbook.vehicle_trips(vehicle_id)
    return jsonify({"trips": [trip_to_dict(t, include_distance=True) for t in trips]})


@app.route("/api/trips", methods=["POST"])
def add_trip():
    logbook = get_logbook()
    body = json_body()
    result = logbook.trips.add_trip(
        vehicle_id=body.get("vehicleId") or logbook.active_vehicle_id,
        date=body.get("date") or date.today().isoformat(),
        start_odometer=parse_number(body.get("startOdometer")),
        end_odometer=parse_number(body.get("endOdometer")),
        trip_type=body.get("type", "personal"),
        purpose=body.get("purpose"),
        start_time=body.get("startTime"),
        end_time=body.get("endTime"),
        start_location=body.get("startLocation"),
        end_location=body.get("endLocation"),
        tracking_method=body.get("trackingMethod", "manual"),
    )
    if not result.success:
        return error_response(result)
    return trip_response(result), 201


@app.route("/api/trips/<trip_id>", methods=["PATCH"])
def update_trip(trip_id: str):
    """Edit a trip; body uses the camelCase record keys."""
    body = json_body()
    fields = {
        "date": "date",
        "startTime": "start_time",
        "endTime": "end_time",
        "startOdometer": "start_odometer",
        "endOdometer": "end_odometer",
        "type": "trip_type",
        "purpose": "purpose",
        "startLocation": "start_location",
        "endLocation": "end_location",
    }
    changes = {}
    for key, value in body.items():
        if key not in fields:
            return jsonify({"success": False, "errors": [f"Field '{key}' cannot be changed"]}), 400
        if key in ("startOdometer", "endOdometer"):
            value = parse_number(value)
        changes[fields[key]] = value
    result = get_logbook().trips.update_trip(trip_id, **changes)
    if not result.success:
        return error_response(result)
    return trip_response(result)


@app.route("/api/trips/<trip_id>", methods=["DELETE"])
def delete_trip(trip_id: str):
    if not get_logbook().trips.delete_trip(trip_id):
        return jsonify({"success": False, "errors": [f"Unknown trip '{trip_id}'"]}), 404
    return jsonify({"success": True})


# =============================================================================
# Tracking
# =============================================================================


@app.route("/api/tracking", methods=["GET"])
def tracking_state():
    logbook = get_logbook()
    session = logbook.active_tracking
    return jsonify(
        {
            "isTracking": session is not None,
            "trackingDuration": logbook.tracking_duration(),
            "activeTracking": session_to_dict(session) if session else None,
        }
    )


@app.route("/api/tracking/start", methods=["POST"])
def start_tracking():
    body = json_body()
    result = get_logbook().start_tracking(
        vehicle_id=body.get("vehicleId"),
        trip_type=body.get("type", "business"),
        purpose=body.get("purpose"),
        start_odometer=parse_number(body.get("startOdometer")),
        start_location=body.get("startLocation"),
    )
    if not result.success:
        return error_response(result)
    return jsonify({"success": True, "activeTracking": session_to_dict(result.value)}), 201


@app.route("/api/tracking/stop", methods=["POST"])
def stop_tracking():
    body = json_body()
    end_odometer = parse_number(body.get("endOdometer"))
    if end_odometer is None:
        return jsonify({"success": False, "errors": ["End odometer is required"]}), 400
    result = get_logbook().stop_tracking(
        end_odometer, purpose=body.get("purpose"), end_location=body.get("endLocation")
    )
    if not result.success:
        return error_response(result)
    return trip_response(result)


@app.route("/api/tracking/cancel", methods=["POST"])
def cancel_tracking():
    return jsonify({"success": get_logbook().cancel_tracking()})


# =============================================================================
# Derived views and export
# =============================================================================


@app.route("/api/summary", methods=["GET"])
def summary():
    """Stats, weekly summaries and compliance for the active vehicle."""
    logbook = get_logbook()
    vehicle_id = request.args.get("vehicleId") or logbook.active_vehicle_id
    return jsonify(
        {
            "stats": stats_to_dict(logbook.stats(vehicle_id)),
            "weeklySummaries": [summary_to_dict(s) for s in logbook.weekly_summaries(vehicle_id)],
            "compliance": compliance_to_dict(logbook.compliance(vehicle_id)),
            "businessPurposes": BUSINESS_PURPOSES,
            "minWeeks": MINIMUM_LOGBOOK_WEEKS,
        }
    )


@app.route("/api/export.csv", methods=["GET"])
def export_csv():
    content = get_logbook().export_csv(request.args.get("vehicleId"))
    return Response(
        content,
        mimetype="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=logbook.csv"},
    )


@app.route("/api/export.json", methods=["GET"])
def export_json():
    data = get_logbook().export_data(request.args.get("vehicleId"))
    if data is None:
        return jsonify({"success": False, "errors": ["No vehicle selected"]}), 404
    return jsonify(data)


if __name__ == "__main__":
    # Run with debug mode for development
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
