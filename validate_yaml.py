#!/usr/bin/env python3
"""Validate logbook YAML files against the schema."""
import sys
from pathlib import Path
from typing import List

import yaml
from jsonschema import validate, ValidationError


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def check_trip_rules(data: dict) -> List[str]:
    """Rules the schema cannot express: odometer order, purposes, vehicle refs."""
    errors = []
    vehicles = data.get("vehicles") or {}
    for trip_id, trip in (data.get("trips") or {}).items():
        if trip.get("endOdometer", 0) < trip.get("startOdometer", 0):
            errors.append(f"Trip {trip_id}: end odometer is below start odometer")
        if trip.get("type") == "business" and not (trip.get("purpose") or "").strip():
            errors.append(f"Trip {trip_id}: business trip has no purpose")
        if trip.get("vehicleId") not in vehicles:
            errors.append(f"Trip {trip_id}: unknown vehicle '{trip.get('vehicleId')}'")

    active = {}
    for period_id, period in (data.get("periods") or {}).items():
        if period.get("status") == "active":
            vehicle_id = period.get("vehicleId")
            if vehicle_id in active:
                errors.append(
                    f"Vehicle {vehicle_id}: more than one active logbook period "
                    f"({active[vehicle_id]}, {period_id})"
                )
            active[vehicle_id] = period_id
    return errors


def validate_logbook_file(filepath: Path, schema: dict) -> List[str]:
    """Validate a single logbook YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f) or {}
        validate(instance=data, schema=schema)
        errors.extend(check_trip_rules(data))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given logbook files (default: *.yaml in the current directory)."""
    argv = sys.argv[1:] if argv is None else argv
    schema = load_schema()

    files = [Path(a) for a in argv]
    if not files:
        files = [
            p
            for p in sorted(Path.cwd().glob("*.yaml")) + sorted(Path.cwd().glob("*.yml"))
            if p.name != "schema.yaml"
        ]

    if not files:
        print(f"Warning: No YAML files found in {Path.cwd()}")
        return 0

    all_valid = True
    for filepath in files:
        errors = validate_logbook_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
