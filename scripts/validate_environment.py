#!/usr/bin/env python3
"""Validate local reservations environment readiness."""

from __future__ import annotations

import importlib
import shutil
import sys
import tempfile
from dataclasses import replace
from datetime import datetime, timedelta
from importlib.metadata import version
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.models import NewReservation
from backend.repository.data_repository import DataRepository
from backend.services.reservation_service import ReservationService
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True
    temp_dir = tempfile.mkdtemp(prefix="reservations-env-")

    # CHECK 1 — Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 — Required packages importable with versions
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("pandas", "pandas"),
        ("requests", "requests"),
        ("streamlit", "streamlit"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            version(dist_name)
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    try:
        validation_settings = replace(
            get_settings(),
            database_path=Path(temp_dir) / "reservations_validation.db",
        )
        repository = DataRepository(validation_settings)

        # CHECK 3 — Database initialization
        try:
            repository.initialize_database()
            ok, line = _print_result("Database initialization", True)
        except Exception as exc:
            ok, line = _print_result("Database initialization", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 4 — Demo seeding
        try:
            seeded_halls = repository.seed_demo_data()
            expected = len(validation_settings.seed_lecture_hall_numbers)
            if seeded_halls != expected:
                raise RuntimeError(f"expected {expected} halls, got {seeded_halls}")
            ok, line = _print_result("Demo seeding", True, f": {seeded_halls} halls")
        except Exception as exc:
            ok, line = _print_result("Demo seeding", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 5 — Validator and free-hours smoke run
        try:
            service = ReservationService(repository=repository, settings=validation_settings)
            tomorrow = datetime.now().replace(minute=0, second=0, microsecond=0) + timedelta(days=1)
            hall_number = validation_settings.seed_lecture_hall_numbers[0]
            proposal = NewReservation(
                start_time=tomorrow.replace(hour=9),
                end_time=tomorrow.replace(hour=11),
                lecture_hall_number=hall_number,
                lecturer_id=1,
            )
            added = service.add(proposal)
            if added.reservation_id is None:
                raise RuntimeError("reasons: " + ",".join(added.outcome.reasons))
            statistics = {
                item.hall_number: item.free_hours
                for item in service.get_halls_free_hours_by_day(tomorrow.date())
            }
            if statistics.get(hall_number) != 8:
                raise RuntimeError(f"expected 8 free hours, got {statistics.get(hall_number)}")
            ok, line = _print_result("Reservation core smoke run", True)
        except Exception as exc:
            ok, line = _print_result("Reservation core smoke run", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    print(SEPARATOR_LINE)
    print(" Reservations Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
