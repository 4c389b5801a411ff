from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta

from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.controllers.reservation_controller import router
from backend.repository.data_repository import DataRepository
from backend.services.reservation_service import ReservationService
from backend.utils.config import get_settings


def _build_test_app(tmp_path) -> tuple[FastAPI, DataRepository]:
    settings = replace(
        get_settings(),
        database_path=tmp_path / "reservation_flow.db",
        seed_lecture_hall_numbers=(201, 202),
    )
    repository = DataRepository(settings)
    repository.initialize_database()
    repository.seed_demo_data()

    app = FastAPI()
    app.include_router(router)
    app.state.repository = repository
    app.state.reservation_service = ReservationService(repository=repository, settings=settings)
    return app, repository


def _payload(day: date, start_hour: int, end_hour: int, hall_number: int = 202, lecturer_id: int = 1):
    return {
        "start_time": f"{day.isoformat()}T{start_hour:02d}:00:00",
        "end_time": f"{day.isoformat()}T{end_hour:02d}:00:00",
        "lecture_hall_number": hall_number,
        "lecturer_id": lecturer_id,
    }


def test_reservation_end_to_end_flow(tmp_path):
    app, repository = _build_test_app(tmp_path)
    client = TestClient(app)
    day = date.today() + timedelta(days=1)

    created = client.post("/reservations", json=_payload(day, 13, 14))
    assert created.status_code == 201
    assert created.json()["validation"] == {"admitted": True, "result": 1, "reasons": []}
    client.post("/reservations", json=_payload(day, 9, 10))
    client.post("/reservations", json=_payload(day, 10, 11))
    assert repository.count_reservations() == 3

    reservation_id = created.json()["id"]
    fetched = client.get(f"/reservations/{reservation_id}")
    assert fetched.status_code == 200
    assert fetched.json()["lecture_hall_number"] == 202
    assert fetched.json()["lecturer_id"] == 1

    schedule = client.get(
        "/reservations/by_day",
        params={"day": day.isoformat(), "hall_number": 202},
    )
    assert schedule.status_code == 200
    assert [item["start_time"][11:16] for item in schedule.json()] == ["09:00", "10:00", "13:00"]

    empty_schedule = client.get(
        "/reservations/by_day",
        params={"day": day.isoformat(), "hall_number": 201},
    )
    assert empty_schedule.status_code == 200
    assert empty_schedule.json() == []

    free_hours = client.get("/lecture_halls/free_hours", params={"day": day.isoformat()})
    assert free_hours.status_code == 200
    assert {item["hall_number"]: item["free_hours"] for item in free_hours.json()} == {
        201: 10,
        202: 7,
    }

    deleted = client.delete(f"/reservations/{reservation_id}")
    assert deleted.status_code == 204
    assert client.delete(f"/reservations/{reservation_id}").status_code == 204
    assert client.get(f"/reservations/{reservation_id}").status_code == 404
    assert len(client.get("/reservations").json()) == 2


def test_rejected_reservation_reports_every_reason(tmp_path):
    app, repository = _build_test_app(tmp_path)
    client = TestClient(app)
    day = date.today() + timedelta(days=1)
    client.post("/reservations", json=_payload(day, 9, 12))

    response = client.post("/reservations", json=_payload(day, 10, 11, lecturer_id=42))

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["admitted"] is False
    assert detail["reasons"] == ["CONFLICTING", "LECTURER_DOES_NOT_EXIST"]
    assert repository.count_reservations() == 1


def test_validate_does_not_store(tmp_path):
    app, repository = _build_test_app(tmp_path)
    client = TestClient(app)
    day = date.today() + timedelta(days=1)

    response = client.post(
        "/reservations/validate",
        json=_payload(day, 7, 12, hall_number=999),
    )

    assert response.status_code == 200
    assert response.json()["reasons"] == [
        "OUTSIDE_WORKING_HOURS",
        "TOO_LONG",
        "HALL_DOES_NOT_EXIST",
    ]
    assert repository.count_reservations() == 0


def test_unknown_hall_schedule_is_not_found(tmp_path):
    app, _ = _build_test_app(tmp_path)
    client = TestClient(app)

    response = client.get(
        "/reservations/by_day",
        params={"day": "2015-01-02", "hall_number": 999},
    )

    assert response.status_code == 404


def test_free_hours_for_today_is_rejected(tmp_path):
    app, _ = _build_test_app(tmp_path)
    client = TestClient(app)

    response = client.get("/lecture_halls/free_hours", params={"day": date.today().isoformat()})

    assert response.status_code == 400


def test_timezone_aware_times_are_rejected(tmp_path):
    app, _ = _build_test_app(tmp_path)
    client = TestClient(app)
    payload = _payload(date.today() + timedelta(days=1), 9, 10)
    payload["start_time"] += "Z"

    response = client.post("/reservations/validate", json=payload)

    assert response.status_code == 422


def test_registries_are_listed(tmp_path):
    app, _ = _build_test_app(tmp_path)
    client = TestClient(app)

    halls = client.get("/lecture_halls")
    lecturers = client.get("/lecturers")

    assert [item["number"] for item in halls.json()] == [201, 202]
    assert len(lecturers.json()) == 3
