"""End-to-end tests of the JSON API over the in-memory store."""
from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

from fastapi.testclient import TestClient

from salary_countdown.core.exceptions import PersistenceError
from salary_countdown.main import create_app
from salary_countdown.repositories import MemoryIncomeStore

SETTINGS_BODY = {"monthlySalary": 5000, "dailyHours": 8, "weeklyDays": 5}


def _create_settings(client: TestClient, **overrides: object) -> dict:
    response = client.post("/api/user-settings", json={**SETTINGS_BODY, **overrides})
    assert response.status_code == 200, response.text
    return response.json()


def test_root_says_hello(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "hello"


def test_create_and_get_settings_use_camel_case(client: TestClient) -> None:
    created = _create_settings(client)

    assert created["monthlySalary"] == 5000
    assert created["isHoliday"] is False
    assert {"id", "createdAt", "updatedAt"} <= created.keys()

    fetched = client.get(f"/api/user-settings/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_create_settings_validation_error(client: TestClient) -> None:
    response = client.post(
        "/api/user-settings",
        json={"monthlySalary": 0, "dailyHours": 30, "weeklyDays": 5},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid input"
    assert {tuple(error["path"]) for error in body["errors"]} == {("monthlySalary",), ("dailyHours",)}


def test_get_unknown_settings(client: TestClient) -> None:
    response = client.get("/api/user-settings/nope")

    assert response.status_code == 404
    assert response.json() == {"message": "Settings not found"}


def test_patch_settings_applies_only_supplied_fields(client: TestClient) -> None:
    created = _create_settings(client, isHoliday=True)

    response = client.patch(f"/api/user-settings/{created['id']}", json={"dailyHours": 6})

    assert response.status_code == 200
    body = response.json()
    assert body["dailyHours"] == 6
    assert body["monthlySalary"] == 5000
    assert body["isHoliday"] is True
    assert body["createdAt"] == created["createdAt"]


def test_patch_settings_rejects_null_and_out_of_range(client: TestClient) -> None:
    created = _create_settings(client)

    null_response = client.patch(f"/api/user-settings/{created['id']}", json={"monthlySalary": None})
    range_response = client.patch(f"/api/user-settings/{created['id']}", json={"weeklyDays": 8})

    assert null_response.status_code == 400
    assert range_response.status_code == 400


def test_patch_unknown_settings(client: TestClient) -> None:
    response = client.patch("/api/user-settings/nope", json={"dailyHours": 6})

    assert response.status_code == 404


def test_calculate_rates(client: TestClient) -> None:
    created = _create_settings(client)

    response = client.get(f"/api/calculate-rates/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {
        "perMinute": 0.48,
        "perHour": 28.87,
        "perDay": 230.95,
        "monthlyHours": 173.2,
    }


def test_calculate_rates_unknown_settings(client: TestClient) -> None:
    response = client.get("/api/calculate-rates/nope")

    assert response.status_code == 404
    assert response.json() == {"message": "Settings not found"}


def test_start_session_requires_settings_id(client: TestClient) -> None:
    response = client.post("/api/income-session", json={})

    assert response.status_code == 400
    assert response.json() == {"message": "User settings ID is required"}


def test_start_session_without_body_requires_settings_id(client: TestClient) -> None:
    response = client.post("/api/income-session")

    assert response.status_code == 400
    assert response.json() == {"message": "User settings ID is required"}


def test_session_lifecycle(client: TestClient, memory_store: MemoryIncomeStore) -> None:
    settings = _create_settings(client)

    started = client.post("/api/income-session", json={"userSettingsId": settings["id"]})
    assert started.status_code == 200
    session = started.json()
    assert session["isActive"] is True
    assert session["totalEarned"] == 0
    assert session["userSettingsId"] == settings["id"]

    resumed = client.post("/api/income-session", json={"userSettingsId": settings["id"]})
    assert resumed.json()["id"] == session["id"]

    active = client.get(f"/api/income-session/{settings['id']}")
    assert active.status_code == 200
    assert active.json()["id"] == session["id"]

    patched = client.patch(f"/api/income-session/{session['id']}", json={"totalEarned": 42.5})
    assert patched.status_code == 200
    assert patched.json()["totalEarned"] == 42.5
    assert patched.json()["isActive"] is True

    # Pretend the session started an hour ago.
    stored = memory_store.get_session(session["id"])
    memory_store._sessions[stored.id] = replace(
        stored, session_start=stored.session_start - timedelta(hours=1)
    )

    ended = client.delete(f"/api/income-session/{session['id']}")
    assert ended.status_code == 200
    body = ended.json()
    assert body["isActive"] is False
    assert body["sessionEnd"] is not None
    assert 28.87 <= body["totalEarned"] <= 28.9

    again = client.delete(f"/api/income-session/{session['id']}")
    assert again.status_code == 404
    assert again.json() == {"message": "Active session not found"}

    no_active = client.get(f"/api/income-session/{settings['id']}")
    assert no_active.status_code == 404
    assert no_active.json() == {"message": "No active session found"}


def test_end_session_with_missing_settings(client: TestClient) -> None:
    started = client.post("/api/income-session", json={"userSettingsId": "ghost"})

    response = client.delete(f"/api/income-session/{started.json()['id']}")

    assert response.status_code == 404
    assert response.json() == {"message": "User settings not found"}


def test_update_unknown_session(client: TestClient) -> None:
    response = client.patch("/api/income-session/nope", json={"totalEarned": 1})

    assert response.status_code == 404
    assert response.json() == {"message": "Session not found"}


def test_request_id_header_is_echoed(client: TestClient) -> None:
    response = client.get("/api/user-settings/nope", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"


class _UnavailableStore(MemoryIncomeStore):
    def get_settings(self, settings_id: str):
        raise PersistenceError("Could not load salary settings")


def test_storage_failures_become_generic_500() -> None:
    app = create_app(store=_UnavailableStore())
    with TestClient(app) as client:
        response = client.get("/api/calculate-rates/anything")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


def test_api_docs_are_served(client: TestClient) -> None:
    response = client.get("/api-docs")

    assert response.status_code == 200
    assert "Salary Countdown API" in response.text
