"""Tests for the income service orchestration."""
from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

import pytest

from salary_countdown.core.exceptions import NotFoundError
from salary_countdown.repositories import IncomeStore, MemoryIncomeStore
from salary_countdown.services import IncomeService

FIELDS = {"monthly_salary": 5000, "daily_hours": 8, "weekly_days": 5}


@pytest.fixture()
def any_service(store: IncomeStore) -> IncomeService:
    return IncomeService(store)


def test_calculate_rates_for_stored_settings(any_service: IncomeService) -> None:
    settings = any_service.create_settings(FIELDS)

    rates = any_service.calculate_rates(settings.id)

    assert (rates.per_minute, rates.per_hour, rates.per_day, rates.monthly_hours) == (
        0.48,
        28.87,
        230.95,
        173.2,
    )


def test_calculate_rates_for_unknown_settings_is_not_found(monkeypatch) -> None:
    service = IncomeService(MemoryIncomeStore())
    calls: list[object] = []
    monkeypatch.setattr(
        "salary_countdown.services.income_service.calculate_rates",
        lambda config: calls.append(config),
    )

    with pytest.raises(NotFoundError, match="Settings not found"):
        service.calculate_rates("missing")
    assert calls == []


def test_update_settings_changes_rates(any_service: IncomeService) -> None:
    settings = any_service.create_settings(FIELDS)

    any_service.update_settings(settings.id, {"monthly_salary": 3000})

    assert any_service.calculate_rates(settings.id).per_hour == 17.32


def test_update_unknown_settings_is_not_found(any_service: IncomeService) -> None:
    with pytest.raises(NotFoundError):
        any_service.update_settings("missing", {"daily_hours": 4})


def test_start_session_returns_existing_active_session(any_service: IncomeService) -> None:
    settings = any_service.create_settings(FIELDS)

    first = any_service.start_session(settings.id)
    second = any_service.start_session(settings.id)

    assert second.id == first.id
    assert any_service.get_active_session(settings.id).id == first.id


def test_get_active_session_when_none_is_running(any_service: IncomeService) -> None:
    with pytest.raises(NotFoundError, match="No active session found"):
        any_service.get_active_session("settings-without-session")


def test_end_session_settles_elapsed_time(any_service: IncomeService) -> None:
    settings = any_service.create_settings(FIELDS)
    session = any_service.start_session(settings.id)

    ended = any_service.end_session(session.id, now=session.session_start + timedelta(minutes=60))

    assert ended.is_active is False
    assert ended.total_earned == 28.87
    assert ended.session_end == session.session_start + timedelta(minutes=60)
    with pytest.raises(NotFoundError):
        any_service.get_active_session(settings.id)


def test_end_session_ignores_running_total(any_service: IncomeService) -> None:
    settings = any_service.create_settings(FIELDS)
    session = any_service.start_session(settings.id)
    any_service.update_session_earnings(session.id, 999.0)

    ended = any_service.end_session(session.id, now=session.session_start + timedelta(minutes=30))

    assert ended.total_earned == 14.43


def test_end_inactive_session_is_not_found_and_unchanged(any_service: IncomeService) -> None:
    settings = any_service.create_settings(FIELDS)
    session = any_service.start_session(settings.id)
    ended = any_service.end_session(session.id, now=session.session_start + timedelta(minutes=10))

    with pytest.raises(NotFoundError, match="Active session not found"):
        any_service.end_session(session.id, now=session.session_start + timedelta(hours=5))

    assert any_service.store.get_session(session.id) == ended


def test_end_unknown_session_is_not_found(any_service: IncomeService) -> None:
    with pytest.raises(NotFoundError, match="Active session not found"):
        any_service.end_session("missing")


def test_end_session_without_settings_is_not_found(any_service: IncomeService) -> None:
    session = any_service.start_session("deleted-settings")

    with pytest.raises(NotFoundError, match="User settings not found"):
        any_service.end_session(session.id)

    assert any_service.store.get_session(session.id).is_active is True


def test_end_session_reports_lost_race_as_not_found(monkeypatch) -> None:
    store = MemoryIncomeStore()
    service = IncomeService(store)
    settings = service.create_settings(FIELDS)
    session = service.start_session(settings.id)
    closed_elsewhere = store.close_session(
        session.id, ended_at=session.session_start + timedelta(minutes=1), total_earned=0.48
    )
    # The first read still sees the session as active.
    monkeypatch.setattr(store, "get_session", lambda _id: replace(closed_elsewhere, is_active=True))

    with pytest.raises(NotFoundError, match="Active session not found"):
        service.end_session(session.id, now=session.session_start + timedelta(hours=2))

    assert store._sessions[session.id] == closed_elsewhere


def test_update_session_earnings_unknown_session(any_service: IncomeService) -> None:
    with pytest.raises(NotFoundError, match="Session not found"):
        any_service.update_session_earnings("missing", 1.0)
