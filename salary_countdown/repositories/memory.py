"""Volatile, process-local income store."""
from __future__ import annotations

from datetime import datetime
from threading import RLock
from typing import Any, Mapping

from salary_countdown.core.exceptions import ConflictError
from salary_countdown.core.logger import get_logger
from salary_countdown.domain import EarningSession, SalaryConfiguration, utcnow

from .base import IncomeStore, new_id

LOGGER = get_logger(__name__)


class MemoryIncomeStore(IncomeStore):
    """Keep settings and sessions in dictionaries guarded by one lock.

    Records are immutable dataclasses, so returned objects can be shared
    freely; every mutation swaps in a new instance.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._settings: dict[str, SalaryConfiguration] = {}
        self._sessions: dict[str, EarningSession] = {}

    def get_settings(self, settings_id: str) -> SalaryConfiguration | None:
        return self._settings.get(settings_id)

    def create_settings(self, fields: Mapping[str, Any]) -> SalaryConfiguration:
        now = utcnow()
        settings = SalaryConfiguration(
            id=new_id(),
            monthly_salary=fields["monthly_salary"],
            daily_hours=fields["daily_hours"],
            weekly_days=fields["weekly_days"],
            is_holiday=bool(fields.get("is_holiday", False)),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._settings[settings.id] = settings
        return settings

    def update_settings(
        self, settings_id: str, changes: Mapping[str, Any]
    ) -> SalaryConfiguration | None:
        with self._lock:
            existing = self._settings.get(settings_id)
            if existing is None:
                return None
            updated = existing.updated(changes)
            self._settings[settings_id] = updated
            return updated

    def get_session(self, session_id: str) -> EarningSession | None:
        return self._sessions.get(session_id)

    def get_active_session(self, settings_id: str) -> EarningSession | None:
        with self._lock:
            return next(
                (
                    session
                    for session in self._sessions.values()
                    if session.settings_id == settings_id and session.is_active
                ),
                None,
            )

    def create_session(self, settings_id: str) -> EarningSession:
        with self._lock:
            if self.get_active_session(settings_id) is not None:
                raise ConflictError(f"Settings {settings_id} already have an active session")
            session = EarningSession(id=new_id(), settings_id=settings_id, session_start=utcnow())
            self._sessions[session.id] = session
        LOGGER.debug("Opened in-memory session %s for settings %s", session.id, settings_id)
        return session

    def start_session(self, settings_id: str) -> tuple[EarningSession, bool]:
        with self._lock:
            return super().start_session(settings_id)

    def update_session(
        self, session_id: str, changes: Mapping[str, Any]
    ) -> EarningSession | None:
        with self._lock:
            existing = self._sessions.get(session_id)
            if existing is None:
                return None
            if changes.get("is_active") and not existing.is_active:
                if self.get_active_session(existing.settings_id) is not None:
                    raise ConflictError(
                        f"Settings {existing.settings_id} already have an active session"
                    )
            updated = existing.updated(changes)
            self._sessions[session_id] = updated
            return updated

    def close_session(
        self, session_id: str, *, ended_at: datetime, total_earned: float
    ) -> EarningSession | None:
        with self._lock:
            existing = self._sessions.get(session_id)
            if existing is None or not existing.is_active:
                return None
            closed = existing.closed(ended_at=ended_at, total_earned=total_earned)
            self._sessions[session_id] = closed
            return closed
