"""Service tying salary settings, earning sessions and the rate math together."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from salary_countdown.core.exceptions import NotFoundError
from salary_countdown.core.logger import get_logger, timeit
from salary_countdown.domain import (
    EarningSession,
    RateBreakdown,
    SalaryConfiguration,
    calculate_rates,
    settle_session,
    utcnow,
)
from salary_countdown.repositories import IncomeStore

LOGGER = get_logger(__name__)


class IncomeService:
    """One method per externally observable income operation.

    Missing records surface as :class:`NotFoundError`; storage failures
    propagate as ``PersistenceError`` for the HTTP layer to translate.
    """

    def __init__(self, store: IncomeStore) -> None:
        self._store = store

    @property
    def store(self) -> IncomeStore:
        return self._store

    # Salary settings
    def create_settings(self, fields: Mapping[str, Any]) -> SalaryConfiguration:
        settings = self._store.create_settings(fields)
        LOGGER.info("Created salary settings %s", settings.id)
        return settings

    def get_settings(self, settings_id: str) -> SalaryConfiguration:
        settings = self._store.get_settings(settings_id)
        if settings is None:
            raise NotFoundError("Settings not found")
        return settings

    def update_settings(self, settings_id: str, changes: Mapping[str, Any]) -> SalaryConfiguration:
        settings = self._store.update_settings(settings_id, changes)
        if settings is None:
            raise NotFoundError("Settings not found")
        fields = ", ".join(sorted(changes)) or "no fields"
        LOGGER.info("Updated salary settings %s (%s)", settings_id, fields)
        return settings

    def calculate_rates(self, settings_id: str) -> RateBreakdown:
        """Derive earning rates for the stored settings."""

        return calculate_rates(self.get_settings(settings_id))

    # Earning sessions
    def start_session(self, settings_id: str) -> EarningSession:
        """Return the active session for ``settings_id``, opening one if none exists."""

        session, created = self._store.start_session(settings_id)
        if created:
            LOGGER.info("Started session %s for settings %s", session.id, settings_id)
        else:
            LOGGER.info("Resumed active session %s for settings %s", session.id, settings_id)
        return session

    def get_active_session(self, settings_id: str) -> EarningSession:
        session = self._store.get_active_session(settings_id)
        if session is None:
            raise NotFoundError("No active session found")
        return session

    def update_session_earnings(self, session_id: str, total_earned: float) -> EarningSession:
        """Overwrite the running total without settling the session."""

        session = self._store.update_session(session_id, {"total_earned": total_earned})
        if session is None:
            raise NotFoundError("Session not found")
        return session

    def end_session(self, session_id: str, *, now: datetime | None = None) -> EarningSession:
        """Settle an active session and close it.

        Fails with :class:`NotFoundError` when the session is unknown or
        already closed, or when its settings have disappeared. A session that
        another request closes first is reported the same way and left as
        that request wrote it.
        """

        session = self._store.get_session(session_id)
        if session is None or not session.is_active:
            raise NotFoundError("Active session not found")

        settings = self._store.get_settings(session.settings_id)
        if settings is None:
            raise NotFoundError("User settings not found")

        settlement = settle_session(settings, session.session_start, now or utcnow())
        with timeit(f"Closing session {session_id}", logger=LOGGER):
            closed = self._store.close_session(
                session_id,
                ended_at=settlement.ended_at,
                total_earned=settlement.earned,
            )
        if closed is None:
            raise NotFoundError("Active session not found")

        LOGGER.info(
            "Ended session %s after %.2f minutes, earned %.2f",
            session_id,
            settlement.elapsed_minutes,
            settlement.earned,
        )
        return closed
