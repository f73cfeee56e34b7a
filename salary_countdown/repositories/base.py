"""Storage contract shared by the in-memory and SQL income stores."""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping
from uuid import uuid4

from salary_countdown.core.exceptions import ConflictError
from salary_countdown.domain import EarningSession, SalaryConfiguration


def new_id() -> str:
    """Return an opaque identifier for a new record."""

    return uuid4().hex


class IncomeStore(ABC):
    """Persistence capability for salary settings and earning sessions.

    Lookups return ``None`` for unknown ids; the service layer decides how a
    missing record is reported. Implementations raise
    :class:`~salary_countdown.core.exceptions.PersistenceError` when the
    underlying storage fails.
    """

    # Salary settings
    @abstractmethod
    def get_settings(self, settings_id: str) -> SalaryConfiguration | None:
        """Return the settings stored under ``settings_id``."""

    @abstractmethod
    def create_settings(self, fields: Mapping[str, Any]) -> SalaryConfiguration:
        """Persist new settings, assigning an id and both timestamps."""

    @abstractmethod
    def update_settings(
        self, settings_id: str, changes: Mapping[str, Any]
    ) -> SalaryConfiguration | None:
        """Apply a partial update and refresh ``updated_at``."""

    # Earning sessions
    @abstractmethod
    def get_session(self, session_id: str) -> EarningSession | None:
        """Return the session stored under ``session_id``."""

    @abstractmethod
    def get_active_session(self, settings_id: str) -> EarningSession | None:
        """Return the active session for ``settings_id`` if there is one."""

    @abstractmethod
    def create_session(self, settings_id: str) -> EarningSession:
        """Open a new active session starting now.

        Raises :class:`ConflictError` when ``settings_id`` already has one.
        """

    @abstractmethod
    def update_session(
        self, session_id: str, changes: Mapping[str, Any]
    ) -> EarningSession | None:
        """Apply a partial update to a session, active or not."""

    @abstractmethod
    def close_session(
        self, session_id: str, *, ended_at: datetime, total_earned: float
    ) -> EarningSession | None:
        """Settle a session if and only if it is still active.

        Returns ``None`` without changing anything when the session is unknown
        or already closed.
        """

    def start_session(self, settings_id: str) -> tuple[EarningSession, bool]:
        """Return the active session for ``settings_id``, opening one if needed.

        The boolean is ``True`` when a new session was created.
        """

        existing = self.get_active_session(settings_id)
        if existing is not None:
            return existing, False
        try:
            return self.create_session(settings_id), True
        except ConflictError:
            # Another request opened the session between our read and write.
            existing = self.get_active_session(settings_id)
            if existing is None:
                raise
            return existing, False
