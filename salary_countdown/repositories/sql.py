"""Durable income store backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Mapping

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from salary_countdown.core.exceptions import ConflictError, PersistenceError
from salary_countdown.core.logger import get_logger
from salary_countdown.db.session import session_scope
from salary_countdown.domain import EarningSession, SalaryConfiguration, as_utc, utcnow
from salary_countdown.models import IncomeSession, SalarySettings

from .base import IncomeStore, new_id

LOGGER = get_logger(__name__)

_SETTINGS_COLUMNS = ("monthly_salary", "daily_hours", "weekly_days", "is_holiday")
_SESSION_COLUMNS = ("session_end", "total_earned", "is_active")


def _settings_from_row(row: SalarySettings) -> SalaryConfiguration:
    return SalaryConfiguration(
        id=row.id,
        monthly_salary=float(row.monthly_salary),
        daily_hours=float(row.daily_hours),
        weekly_days=float(row.weekly_days),
        is_holiday=bool(row.is_holiday),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _session_from_row(row: IncomeSession) -> EarningSession:
    return EarningSession(
        id=row.id,
        settings_id=row.user_settings_id,
        session_start=as_utc(row.session_start),
        session_end=as_utc(row.session_end) if row.session_end is not None else None,
        total_earned=float(row.total_earned or 0),
        is_active=bool(row.is_active),
    )


def _reject_unknown(changes: Mapping[str, Any], allowed: tuple[str, ...]) -> None:
    unknown = set(changes) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")


class SqlIncomeStore(IncomeStore):
    """Store settings and sessions in a relational database.

    Each public method runs in its own short transaction.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except IntegrityError as exc:
            LOGGER.warning("Integrity violation while trying to %s: %s", operation, exc.orig)
            raise ConflictError(f"Could not {operation}: conflicting record") from exc
        except SQLAlchemyError as exc:
            LOGGER.error("Database error while trying to %s: %s", operation, exc)
            raise PersistenceError(f"Could not {operation}") from exc

    # Salary settings
    def get_settings(self, settings_id: str) -> SalaryConfiguration | None:
        with self._transaction("load salary settings") as session:
            row = session.get(SalarySettings, settings_id)
            return _settings_from_row(row) if row is not None else None

    def create_settings(self, fields: Mapping[str, Any]) -> SalaryConfiguration:
        now = utcnow()
        row = SalarySettings(
            id=new_id(),
            monthly_salary=fields["monthly_salary"],
            daily_hours=fields["daily_hours"],
            weekly_days=fields["weekly_days"],
            is_holiday=bool(fields.get("is_holiday", False)),
            created_at=now,
            updated_at=now,
        )
        with self._transaction("create salary settings") as session:
            session.add(row)
            session.flush()
            return _settings_from_row(row)

    def update_settings(
        self, settings_id: str, changes: Mapping[str, Any]
    ) -> SalaryConfiguration | None:
        _reject_unknown(changes, _SETTINGS_COLUMNS)
        with self._transaction("update salary settings") as session:
            row = session.get(SalarySettings, settings_id)
            if row is None:
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            row.updated_at = utcnow()
            session.flush()
            return _settings_from_row(row)

    # Earning sessions
    def get_session(self, session_id: str) -> EarningSession | None:
        with self._transaction("load income session") as session:
            row = session.get(IncomeSession, session_id)
            return _session_from_row(row) if row is not None else None

    def get_active_session(self, settings_id: str) -> EarningSession | None:
        with self._transaction("load active income session") as session:
            row = session.execute(
                select(IncomeSession)
                .where(
                    IncomeSession.user_settings_id == settings_id,
                    IncomeSession.is_active.is_(True),
                )
                .limit(1)
            ).scalar_one_or_none()
            return _session_from_row(row) if row is not None else None

    def create_session(self, settings_id: str) -> EarningSession:
        row = IncomeSession(
            id=new_id(),
            user_settings_id=settings_id,
            session_start=utcnow(),
            session_end=None,
            total_earned=0.0,
            is_active=True,
            active_slot=settings_id,
        )
        with self._transaction("create income session") as session:
            session.add(row)
            session.flush()
            created = _session_from_row(row)
        LOGGER.debug("Opened session %s for settings %s", created.id, settings_id)
        return created

    def update_session(
        self, session_id: str, changes: Mapping[str, Any]
    ) -> EarningSession | None:
        _reject_unknown(changes, _SESSION_COLUMNS)
        with self._transaction("update income session") as session:
            row = session.get(IncomeSession, session_id)
            if row is None:
                return None
            for key, value in changes.items():
                setattr(row, key, value)
            if "is_active" in changes:
                row.active_slot = row.user_settings_id if row.is_active else None
            session.flush()
            return _session_from_row(row)

    def close_session(
        self, session_id: str, *, ended_at: datetime, total_earned: float
    ) -> EarningSession | None:
        with self._transaction("close income session") as session:
            result = session.execute(
                update(IncomeSession)
                .where(IncomeSession.id == session_id, IncomeSession.is_active.is_(True))
                .values(
                    session_end=ended_at,
                    total_earned=total_earned,
                    is_active=False,
                    active_slot=None,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                return None
            row = session.get(IncomeSession, session_id, populate_existing=True)
            return _session_from_row(row) if row is not None else None
