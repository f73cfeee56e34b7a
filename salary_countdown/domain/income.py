"""Compact domain models shared by the stores, the service and the API."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Mapping

SETTINGS_FIELDS = ("monthly_salary", "daily_hours", "weekly_days", "is_holiday")
SESSION_FIELDS = ("session_end", "total_earned", "is_active")


def utcnow() -> datetime:
    """Return the current instant as an aware UTC datetime."""

    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalise ``value`` to an aware UTC datetime; naive values are taken as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True, slots=True)
class SalaryConfiguration:
    """A user's pay parameters ("user settings")."""

    id: str
    monthly_salary: float
    daily_hours: float
    weekly_days: float
    is_holiday: bool = False
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def updated(self, changes: Mapping[str, Any], *, at: datetime | None = None) -> "SalaryConfiguration":
        """Return a copy with ``changes`` applied and ``updated_at`` refreshed."""

        unknown = set(changes) - set(SETTINGS_FIELDS)
        if unknown:
            raise ValueError(f"Unknown settings fields: {', '.join(sorted(unknown))}")
        return replace(self, **dict(changes), updated_at=at or utcnow())


@dataclass(frozen=True, slots=True)
class EarningSession:
    """A timed interval during which money accrues against one configuration."""

    id: str
    settings_id: str
    session_start: datetime = field(default_factory=utcnow)
    session_end: datetime | None = None
    total_earned: float = 0.0
    is_active: bool = True

    def updated(self, changes: Mapping[str, Any]) -> "EarningSession":
        """Return a copy with ``changes`` applied; start and owner never change."""

        unknown = set(changes) - set(SESSION_FIELDS)
        if unknown:
            raise ValueError(f"Unknown session fields: {', '.join(sorted(unknown))}")
        return replace(self, **dict(changes))

    def closed(self, *, ended_at: datetime, total_earned: float) -> "EarningSession":
        return replace(self, session_end=ended_at, total_earned=total_earned, is_active=False)


@dataclass(frozen=True, slots=True)
class RateBreakdown:
    """Earning rates derived from a configuration, rounded to cents."""

    per_minute: float
    per_hour: float
    per_day: float
    monthly_hours: float


@dataclass(frozen=True, slots=True)
class Settlement:
    """Outcome of closing a session at ``ended_at``."""

    elapsed_minutes: float
    earned: float
    ended_at: datetime
