"""Schema definitions for earning sessions."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from salary_countdown.domain import EarningSession

from .common import CamelModel


class IncomeSessionStart(CamelModel):
    """Body accepted when starting (or resuming) a session."""

    user_settings_id: Optional[str] = Field(default=None, examples=["507f1f77bcf86cd799439011"])


class IncomeSessionEarningsUpdate(CamelModel):
    """Body accepted when overwriting a session's running total."""

    total_earned: float = Field(ge=0, allow_inf_nan=False, examples=[42.5])


class IncomeSessionRead(CamelModel):
    """Earning session as returned by the API."""

    id: str
    user_settings_id: str
    session_start: datetime
    session_end: Optional[datetime] = None
    total_earned: float
    is_active: bool

    @classmethod
    def from_domain(cls, session: EarningSession) -> "IncomeSessionRead":
        return cls(
            id=session.id,
            user_settings_id=session.settings_id,
            session_start=session.session_start,
            session_end=session.session_end,
            total_earned=session.total_earned,
            is_active=session.is_active,
        )
