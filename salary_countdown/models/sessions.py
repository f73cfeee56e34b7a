"""ORM model for timed earning sessions."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, Timestamp


class IncomeSession(Base):
    """An earning session opened against one set of salary settings.

    ``active_slot`` holds the settings id while the session is active and is
    cleared on settlement. The unique constraint on it allows at most one
    active session per settings id; closed sessions all carry ``NULL``.
    """

    __tablename__ = "income_session"
    __table_args__ = (Index("ix_income_session_settings_active", "user_settings_id", "is_active"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    user_settings_id: Mapped[str] = mapped_column(String(32), nullable=False)
    session_start: Mapped[datetime] = mapped_column(Timestamp, nullable=False)
    session_end: Mapped[datetime | None] = mapped_column(Timestamp)
    total_earned: Mapped[float] = mapped_column(
        Numeric(18, 2, asdecimal=False), nullable=False, default=0
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    active_slot: Mapped[str | None] = mapped_column(String(32), unique=True)
