"""ORM model for a user's salary settings."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, Quantity, Timestamp


class SalarySettings(Base):
    """Pay parameters used to derive earning rates.

    ``is_holiday`` is stored and returned but takes no part in any calculation.
    """

    __tablename__ = "salary_settings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    monthly_salary: Mapped[float] = mapped_column(Quantity, nullable=False)
    daily_hours: Mapped[float] = mapped_column(Quantity, nullable=False)
    weekly_days: Mapped[float] = mapped_column(Quantity, nullable=False)
    is_holiday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(Timestamp, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(Timestamp, nullable=False)
