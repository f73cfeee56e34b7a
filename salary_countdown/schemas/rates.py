"""Schema for derived earning rates."""
from __future__ import annotations

from pydantic import Field

from salary_countdown.domain import RateBreakdown

from .common import CamelModel


class RatesRead(CamelModel):
    """Rates rounded to two decimals."""

    per_minute: float = Field(examples=[0.48])
    per_hour: float = Field(examples=[28.87])
    per_day: float = Field(examples=[230.95])
    monthly_hours: float = Field(examples=[173.2])

    @classmethod
    def from_domain(cls, rates: RateBreakdown) -> "RatesRead":
        return cls(
            per_minute=rates.per_minute,
            per_hour=rates.per_hour,
            per_day=rates.per_day,
            monthly_hours=rates.monthly_hours,
        )
