"""Schema definitions for salary settings."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from salary_countdown.domain import SalaryConfiguration

from .common import CamelModel


class SalarySettingsCreate(CamelModel):
    """Body accepted when creating salary settings."""

    monthly_salary: float = Field(ge=1, allow_inf_nan=False, examples=[5000])
    daily_hours: float = Field(ge=1, le=24, allow_inf_nan=False, examples=[8])
    weekly_days: float = Field(ge=1, le=7, allow_inf_nan=False, examples=[5])
    is_holiday: bool = Field(default=False, examples=[False])


class SalarySettingsUpdate(CamelModel):
    """Partial update; only the fields present in the body are applied."""

    monthly_salary: Optional[float] = Field(default=None, ge=1, allow_inf_nan=False)
    daily_hours: Optional[float] = Field(default=None, ge=1, le=24, allow_inf_nan=False)
    weekly_days: Optional[float] = Field(default=None, ge=1, le=7, allow_inf_nan=False)
    is_holiday: Optional[bool] = None

    @field_validator("*")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may be omitted but not null")
        return value

    def changes(self) -> dict[str, Any]:
        """Return the explicitly supplied fields keyed by attribute name."""

        return self.model_dump(exclude_unset=True)


class SalarySettingsRead(CamelModel):
    """Salary settings as returned by the API."""

    id: str
    monthly_salary: float
    daily_hours: float
    weekly_days: float
    is_holiday: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, settings: SalaryConfiguration) -> "SalarySettingsRead":
        return cls(
            id=settings.id,
            monthly_salary=settings.monthly_salary,
            daily_hours=settings.daily_hours,
            weekly_days=settings.weekly_days,
            is_holiday=settings.is_holiday,
            created_at=settings.created_at,
            updated_at=settings.updated_at,
        )
