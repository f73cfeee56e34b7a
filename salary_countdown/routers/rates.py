"""Route exposing earning rates derived from salary settings."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from salary_countdown.dependencies import get_income_service
from salary_countdown.schemas import ErrorResponse, RatesRead
from salary_countdown.services import IncomeService

router = APIRouter(prefix="/api/calculate-rates", tags=["rates"])


@router.get(
    "/{user_settings_id}",
    response_model=RatesRead,
    responses={
        404: {"model": ErrorResponse, "description": "Settings not found"},
        422: {"model": ErrorResponse, "description": "Settings cannot produce a rate"},
    },
)
def calculate_rates(
    user_settings_id: str,
    service: IncomeService = Depends(get_income_service),
) -> RatesRead:
    """Calculate per-minute, per-hour and per-day income rates."""

    return RatesRead.from_domain(service.calculate_rates(user_settings_id))
