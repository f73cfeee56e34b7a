"""Routes managing salary settings."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from salary_countdown.dependencies import get_income_service
from salary_countdown.schemas import (
    ErrorResponse,
    SalarySettingsCreate,
    SalarySettingsRead,
    SalarySettingsUpdate,
)
from salary_countdown.services import IncomeService

router = APIRouter(prefix="/api/user-settings", tags=["user-settings"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Settings not found"}}


@router.post("", response_model=SalarySettingsRead, responses=_ERRORS)
def create_user_settings(
    payload: SalarySettingsCreate,
    service: IncomeService = Depends(get_income_service),
) -> SalarySettingsRead:
    """Create salary settings used for rate calculation."""

    settings = service.create_settings(payload.model_dump())
    return SalarySettingsRead.from_domain(settings)


@router.get("/{settings_id}", response_model=SalarySettingsRead, responses=_NOT_FOUND)
def get_user_settings(
    settings_id: str,
    service: IncomeService = Depends(get_income_service),
) -> SalarySettingsRead:
    """Return salary settings by id."""

    return SalarySettingsRead.from_domain(service.get_settings(settings_id))


@router.patch(
    "/{settings_id}",
    response_model=SalarySettingsRead,
    responses={**_ERRORS, **_NOT_FOUND},
)
def update_user_settings(
    settings_id: str,
    payload: SalarySettingsUpdate,
    service: IncomeService = Depends(get_income_service),
) -> SalarySettingsRead:
    """Apply the supplied fields to existing salary settings."""

    settings = service.update_settings(settings_id, payload.changes())
    return SalarySettingsRead.from_domain(settings)
