"""Routes starting, inspecting and ending earning sessions."""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException, status

from salary_countdown.dependencies import get_income_service
from salary_countdown.schemas import (
    ErrorResponse,
    IncomeSessionEarningsUpdate,
    IncomeSessionRead,
    IncomeSessionStart,
)
from salary_countdown.services import IncomeService

router = APIRouter(prefix="/api/income-session", tags=["income-session"])


@router.post(
    "",
    response_model=IncomeSessionRead,
    responses={400: {"model": ErrorResponse, "description": "Missing required field"}},
)
def start_income_session(
    payload: IncomeSessionStart | None = Body(default=None),
    service: IncomeService = Depends(get_income_service),
) -> IncomeSessionRead:
    """Create a new active session or return the one already running."""

    if payload is None or not payload.user_settings_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User settings ID is required",
        )
    return IncomeSessionRead.from_domain(service.start_session(payload.user_settings_id))


@router.get(
    "/{user_settings_id}",
    response_model=IncomeSessionRead,
    responses={404: {"model": ErrorResponse, "description": "No active session found"}},
)
def get_active_income_session(
    user_settings_id: str,
    service: IncomeService = Depends(get_income_service),
) -> IncomeSessionRead:
    """Return the active session for a set of salary settings."""

    return IncomeSessionRead.from_domain(service.get_active_session(user_settings_id))


@router.patch(
    "/{session_id}",
    response_model=IncomeSessionRead,
    responses={404: {"model": ErrorResponse, "description": "Session not found"}},
)
def update_income_session(
    session_id: str,
    payload: IncomeSessionEarningsUpdate,
    service: IncomeService = Depends(get_income_service),
) -> IncomeSessionRead:
    """Overwrite a session's running total."""

    session = service.update_session_earnings(session_id, payload.total_earned)
    return IncomeSessionRead.from_domain(session)


@router.delete(
    "/{session_id}",
    response_model=IncomeSessionRead,
    responses={404: {"model": ErrorResponse, "description": "Active session not found"}},
)
def end_income_session(
    session_id: str,
    service: IncomeService = Depends(get_income_service),
) -> IncomeSessionRead:
    """End a session and settle its earnings from the time worked."""

    return IncomeSessionRead.from_domain(service.end_session(session_id))
