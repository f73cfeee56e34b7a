"""Pydantic schemas for request and response payloads."""

from .common import CamelModel, ErrorDetail, ErrorResponse
from .rates import RatesRead
from .sessions import IncomeSessionEarningsUpdate, IncomeSessionRead, IncomeSessionStart
from .settings import SalarySettingsCreate, SalarySettingsRead, SalarySettingsUpdate

__all__ = [
    "CamelModel",
    "ErrorDetail",
    "ErrorResponse",
    "IncomeSessionEarningsUpdate",
    "IncomeSessionRead",
    "IncomeSessionStart",
    "RatesRead",
    "SalarySettingsCreate",
    "SalarySettingsRead",
    "SalarySettingsUpdate",
]
