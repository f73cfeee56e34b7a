"""Database models for the salary countdown domain."""
from __future__ import annotations

from .base import Base
from .salary import SalarySettings
from .sessions import IncomeSession

__all__ = [
    "Base",
    "IncomeSession",
    "SalarySettings",
]
