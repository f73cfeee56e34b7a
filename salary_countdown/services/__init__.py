"""Service layer entrypoints for domain logic."""

from .income_service import IncomeService

__all__ = ["IncomeService"]
