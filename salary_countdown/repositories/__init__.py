"""Income stores: one in-memory and one SQL-backed implementation."""

from .base import IncomeStore, new_id
from .memory import MemoryIncomeStore
from .sql import SqlIncomeStore

__all__ = [
    "IncomeStore",
    "MemoryIncomeStore",
    "SqlIncomeStore",
    "new_id",
]
