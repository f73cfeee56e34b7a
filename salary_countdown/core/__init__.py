"""Core utilities shared across the application."""

from .config import Settings, get_settings  # noqa: F401
from .exceptions import (  # noqa: F401
    ConflictError,
    IncomeError,
    InvalidConfigurationError,
    NotFoundError,
    PersistenceError,
)
from .logger import get_logger  # noqa: F401

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "ConflictError",
    "IncomeError",
    "InvalidConfigurationError",
    "NotFoundError",
    "PersistenceError",
]
