"""Salary countdown: turn a salary into per-minute earnings and timed sessions."""

from .core import get_logger, get_settings
from .main import create_app

__all__ = ["create_app", "get_logger", "get_settings"]
