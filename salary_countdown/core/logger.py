"""Shortcut imports for the logging helpers used across the package."""
from __future__ import annotations

from .log import bind_log_context, get_logger, init_logging, shutdown_logging, timeit

__all__ = [
    "bind_log_context",
    "get_logger",
    "init_logging",
    "shutdown_logging",
    "timeit",
]
