"""FastAPI routers for the salary countdown API."""

from .rates import router as rates_router
from .sessions import router as sessions_router
from .settings import router as settings_router

__all__ = [
    "rates_router",
    "sessions_router",
    "settings_router",
]
