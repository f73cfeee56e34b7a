"""Shared FastAPI dependency definitions and store construction."""
from __future__ import annotations

from fastapi import Request

from salary_countdown.core.config import Settings
from salary_countdown.core.logger import get_logger
from salary_countdown.db import create_schema, create_sync_engine, get_sessionmaker
from salary_countdown.repositories import IncomeStore, MemoryIncomeStore, SqlIncomeStore
from salary_countdown.services import IncomeService

LOGGER = get_logger(__name__)


def build_store(settings: Settings) -> IncomeStore:
    """Instantiate the store selected by ``STORAGE_BACKEND``."""

    if settings.storage_backend == "database":
        engine = create_sync_engine(settings.database.sqlalchemy_url)
        create_schema(engine)
        LOGGER.info("Using SQL income store at %s", settings.database.masked_url)
        return SqlIncomeStore(get_sessionmaker(engine=engine))

    LOGGER.warning("Using in-memory income store; data is lost on restart")
    return MemoryIncomeStore()


def get_income_store(request: Request) -> IncomeStore:
    """Return the store attached to the running application."""

    return request.app.state.income_store


def get_income_service(request: Request) -> IncomeService:
    """Return a service instance per request."""

    return IncomeService(get_income_store(request))
