"""Shared fixtures: in-memory and SQLite-backed stores plus an API client."""
from __future__ import annotations

import os

# Configure before the application package is imported anywhere.
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_DIR"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from salary_countdown.core.logger import shutdown_logging
from salary_countdown.db import create_schema, create_sync_engine, get_sessionmaker
from salary_countdown.main import create_app
from salary_countdown.repositories import MemoryIncomeStore, SqlIncomeStore
from salary_countdown.services import IncomeService


@pytest.fixture(scope="session", autouse=True)
def _flush_logs_at_exit():
    yield
    shutdown_logging()


@pytest.fixture()
def memory_store() -> MemoryIncomeStore:
    return MemoryIncomeStore()


@pytest.fixture()
def sql_store() -> SqlIncomeStore:
    """Provide a SQL store over a private in-memory SQLite database."""

    engine = create_sync_engine("sqlite://", echo=False)
    create_schema(engine)
    yield SqlIncomeStore(get_sessionmaker(engine=engine))
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest):
    """Run a test once against each store implementation."""

    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture()
def service(memory_store: MemoryIncomeStore) -> IncomeService:
    return IncomeService(memory_store)


@pytest.fixture()
def client(memory_store: MemoryIncomeStore) -> TestClient:
    app = create_app(store=memory_store)
    with TestClient(app) as test_client:
        yield test_client
