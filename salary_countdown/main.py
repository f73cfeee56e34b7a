"""FastAPI application instance and startup hooks."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from salary_countdown.core import Settings, get_logger, get_settings
from salary_countdown.core.logger import init_logging
from salary_countdown.dependencies import build_store
from salary_countdown.exception_handlers import register_exception_handlers
from salary_countdown.middleware import RequestLoggingMiddleware
from salary_countdown.repositories import IncomeStore
from salary_countdown.routers import rates_router, sessions_router, settings_router

LOGGER = get_logger(__name__)


def create_app(store: IncomeStore | None = None, settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` overrides the backend selected by ``STORAGE_BACKEND``.
    """

    settings = settings or get_settings()
    init_logging(level=settings.logging.level, log_dir=settings.logging.log_dir)

    app = FastAPI(
        title="Salary Countdown API",
        version="1.0.0",
        docs_url="/api-docs",
        redoc_url=None,
    )
    app.state.income_store = store if store is not None else build_store(settings)

    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(settings_router)
    app.include_router(sessions_router)
    app.include_router(rates_router)

    @app.get("/", response_class=PlainTextResponse, summary="Server health check")
    def root() -> str:
        return "hello"

    LOGGER.info(
        "FastAPI application initialised (store=%s)",
        type(app.state.income_store).__name__,
    )
    return app


app = create_app()
