"""Database engine factories."""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from salary_countdown.core.config import get_settings
from salary_countdown.core.logger import get_logger
from salary_countdown.models import Base

LOGGER = get_logger(__name__)


def create_sync_engine(url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine using configured defaults."""

    settings = get_settings()
    resolved_url = url or settings.database.sqlalchemy_url

    options = dict(kwargs)
    options.setdefault("echo", settings.sqlalchemy_echo)

    parsed = make_url(resolved_url)
    if parsed.get_backend_name() == "sqlite":
        # Request handlers run in a threadpool; an in-memory database must also
        # share a single connection or every checkout sees an empty schema.
        connect_args = dict(options.pop("connect_args", {}))
        connect_args.setdefault("check_same_thread", False)
        options["connect_args"] = connect_args
        if parsed.database in (None, "", ":memory:"):
            options.setdefault("poolclass", StaticPool)
    else:
        options.setdefault("pool_pre_ping", True)

    LOGGER.debug(
        "Creating SQLAlchemy engine",
        extra={"url": parsed.render_as_string(hide_password=True), "echo": options["echo"]},
    )
    return create_engine(resolved_url, **options)


def create_schema(engine: Engine) -> None:
    """Create any missing tables for the ORM models."""

    Base.metadata.create_all(engine)
    LOGGER.info("Database schema ready (%s)", ", ".join(sorted(Base.metadata.tables)))
