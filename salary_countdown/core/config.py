"""Configuration system for the salary countdown service."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

STORAGE_BACKENDS = ("memory", "database")


def _load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load the .env file once for the process."""

    if getattr(_load_env, "_loaded", False):  # type: ignore[attr-defined]
        return

    load_dotenv(dotenv_path)
    setattr(_load_env, "_loaded", True)  # type: ignore[attr-defined]


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection details for the durable session store."""

    driver: str = "mysql+pymysql"
    user: str = "salary"
    password: str = "salary"
    host: str = "127.0.0.1"
    port: int = 3306
    name: str = "salary_countdown"
    url: str | None = None

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Instantiate settings using environment overrides when present."""

        defaults = cls()
        return cls(
            driver=os.getenv("DB_DRIVER", defaults.driver),
            user=os.getenv("DB_USER", defaults.user),
            password=os.getenv("DB_PASSWORD", defaults.password),
            host=os.getenv("DB_HOST", defaults.host),
            port=int(os.getenv("DB_PORT", defaults.port)),
            name=os.getenv("DB_NAME", defaults.name),
            url=os.getenv("DATABASE_URL") or None,
        )

    @property
    def sqlalchemy_url(self) -> str:
        """Return a SQLAlchemy compatible URL."""

        if self.url:
            return self.url
        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{self.name}"
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"

    @property
    def masked_url(self) -> str:
        """Return the URL with the password hidden, suitable for logs."""

        if self.url:
            scheme, _, rest = self.url.partition("://")
            if "@" in rest:
                return f"{scheme}://***@{rest.split('@', 1)[1]}"
            return self.url
        if self.driver.startswith("sqlite"):
            return self.sqlalchemy_url
        pwd = "***" if self.password else ""
        return f"{self.driver}://{self.user}:{pwd}@{self.host}:{self.port}/{self.name}"


@dataclass(frozen=True)
class LoggingSettings:
    """Runtime options forwarded to ``init_logging``."""

    level: str = "INFO"
    log_dir: Path | None = Path("logs")

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        defaults = cls()
        raw_dir = os.getenv("LOG_DIR")
        if raw_dir is None:
            log_dir = defaults.log_dir
        else:
            log_dir = Path(raw_dir) if raw_dir.strip() else None
        return cls(level=os.getenv("LOG_LEVEL", defaults.level).upper(), log_dir=log_dir)


@dataclass(frozen=True)
class ServerSettings:
    """Bind address for the bundled uvicorn entrypoint."""

    host: str = "0.0.0.0"
    port: int = 5000

    @classmethod
    def from_env(cls) -> "ServerSettings":
        defaults = cls()
        return cls(
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", defaults.port)),
        )


@dataclass(frozen=True)
class Settings:
    """Container for application configuration."""

    database: DatabaseSettings
    logging: LoggingSettings
    server: ServerSettings
    storage_backend: str = "memory"
    sqlalchemy_echo: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Settings":
        """Build ``Settings`` using environment variables (optionally from ``.env``)."""

        _load_env(dotenv_path)

        storage_backend = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
        if storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}; "
                f"got {storage_backend!r}"
            )

        return cls(
            database=DatabaseSettings.from_env(),
            logging=LoggingSettings.from_env(),
            server=ServerSettings.from_env(),
            storage_backend=storage_backend,
            sqlalchemy_echo=_env_flag("SQLALCHEMY_ECHO"),
        )


@lru_cache()
def get_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """Return a cached settings instance."""

    settings = Settings.from_env(dotenv_path=dotenv_path)

    # Import locally to avoid circular dependencies during module import time.
    from .logger import get_logger

    logger = get_logger(__name__)
    logger.debug(
        "Settings initialised",
        extra={
            "storage_backend": settings.storage_backend,
            "sqlalchemy_echo": settings.sqlalchemy_echo,
            "database": settings.database.masked_url,
            "log_level": settings.logging.level,
        },
    )
    return settings
