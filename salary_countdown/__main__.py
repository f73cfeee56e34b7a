"""Run the API with uvicorn: ``python -m salary_countdown``."""
from __future__ import annotations

import uvicorn

from salary_countdown.core import get_logger, get_settings
from salary_countdown.core.logger import shutdown_logging


def main() -> None:
    settings = get_settings()
    get_logger(__name__).info(
        "Server running on http://%s:%s", settings.server.host, settings.server.port
    )
    try:
        uvicorn.run(
            "salary_countdown.main:app",
            host=settings.server.host,
            port=settings.server.port,
            log_config=None,
        )
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
