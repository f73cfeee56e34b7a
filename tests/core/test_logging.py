"""Tests for the queue-based logging setup."""
from __future__ import annotations

import logging
from logging.handlers import QueueHandler
from pathlib import Path

import pytest

from salary_countdown.core.logger import (
    bind_log_context,
    get_logger,
    init_logging,
    shutdown_logging,
    timeit,
)


def test_day_file_records_carry_bound_request_id(tmp_path: Path) -> None:
    init_logging(level="DEBUG", log_dir=tmp_path)
    try:
        logger = get_logger("salary_countdown.tests.logging")
        with bind_log_context(request_id="req-42"):
            logger.info("Ended session s1")
        logger.info("Outside any request")
    finally:
        shutdown_logging()

    (log_file,) = tmp_path.glob("salary_countdown-*.log")
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines[0].endswith("| salary_countdown.tests.logging | request_id=req-42 Ended session s1")
    assert lines[1].endswith("| salary_countdown.tests.logging | Outside any request")


def test_records_below_configured_level_are_dropped(tmp_path: Path) -> None:
    init_logging(level="WARNING", log_dir=tmp_path)
    try:
        logger = get_logger("salary_countdown.tests.logging")
        logger.info("Quiet")
        logger.warning("Loud")
    finally:
        shutdown_logging()

    (log_file,) = tmp_path.glob("salary_countdown-*.log")
    text = log_file.read_text(encoding="utf-8")
    assert "Loud" in text
    assert "Quiet" not in text


def test_get_logger_restarts_logging_after_shutdown() -> None:
    shutdown_logging()
    assert not logging.getLogger().handlers

    logger = get_logger()

    assert logger.name == "salary_countdown"
    assert any(isinstance(handler, QueueHandler) for handler in logging.getLogger().handlers)


def test_timeit_logs_duration_and_failures(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("salary_countdown.tests.timing")

    with caplog.at_level(logging.DEBUG, logger=logger.name):
        with timeit("Closing session s1", logger=logger):
            pass
        with pytest.raises(RuntimeError):
            with timeit("Closing session s2", logger=logger):
                raise RuntimeError("database went away")

    messages = [record.getMessage() for record in caplog.records if record.name == logger.name]
    assert messages[0].startswith("Closing session s1 completed in ")
    assert messages[1].startswith("Closing session s2 failed after ")
