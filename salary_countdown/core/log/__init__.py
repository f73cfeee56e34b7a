"""Logging for the salary countdown service.

Records are pushed onto a queue by the request threads and written by a single
listener thread to a rich console on stderr and, when ``LOG_DIR`` is set, to one
file per day.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import SimpleQueue
from threading import RLock

from rich.console import Console
from rich.logging import RichHandler

from .context import ContextFilter, bind_log_context
from .timing import timeit

__all__ = [
    "bind_log_context",
    "get_logger",
    "init_logging",
    "shutdown_logging",
    "timeit",
]

ROOT_LOGGER_NAME = "salary_countdown"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s"


@dataclass(frozen=True)
class _Active:
    level: int
    log_dir: Path | None
    listener: QueueListener


_lock = RLock()
_active: _Active | None = None
_context_filter = ContextFilter()


def _parse_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


class DayFileHandler(logging.FileHandler):
    """Append to ``<directory>/salary_countdown-YYYY-MM-DD.log``, switching at midnight."""

    def __init__(self, directory: Path) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        self.directory = directory
        self.day = date.today()
        super().__init__(self._file_for(self.day), encoding="utf-8")

    def _file_for(self, day: date) -> Path:
        return self.directory / f"{ROOT_LOGGER_NAME}-{day.isoformat()}.log"

    def emit(self, record: logging.LogRecord) -> None:
        day = datetime.fromtimestamp(record.created).date()
        if day != self.day:
            self.day = day
            if self.stream is not None:
                self.stream.close()
                self.stream = None
            self.baseFilename = os.fspath(self._file_for(day))
        super().emit(record)


def _handlers(level: int, log_dir: Path | None) -> list[logging.Handler]:
    console = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    console.setFormatter(logging.Formatter("%(context)s%(message)s"))
    handlers: list[logging.Handler] = [console]

    if log_dir is not None:
        day_file = DayFileHandler(log_dir)
        day_file.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(day_file)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(_context_filter)
    return handlers


def init_logging(level: str | int = "INFO", log_dir: Path | None = None) -> None:
    """Route all records through the queue listener.

    Calling again with the same arguments is a no-op; different arguments
    replace the running listener.
    """

    global _active
    resolved = _parse_level(level)
    with _lock:
        if _active is not None:
            if (_active.level, _active.log_dir) == (resolved, log_dir):
                return
            _stop_locked()

        root = logging.getLogger()
        root.setLevel(logging.NOTSET)
        for handler in list(root.handlers):
            root.removeHandler(handler)

        log_queue: SimpleQueue = SimpleQueue()
        queue_handler = QueueHandler(log_queue)
        queue_handler.setLevel(resolved)
        queue_handler.addFilter(_context_filter)
        root.addHandler(queue_handler)

        listener = QueueListener(
            log_queue, *_handlers(resolved, log_dir), respect_handler_level=True
        )
        listener.start()
        _active = _Active(level=resolved, log_dir=log_dir, listener=listener)


def _stop_locked() -> None:
    global _active
    if _active is None:
        return
    # Stopping the listener drains the queue before the handlers are closed.
    _active.listener.stop()
    for handler in _active.listener.handlers:
        handler.close()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    _active = None


def shutdown_logging() -> None:
    """Flush pending records and close every handler."""

    with _lock:
        _stop_locked()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger, starting the default configuration on first use."""

    with _lock:
        if _active is None:
            init_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
