"""Per-request values stamped onto every log record."""
from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

_fields: contextvars.ContextVar[tuple[tuple[str, object], ...]] = contextvars.ContextVar(
    "log_fields", default=()
)


@contextmanager
def bind_log_context(**values: object) -> Iterator[None]:
    """Tag records logged inside the ``with`` block with ``values``."""

    extra = tuple((key, value) for key, value in values.items() if value is not None)
    token = _fields.set(_fields.get() + extra)
    try:
        yield
    finally:
        _fields.reset(token)


class ContextFilter(logging.Filter):
    """Render the bound values into ``record.context`` as ``key=value`` pairs."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Records replayed by the queue listener were tagged on the caller's thread.
        if hasattr(record, "context"):
            return True
        fields = _fields.get()
        record.context = "".join(f"{key}={value} " for key, value in fields)
        return True
