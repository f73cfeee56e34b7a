"""Timing helpers to log the duration of operations."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional


@dataclass
class _Timer:
    label: str
    logger: logging.Logger
    level: int
    start: float = field(default_factory=perf_counter)

    @property
    def elapsed_ms(self) -> float:
        return (perf_counter() - self.start) * 1000

    def finish(self, success: bool = True) -> None:
        elapsed = self.elapsed_ms
        if success:
            self.logger.log(self.level, f"{self.label} completed in {elapsed:.1f}ms")
        else:
            self.logger.error(f"{self.label} failed after {elapsed:.1f}ms")


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
) -> Iterator[_Timer]:
    """Context manager that logs how long the wrapped block took.

    Args:
        label: Description of the operation being timed
        logger: Logger instance to use (defaults to "salary_countdown.timer")
        level: Logging level for the success message
    """
    log = logger or logging.getLogger("salary_countdown.timer")
    timer = _Timer(label=label, logger=log, level=level)
    try:
        yield timer
    except Exception:
        timer.finish(success=False)
        raise
    else:
        timer.finish(success=True)
