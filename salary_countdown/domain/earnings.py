"""Rate derivation and session settlement.

Both functions are pure: they read a :class:`SalaryConfiguration`, never touch
the store and never cache anything between calls.
"""
from __future__ import annotations

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from salary_countdown.core.exceptions import InvalidConfigurationError

from .income import RateBreakdown, SalaryConfiguration, Settlement, as_utc

# Average number of weeks in a month.
WEEKS_PER_MONTH = 4.33
MAX_DAILY_HOURS = 24
MAX_WEEKLY_DAYS = 7

_CENT = Decimal("0.01")


def round_money(value: float) -> float:
    """Round ``value`` to two decimals, halves away from zero."""

    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def _check_configuration(config: SalaryConfiguration) -> None:
    values = (config.monthly_salary, config.daily_hours, config.weekly_days)
    if not all(isinstance(value, (int, float)) and math.isfinite(value) for value in values):
        raise InvalidConfigurationError("Salary settings must be finite numbers")
    if config.monthly_salary <= 0:
        raise InvalidConfigurationError("Monthly salary must be greater than 0")
    if not 0 < config.daily_hours <= MAX_DAILY_HOURS:
        raise InvalidConfigurationError(
            f"Daily hours must be greater than 0 and at most {MAX_DAILY_HOURS}"
        )
    if not 0 < config.weekly_days <= MAX_WEEKLY_DAYS:
        raise InvalidConfigurationError(
            f"Weekly days must be greater than 0 and at most {MAX_WEEKLY_DAYS}"
        )


def monthly_hours(config: SalaryConfiguration) -> float:
    """Return the unrounded number of hours worked in an average month."""

    _check_configuration(config)
    return config.daily_hours * config.weekly_days * WEEKS_PER_MONTH


def hourly_rate(config: SalaryConfiguration) -> float:
    """Return the unrounded salary earned per hour."""

    hours = monthly_hours(config)
    if hours <= 0:
        raise InvalidConfigurationError("Salary settings yield zero working hours per month")
    return config.monthly_salary / hours


def calculate_rates(config: SalaryConfiguration) -> RateBreakdown:
    """Derive per-minute, per-hour and per-day rates for ``config``."""

    hours = monthly_hours(config)
    per_hour = hourly_rate(config)
    return RateBreakdown(
        per_minute=round_money(per_hour / 60),
        per_hour=round_money(per_hour),
        per_day=round_money(per_hour * config.daily_hours),
        monthly_hours=round_money(hours),
    )


def elapsed_minutes(session_start: datetime, now: datetime) -> float:
    """Minutes between ``session_start`` and ``now``; negative spans count as zero."""

    seconds = (as_utc(now) - as_utc(session_start)).total_seconds()
    return max(seconds, 0.0) / 60


def settle_session(
    config: SalaryConfiguration,
    session_start: datetime,
    now: datetime,
) -> Settlement:
    """Convert the time elapsed since ``session_start`` into money earned."""

    minutes = elapsed_minutes(session_start, now)
    earned = round_money(minutes * (hourly_rate(config) / 60))
    return Settlement(elapsed_minutes=minutes, earned=earned, ended_at=now)
