"""Domain models and pure income calculations."""

from .earnings import (
    WEEKS_PER_MONTH,
    calculate_rates,
    elapsed_minutes,
    hourly_rate,
    monthly_hours,
    round_money,
    settle_session,
)
from .income import (
    EarningSession,
    RateBreakdown,
    SalaryConfiguration,
    Settlement,
    as_utc,
    utcnow,
)

__all__ = [
    "WEEKS_PER_MONTH",
    "EarningSession",
    "RateBreakdown",
    "SalaryConfiguration",
    "Settlement",
    "as_utc",
    "calculate_rates",
    "elapsed_minutes",
    "hourly_rate",
    "monthly_hours",
    "round_money",
    "settle_session",
    "utcnow",
]
