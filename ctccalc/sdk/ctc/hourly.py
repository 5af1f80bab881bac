"""Hourly rate projection (display only).

The rate is derived from monthly Basic and working hours and never feeds
back into the allocation.
"""

import math

from ..schemas import Period
from .periods import to_monthly


def round_half_up(value: float) -> float:
    """Round to the nearest whole number, halves away from zero.

    Python's round() uses banker's rounding (round(2.5) == 2); payroll
    displays expect 2.5 -> 3.
    """
    return float(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def project_hourly_rate(gross_amount: float, period: Period, working_hours: float) -> float:
    """Whole-number hourly rate from the entered monthly basic.

    Args:
        gross_amount: Entered gross (all of it is Basic for hourly employees)
        period: Period gross_amount is expressed in
        working_hours: Working hours per month

    Returns:
        round(monthly basic / hours), or 0 when hours <= 0 or the rate
        is not finite

    Example:
        project_hourly_rate(24000, "monthly", 240)  # -> 100.0
    """
    if working_hours <= 0:
        return 0.0
    monthly_basic = to_monthly(gross_amount, period)
    rate = monthly_basic / working_hours
    if not math.isfinite(rate):
        return 0.0
    return round_half_up(rate)
