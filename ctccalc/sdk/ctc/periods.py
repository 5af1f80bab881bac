"""Period normalization.

Statutory rules operate on a canonical monthly basis. These helpers convert
between the active period (monthly or yearly) and monthly/yearly figures.
No rounding happens here; rounding is left to presentation and persistence.
"""

from typing import NamedTuple

from ..schemas import Period


MONTHS_PER_YEAR = 12


class PeriodAmounts(NamedTuple):
    monthly: float
    yearly: float


def to_monthly(value: float, period: Period) -> float:
    """Convert a current-period value to its monthly equivalent."""
    return value / MONTHS_PER_YEAR if period == "yearly" else value


def to_yearly(value: float, period: Period) -> float:
    """Convert a current-period value to its yearly equivalent."""
    return value * MONTHS_PER_YEAR if period == "monthly" else value


def scale_to_period(monthly_value: float, period: Period) -> float:
    """Scale a monthly figure to the active period."""
    return monthly_value * MONTHS_PER_YEAR if period == "yearly" else monthly_value


def normalize_period(gross_amount: float, period: Period) -> PeriodAmounts:
    """Return both monthly and yearly equivalents of a gross figure.

    Args:
        gross_amount: Gross pay as entered
        period: Period the figure is expressed in

    Returns:
        PeriodAmounts(monthly, yearly)

    Example:
        normalize_period(120000, "yearly")  # -> PeriodAmounts(10000.0, 120000)
    """
    return PeriodAmounts(
        monthly=to_monthly(gross_amount, period),
        yearly=to_yearly(gross_amount, period),
    )
