"""Statutory deduction calculations.

All statutory figures are computed on a monthly basis first, then scaled
to the active period (x12 for yearly).

Implemented:
- EPF: 12% of monthly Basic, capped at 1,800/month; employer mirrors employee

Known placeholders (always 0, manual entry only):
- ESI (no eligibility threshold or rate wired)
- Professional tax
- Income tax

The placeholders are kept as separate functions so real rules can be
wired in one place. Until then the only way to enter a value for these
fields is a manual override.
"""

from ..schemas import Applicability, CalculatedValues, Earnings, Period
from .periods import scale_to_period, to_monthly, to_yearly


EPF_RATE = 0.12
EPF_MONTHLY_CAP = 1800.0

# Display-only taxable income figure (annual)
STANDARD_DEDUCTION = 75000.0


def calc_epf(basic: float, period: Period, applicable: bool) -> float:
    """Employee EPF for the active period.

    Args:
        basic: Basic salary in current-period units
        period: Active period
        applicable: EPF applicability toggle

    Returns:
        min(monthly basic * 12%, 1800) scaled to the period, or 0 if not applicable

    Example:
        calc_epf(10000, "monthly", True)   # -> 1200.0
        calc_epf(50000, "monthly", True)   # -> 1800.0 (cap)
    """
    if not applicable:
        return 0.0
    basic_for_epf = to_monthly(basic, period)
    monthly = min(basic_for_epf * EPF_RATE, EPF_MONTHLY_CAP)
    return scale_to_period(monthly, period)


def calc_esi(gross_salary: float, period: Period, applicable: bool) -> float:
    """ESI (employee or employer share). Placeholder: always 0."""
    return 0.0


def calc_professional_tax(gross_salary: float, period: Period, applicable: bool) -> float:
    """Professional tax. Placeholder: always 0."""
    return 0.0


def calc_income_tax(yearly_gross: float, period: Period) -> float:
    """Income tax. Placeholder: always 0."""
    return 0.0


def calc_statutory(
    earnings: Earnings,
    gross_salary: float,
    period: Period,
    applicability: Applicability,
) -> CalculatedValues:
    """Compute every auto-calculated deduction for the active period.

    These are the values shown as defaults and restored when an override
    is cleared.
    """
    epf_employee = calc_epf(earnings.basic, period, applicability.epf)
    yearly_gross = to_yearly(gross_salary, period)

    return CalculatedValues(
        epf_employee=epf_employee,
        epf_employer=epf_employee,
        esi_employee=calc_esi(gross_salary, period, applicability.esi),
        esi_employer=calc_esi(gross_salary, period, applicability.esi),
        professional_tax=calc_professional_tax(
            gross_salary, period, applicability.professional_tax
        ),
        income_tax=calc_income_tax(yearly_gross, period),
    )


def calc_taxable_income(yearly_gross: float, period: Period) -> tuple:
    """Display-only taxable income before other deductions.

    Args:
        yearly_gross: Yearly equivalent of the entered gross
        period: Active period (figures are returned in its units)

    Returns:
        Tuple of (standard_deduction, taxable_income) for the active period
    """
    taxable_yearly = max(0.0, yearly_gross - STANDARD_DEDUCTION)
    if period == "yearly":
        return STANDARD_DEDUCTION, taxable_yearly
    return STANDARD_DEDUCTION / 12, taxable_yearly / 12
