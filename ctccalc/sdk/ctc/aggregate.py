"""Totals, net pay and CTC.

Sums are taken from the same models the breakdown validator checks, so the
identities hold exactly:

    total_deductions            = sum(deductions)
    total_employer_contribution = epf_employer + esi_employer
    net_salary                  = gross_salary - total_deductions
    total_ctc                   = gross_salary + total_employer_contribution
"""

from typing import NamedTuple

from ..schemas import Deductions, EmployerContributions, Period
from .periods import MONTHS_PER_YEAR


class Totals(NamedTuple):
    total_deductions: float
    total_employer_contribution: float
    net_salary: float
    net_annual_salary: float
    net_monthly_salary: float
    total_ctc: float
    monthly_ctc: float
    yearly_ctc: float
    final_ctc: float


def monthly_and_yearly(value: float, period: Period) -> tuple:
    """Return (monthly, yearly) projections of a current-period value."""
    if period == "yearly":
        return value / MONTHS_PER_YEAR, value
    return value, value * MONTHS_PER_YEAR


def aggregate(
    gross_salary: float,
    deductions: Deductions,
    employer_contributions: EmployerContributions,
    period: Period,
    is_hourly: bool,
) -> Totals:
    """Aggregate effective deductions and contributions into totals.

    final_ctc for hourly employment is current-period gross plus employer
    contributions. Numerically it equals total_ctc; hourly CTC is just never
    reported as a projected yearly figure.
    """
    total_deductions = deductions.total
    total_employer_contribution = employer_contributions.total

    net_salary = gross_salary - total_deductions
    net_monthly_salary, net_annual_salary = monthly_and_yearly(net_salary, period)

    total_ctc = gross_salary + total_employer_contribution
    monthly_ctc, yearly_ctc = monthly_and_yearly(total_ctc, period)

    if is_hourly:
        final_ctc = gross_salary + total_employer_contribution
    else:
        final_ctc = total_ctc

    return Totals(
        total_deductions=total_deductions,
        total_employer_contribution=total_employer_contribution,
        net_salary=net_salary,
        net_annual_salary=net_annual_salary,
        net_monthly_salary=net_monthly_salary,
        total_ctc=total_ctc,
        monthly_ctc=monthly_ctc,
        yearly_ctc=yearly_ctc,
        final_ctc=final_ctc,
    )
