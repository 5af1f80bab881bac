"""CTC breakdown engine.

Derives a full, internally consistent payroll breakdown from a single gross
figure. Stages run strictly in order, each a pure function of the input and
the earlier stages:

1. Period normalization (periods.py)
2. Component allocation (components.py)
3. Statutory deductions (statutory.py)
4. Manual override resolution (overrides.py)
5. Aggregation into totals, net pay and CTC (aggregate.py)
6. Hourly rate projection, hourly only (hourly.py)

compute_breakdown() has no I/O and no shared state: identical input gives
an identical breakdown. It does not raise for any valid CompensationInput;
degenerate input (zero gross, zero percentages, zero hours) produces zeros.
"""

import logging

from ..schemas import CompensationBreakdown, CompensationInput
from .aggregate import aggregate
from .components import allocate_components
from .hourly import project_hourly_rate
from .overrides import resolve_overrides
from .periods import normalize_period
from .statutory import calc_statutory, calc_taxable_income

logger = logging.getLogger(__name__)


def compute_breakdown(comp: CompensationInput) -> CompensationBreakdown:
    """Compute the CTC breakdown for one input.

    Args:
        comp: CompensationInput (gross, period, employment, components,
              applicability, manual overrides)

    Returns:
        CompensationBreakdown in current-period units

    Example:
        comp = CompensationInput(gross_amount=100000)
        breakdown = compute_breakdown(comp)
        breakdown.earnings.basic  # -> 50000.0 (default 50/30/20 split)
    """
    period = comp.period
    gross = normalize_period(comp.gross_amount, period)

    earnings = allocate_components(comp.gross_amount, comp.employment, comp.components)
    gross_salary = earnings.total

    calculated = calc_statutory(earnings, gross_salary, period, comp.applicability)
    resolved = resolve_overrides(calculated, comp.overrides)

    totals = aggregate(
        gross_salary,
        resolved.deductions,
        resolved.employer_contributions,
        period,
        comp.is_hourly,
    )

    hourly_rate = 0.0
    if comp.is_hourly:
        hourly_rate = project_hourly_rate(comp.gross_amount, period, comp.working_hours)

    standard_deduction, taxable_income = calc_taxable_income(gross.yearly, period)

    logger.debug(
        f"compute_breakdown: {period} gross {comp.gross_amount:.2f} "
        f"({comp.employment.mode}/{comp.input_mode}) -> "
        f"gross_salary {gross_salary:.2f}, deductions {totals.total_deductions:.2f}, "
        f"net {totals.net_salary:.2f}, ctc {totals.total_ctc:.2f}"
    )

    return CompensationBreakdown(
        period=period,
        is_hourly=comp.is_hourly,
        earnings=earnings,
        gross_salary=gross_salary,
        deductions=resolved.deductions,
        total_deductions=totals.total_deductions,
        employer_contributions=resolved.employer_contributions,
        total_employer_contribution=totals.total_employer_contribution,
        calculated_values=calculated,
        net_salary=totals.net_salary,
        net_annual_salary=totals.net_annual_salary,
        net_monthly_salary=totals.net_monthly_salary,
        total_ctc=totals.total_ctc,
        monthly_ctc=totals.monthly_ctc,
        yearly_ctc=totals.yearly_ctc,
        final_ctc=totals.final_ctc,
        hourly_rate=hourly_rate,
        standard_deduction=standard_deduction,
        taxable_income=taxable_income,
        warnings=resolved.warnings,
    )
