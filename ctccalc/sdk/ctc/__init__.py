"""ctc - Compensation (CTC) breakdown engine.

Scope:
- Period normalization between monthly and yearly figures (periods.py)
- Earning component allocation (components.py)
- Statutory deductions: EPF, ESI, professional tax, income tax (statutory.py)
- Manual override resolution (overrides.py)
- Totals, net pay and CTC (aggregate.py)
- Display hourly rate for hourly employees (hourly.py)
- Editing session with form side rules (session.py)

Constraints:
- Pure calculation - no config, records or employee directory access
- Receives a CompensationInput, returns a CompensationBreakdown
- Never raises for a valid input; degenerate input yields zeros

Usage:
    from ctccalc.sdk.ctc import compute_breakdown
    from ctccalc.sdk.schemas import CompensationInput, Hourly

    breakdown = compute_breakdown(CompensationInput(gross_amount=50000))
    hourly = compute_breakdown(
        CompensationInput(gross_amount=24000, employment=Hourly(working_hours_per_month=240))
    )
    hourly.hourly_rate  # -> 100.0
"""

from .engine import compute_breakdown

from .periods import normalize_period, to_monthly, to_yearly, scale_to_period, PeriodAmounts

from .components import allocate_components, total_percentage

from .statutory import (
    calc_statutory,
    calc_epf,
    calc_taxable_income,
    EPF_RATE,
    EPF_MONTHLY_CAP,
    STANDARD_DEDUCTION,
)

from .overrides import (
    resolve,
    resolve_overrides,
    parse_override,
    overridden_fields,
    reset_to_calculated,
    clear_overrides,
)

from .aggregate import aggregate

from .hourly import project_hourly_rate

from .session import CtcSession

__all__ = [
    # Engine
    "compute_breakdown",
    "CtcSession",
    # Periods
    "normalize_period",
    "to_monthly",
    "to_yearly",
    "scale_to_period",
    "PeriodAmounts",
    # Components
    "allocate_components",
    "total_percentage",
    # Statutory
    "calc_statutory",
    "calc_epf",
    "calc_taxable_income",
    "EPF_RATE",
    "EPF_MONTHLY_CAP",
    "STANDARD_DEDUCTION",
    # Overrides
    "resolve",
    "resolve_overrides",
    "parse_override",
    "overridden_fields",
    "reset_to_calculated",
    "clear_overrides",
    # Aggregation
    "aggregate",
    # Hourly
    "project_hourly_rate",
]
