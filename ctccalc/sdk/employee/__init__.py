"""employee - Employee directory access.

Scope:
- Employee lookup and listing from profile.yaml (directory.py)
- Employment pre-selection (salaried vs hourly) for the engine
- Suggested CTC range display helpers

Constraints:
- Reads profile.yaml only; never writes
- Suggested ranges are informational; nothing is enforced

Usage:
    from ctccalc.sdk.employee import get_employee, employment_for

    employee = get_employee("101")
    employment = employment_for(employee, working_hours=240)
"""

from .directory import (
    EmployeeNotFoundError,
    load_directory,
    list_employees,
    get_employee,
    employment_for,
    suggested_range,
    check_suggested_range,
)

__all__ = [
    "EmployeeNotFoundError",
    "load_directory",
    "list_employees",
    "get_employee",
    "employment_for",
    "suggested_range",
    "check_suggested_range",
]
