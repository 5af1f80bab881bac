"""Employee directory lookup.

Reads the `employees:` section of profile.yaml:

    employees:
      "101":
        name: Asha Rao
        department: Operations
        employment_type: salaried   # or hourly
        min_ctc: 30000              # monthly
        max_ctc: 45000              # monthly
        average_ctc: 38000          # monthly

`emp_type_id: 2` is accepted as an alias for `employment_type: hourly`
(the HR system's employee type code). Suggested CTC bounds are display
only; nothing validates a gross amount against them.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..config import ProfileInvalidError, load_profile
from ..ctc.periods import scale_to_period
from ..schemas import EmployeeProfile, Employment, Hourly, InputMode, Period, Salaried


HOURLY_EMP_TYPE_ID = 2


class EmployeeNotFoundError(Exception):
    """Raised when an employee ID is not in the directory."""
    pass


def _normalize_entry(employee_id: str, entry: Dict[str, Any]) -> Dict[str, Any]:
    """Map a raw profile entry onto EmployeeProfile fields."""
    data = dict(entry or {})
    emp_type_id = data.pop("emp_type_id", None)
    if emp_type_id is not None and "employment_type" not in data:
        try:
            type_id = int(emp_type_id)
        except (TypeError, ValueError):
            raise ProfileInvalidError(
                f"Invalid employee '{employee_id}' in profile: emp_type_id must be an integer, got {emp_type_id!r}"
            )
        data["employment_type"] = "hourly" if type_id == HOURLY_EMP_TYPE_ID else "salaried"
    data["employee_id"] = employee_id
    return data


def load_directory() -> Dict[str, EmployeeProfile]:
    """Load all employees from profile.yaml, keyed by employee ID.

    Raises:
        ProfileInvalidError: If an entry fails validation
    """
    profile = load_profile(require_exists=False)
    employees = profile.get("employees", {}) or {}

    directory = {}
    for raw_id, entry in employees.items():
        employee_id = str(raw_id)
        try:
            directory[employee_id] = EmployeeProfile.model_validate(
                _normalize_entry(employee_id, entry)
            )
        except ValidationError as e:
            raise ProfileInvalidError(f"Invalid employee '{employee_id}' in profile: {e}")

    return directory


def list_employees(department: Optional[str] = None) -> List[EmployeeProfile]:
    """List employees, optionally filtered by department (case-insensitive)."""
    employees = list(load_directory().values())
    if department:
        employees = [e for e in employees if e.department.lower() == department.lower()]
    return sorted(employees, key=lambda e: e.employee_id)


def get_employee(employee_id: str) -> EmployeeProfile:
    """Look up a single employee.

    Raises:
        EmployeeNotFoundError: If the ID is not registered
    """
    directory = load_directory()
    employee = directory.get(str(employee_id))
    if employee is None:
        raise EmployeeNotFoundError(f"Employee '{employee_id}' not found in profile")
    return employee


def employment_for(
    employee: EmployeeProfile,
    working_hours: float = 240,
    input_mode: InputMode = "percentage",
) -> Employment:
    """Pre-select the employment variant from the employee's classification.

    input_mode only applies to salaried employees; hourly is always percentage.
    """
    if employee.is_hourly:
        return Hourly(working_hours_per_month=working_hours)
    return Salaried(input_mode=input_mode)


def suggested_range(employee: EmployeeProfile, period: Period) -> Optional[Dict[str, Optional[float]]]:
    """Suggested CTC bounds scaled to the active period.

    Returns:
        Dict with min/max/average (None where not set), or None if the
        employee has no suggested figures at all
    """
    figures = {
        "min": employee.min_ctc,
        "max": employee.max_ctc,
        "average": employee.average_ctc,
    }
    if all(v is None for v in figures.values()):
        return None
    return {
        key: scale_to_period(value, period) if value is not None else None
        for key, value in figures.items()
    }


def check_suggested_range(employee: EmployeeProfile, gross_amount: float, period: Period) -> Optional[str]:
    """Warning text when an entry lies outside the suggested range, else None."""
    bounds = suggested_range(employee, period)
    if not bounds:
        return None
    low, high = bounds["min"], bounds["max"]
    if low is not None and gross_amount < low:
        return f"{gross_amount:,.2f} is below the suggested {period} minimum {low:,.2f}"
    if high is not None and gross_amount > high:
        return f"{gross_amount:,.2f} is above the suggested {period} maximum {high:,.2f}"
    return None
