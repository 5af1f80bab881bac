"""Employee directory commands."""

import json
from typing import Optional

import click

from ctccalc.sdk import (
    EmployeeNotFoundError,
    ProfileInvalidError,
    get_employee,
    latest_ctc_record,
    list_employees,
    suggested_range,
)


def _fmt(amount: Optional[float]) -> str:
    return "-" if amount is None else f"{amount:,.2f}"


@click.group()
def employees():
    """Browse the employee directory (profile.yaml 'employees').

    \b
    Examples:
      ctc-calc employees list
      ctc-calc employees list --department Operations
      ctc-calc employees show 101
    """
    pass


@employees.command("list")
@click.option("--department", help="Filter by department (case-insensitive).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def employees_list(department: Optional[str], output_format: str):
    """List employees."""
    try:
        found = list_employees(department)
    except ProfileInvalidError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps([e.model_dump(mode="json") for e in found], indent=2))
        return

    if not found:
        click.echo("No employees found.")
        return

    click.echo(f"{'ID':<8} {'NAME':<24} {'DEPARTMENT':<16} {'TYPE':<9} {'AVG CTC/MONTH':>14}")
    click.echo("-" * 75)
    for e in found:
        click.echo(
            f"{e.employee_id:<8} {e.name[:24]:<24} {e.department[:16]:<16} "
            f"{e.employment_type:<9} {_fmt(e.average_ctc):>14}"
        )
    click.echo("-" * 75)
    click.echo(f"Total: {len(found)} employee(s)")


@employees.command("show")
@click.argument("employee_id")
def employees_show(employee_id: str):
    """Show an employee with suggested CTC range and latest assignment."""
    try:
        employee = get_employee(employee_id)
    except (EmployeeNotFoundError, ProfileInvalidError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Employee: {employee.employee_id} {employee.name}".rstrip())
    click.echo(f"Department: {employee.department or '-'}")
    click.echo(f"Type: {employee.employment_type}")

    for period in ("monthly", "yearly"):
        bounds = suggested_range(employee, period)
        if bounds:
            click.echo(
                f"Suggested ({period}): {_fmt(bounds['min'])} - {_fmt(bounds['max'])}"
                f" (average {_fmt(bounds['average'])})"
            )

    latest = latest_ctc_record(employee.employee_id)
    if latest:
        data = latest.get("data", {})
        click.echo(
            f"Current CTC: {_fmt(data.get('ctc_amount'))}/month "
            f"since {(data.get('effective_date') or '?')[:10]} (record {latest['id']})"
        )
    else:
        click.echo("Current CTC: not assigned")
