"""CTC calculation and assignment commands."""

import json
from typing import Dict, Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console

from ctccalc.sdk import (
    Applicability,
    CommitValidationError,
    CompensationInput,
    ComponentConfig,
    ComponentSetting,
    EmployeeNotFoundError,
    Hourly,
    ManualOverrides,
    ProfileInvalidError,
    Salaried,
    check_suggested_range,
    commit_ctc_assignment,
    compute_breakdown,
    employment_for,
    get_ctc_defaults,
    get_employee,
    suggested_range,
)
from ctccalc.sdk.ctc import overridden_fields
from ctccalc.sdk.schemas import COMPONENT_KEYS, OVERRIDE_KEYS

from .renderers.breakdown_renderer import render_breakdown


def _parse_pairs(pairs: Tuple[str, ...], allowed: Tuple[str, ...], option: str) -> Dict[str, str]:
    """Parse KEY=VALUE option values, rejecting unknown keys."""
    parsed = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint=option)
        key, value = pair.split("=", 1)
        key = key.strip().lower().replace("-", "_")
        if key not in allowed:
            raise click.BadParameter(
                f"Unknown key '{key}'. Must be one of: {', '.join(allowed)}",
                param_hint=option,
            )
        parsed[key] = value.strip()
    return parsed


def _parse_numbers(pairs: Tuple[str, ...], allowed: Tuple[str, ...], option: str) -> Dict[str, float]:
    numbers = {}
    for key, value in _parse_pairs(pairs, allowed, option).items():
        try:
            numbers[key] = float(value)
        except ValueError:
            raise click.BadParameter(f"'{value}' is not a number for {key}", param_hint=option)
    return numbers


def compensation_options(func):
    """Options shared by calc and assign."""
    options = [
        click.option("--period", type=click.Choice(["monthly", "yearly"]),
                     help="Period AMOUNT is expressed in (default: profile defaults, else monthly)."),
        click.option("--employment", type=click.Choice(["salaried", "hourly"]),
                     help="Employment type (default: from employee directory, else salaried)."),
        click.option("--hours", type=float,
                     help="Working hours per month for hourly employees (default: 240)."),
        click.option("--mode", "input_mode", type=click.Choice(["percentage", "amount"]),
                     default="percentage", show_default=True,
                     help="Allocate components by percentage or fixed amount (salaried only)."),
        click.option("--pct", multiple=True, metavar="KEY=PCT",
                     help="Component percentage, e.g. --pct basic=40 (repeatable)."),
        click.option("--amount", "amounts", multiple=True, metavar="KEY=AMOUNT",
                     help="Component fixed amount for --mode amount (repeatable)."),
        click.option("--no-epf", is_flag=True, help="EPF not applicable."),
        click.option("--no-esi", is_flag=True, help="ESI not applicable."),
        click.option("--no-pt", is_flag=True, help="Professional tax not applicable."),
        click.option("--override", "overrides", multiple=True, metavar="FIELD=VALUE",
                     help="Manual deduction value, e.g. --override income_tax=2500 (repeatable)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_input(
    amount: float,
    period: Optional[str],
    employment: Optional[str],
    hours: Optional[float],
    input_mode: str,
    pct: Tuple[str, ...],
    amounts: Tuple[str, ...],
    no_epf: bool,
    no_esi: bool,
    no_pt: bool,
    overrides: Tuple[str, ...],
    employee=None,
) -> CompensationInput:
    """Build a CompensationInput from CLI options, profile defaults and the directory."""
    try:
        defaults = get_ctc_defaults()
    except ProfileInvalidError as e:
        raise click.ClickException(str(e))

    working_hours = hours if hours is not None else defaults.working_hours

    from_directory = employment is None and employee is not None
    if from_directory:
        is_hourly = employee.is_hourly
    else:
        is_hourly = employment == "hourly"

    if is_hourly and input_mode == "amount":
        raise click.UsageError("Amount mode is not available for hourly employees.")

    percentages = _parse_numbers(pct, COMPONENT_KEYS, "--pct")
    fixed = _parse_numbers(amounts, COMPONENT_KEYS, "--amount")
    manual = _parse_pairs(overrides, OVERRIDE_KEYS, "--override")

    try:
        if from_directory:
            variant = employment_for(employee, working_hours=working_hours, input_mode=input_mode)
        elif is_hourly:
            variant = Hourly(working_hours_per_month=working_hours)
        else:
            variant = Salaried(input_mode=input_mode)

        base = ComponentConfig.from_percentages(**percentages) if percentages else defaults.component_config()
        components = ComponentConfig(**{
            key: ComponentSetting(percentage=setting.percentage, amount=fixed.get(key, 0))
            for key, setting in base.items()
        })

        applicability = Applicability(
            epf=defaults.applicability.epf and not no_epf,
            esi=defaults.applicability.esi and not no_esi,
            professional_tax=defaults.applicability.professional_tax and not no_pt,
        )

        return CompensationInput(
            gross_amount=amount,
            period=period or defaults.period,
            employment=variant,
            components=components,
            applicability=applicability,
            overrides=ManualOverrides(**manual),
        )
    except ValidationError as e:
        raise click.ClickException(f"Invalid input: {e}")


def _lookup_employee(employee_id: Optional[str], hint: str = ""):
    if employee_id is None:
        return None
    try:
        return get_employee(employee_id)
    except EmployeeNotFoundError as e:
        raise click.ClickException(f"{e}. {hint}" if hint else str(e))
    except ProfileInvalidError as e:
        raise click.ClickException(str(e))


def _output(comp: CompensationInput, employee, output_format: str, extra: Optional[dict] = None) -> None:
    breakdown = compute_breakdown(comp)
    warnings = list(breakdown.warnings)

    suggested = None
    if employee is not None:
        suggested = suggested_range(employee, comp.period)
        out_of_range = check_suggested_range(employee, comp.gross_amount, comp.period)
        if out_of_range:
            warnings.append(out_of_range)

    data = {
        "input": comp.model_dump(mode="json"),
        "breakdown": breakdown.model_dump(mode="json"),
        "overridden": list(overridden_fields(comp.overrides)),
        "warnings": warnings,
    }
    if employee is not None:
        data["employee"] = employee.model_dump(mode="json")
        data["suggested_range"] = suggested
    if extra:
        data.update(extra)

    if output_format == "json":
        click.echo(json.dumps(data, indent=2))
        return

    render_breakdown(Console(), data)


@click.command("calc")
@click.argument("amount", type=float)
@compensation_options
@click.option("--employee", "employee_id", help="Employee ID (pre-selects employment type).")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]),
              default="table", help="Output format.")
def calc(amount, period, employment, hours, input_mode, pct, amounts,
         no_epf, no_esi, no_pt, overrides, employee_id, output_format):
    """Calculate a CTC breakdown from a gross AMOUNT.

    Nothing is saved; use 'ctc-calc assign' to commit.

    \b
    Examples:
      ctc-calc calc 100000
      ctc-calc calc 1200000 --period yearly --pct basic=40 --pct hra=40 --pct da=20
      ctc-calc calc 24000 --employment hourly --hours 240
      ctc-calc calc 50000 --mode amount --amount basic=30000 --amount hra=20000
      ctc-calc calc 50000 --override income_tax=2500 --override rd=1000
    """
    employee = _lookup_employee(employee_id)
    comp = build_input(amount, period, employment, hours, input_mode, pct, amounts,
                       no_epf, no_esi, no_pt, overrides, employee=employee)
    _output(comp, employee, output_format)


@click.command("assign")
@click.argument("employee_id")
@click.argument("amount", type=float)
@compensation_options
@click.option("--effective-date", help="Effective date (ISO-8601, default: now).")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]),
              default="table", help="Output format.")
def assign(employee_id, amount, period, employment, hours, input_mode, pct, amounts,
           no_epf, no_esi, no_pt, overrides, effective_date, output_format):
    """Commit a CTC assignment for EMPLOYEE_ID.

    The breakdown is stored in monthly terms regardless of --period.

    \b
    Examples:
      ctc-calc assign 101 45000
      ctc-calc assign 102 24000 --hours 200
      ctc-calc assign 103 600000 --period yearly --effective-date 2025-04-01
    """
    employee = None
    if employment is None:
        employee = _lookup_employee(
            employee_id, hint="Pass --employment to assign without a directory entry."
        )

    comp = build_input(amount, period, employment, hours, input_mode, pct, amounts,
                       no_epf, no_esi, no_pt, overrides, employee=employee)

    try:
        path, record = commit_ctc_assignment(employee_id, comp, effective_date=effective_date)
    except CommitValidationError as e:
        raise click.ClickException("\n".join(e.errors))

    extra = {"record_id": path.stem, "record": record.model_dump(mode="json")}
    _output(comp, employee, output_format, extra=extra)

    if output_format != "json":
        click.echo(click.style(
            f"\nAssigned {record.ctc_amount:,.2f}/month to employee {employee_id} "
            f"(record {path.stem})",
            fg="green",
        ))
