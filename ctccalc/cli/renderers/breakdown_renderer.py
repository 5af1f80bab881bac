"""Rich renderer for CTC breakdowns.

Transforms SDK JSON output into formatted Rich tables.
"""

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from ctccalc.sdk.schemas import COMPONENT_KEYS, COMPONENT_LABELS


DEDUCTION_LABELS = {
    "epf_employee": "EPF (Employee)",
    "esi_employee": "ESI (Employee)",
    "professional_tax": "Professional Tax",
    "income_tax": "Income Tax",
    "rd": "RD",
    "health_insurance": "Health Insurance",
}

EMPLOYER_LABELS = {
    "epf_employer": "EPF (Employer)",
    "esi_employer": "ESI (Employer)",
}


def render_breakdown(console: Console, data: dict) -> None:
    """Render a CTC breakdown as Rich tables.

    Args:
        console: Rich Console instance
        data: Dict with 'breakdown' (CompensationBreakdown.model_dump()),
              'overridden' (list of manual fields), optional 'employee'
              and 'warnings'
    """
    for warning in data.get("warnings", []):
        console.print(Panel(
            f"[yellow]{warning}[/yellow]",
            title="Note",
            border_style="yellow"
        ))

    employee = data.get("employee")
    if employee:
        _render_employee(console, employee, data.get("suggested_range"))

    _render_breakdown_table(console, data["breakdown"], set(data.get("overridden", [])))


def _render_employee(console: Console, employee: dict, suggested: dict | None) -> None:
    """Render employee panel."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Employee", f"{employee.get('employee_id')} {employee.get('name', '')}".strip())
    if employee.get("department"):
        table.add_row("Department", employee["department"])
    table.add_row("Type", employee.get("employment_type", "salaried"))
    if suggested:
        low, high = suggested.get("min"), suggested.get("max")
        if low is not None and high is not None:
            table.add_row("Suggested", f"{_fmt(low)} - {_fmt(high)}")
        if suggested.get("average") is not None:
            table.add_row("Average", _fmt(suggested["average"]))

    console.print(Panel(table, title="Employee", border_style="dim"))


def _render_breakdown_table(console: Console, breakdown: dict, overridden: set) -> None:
    """Render main breakdown table with monthly and yearly columns."""
    period = breakdown.get("period", "monthly")
    to_monthly = (1 / 12) if period == "yearly" else 1
    to_yearly = 1 if period == "yearly" else 12

    def row(label: str, amount: float | None, style: str = "") -> None:
        monthly = _fmt(None if amount is None else amount * to_monthly)
        yearly = _fmt(None if amount is None else amount * to_yearly)
        if style:
            table.add_row(f"[{style}]{label}[/{style}]",
                          f"[{style}]{monthly}[/{style}]", f"[{style}]{yearly}[/{style}]")
        else:
            table.add_row(label, monthly, yearly)

    mode = "Hourly" if breakdown.get("is_hourly") else "Salaried"
    table = Table(
        title=f"CTC Breakdown ({mode}, entered {period})",
        box=box.ROUNDED,
    )
    table.add_column("", style="bold", min_width=28)
    table.add_column("Monthly", justify="right", min_width=14)
    table.add_column("Yearly", justify="right", min_width=14)

    earnings = breakdown.get("earnings", {})
    table.add_row("[bold]EARNINGS[/bold]", "", "")
    for key in COMPONENT_KEYS:
        amount = earnings.get(key, 0)
        if amount or key == "basic":
            row(f"  {COMPONENT_LABELS[key]}", amount)
    row("  Gross Salary", breakdown.get("gross_salary"), style="bold")
    table.add_row("", "", "")

    deductions = breakdown.get("deductions", {})
    table.add_row("[bold]DEDUCTIONS[/bold]", "", "")
    for key, label in DEDUCTION_LABELS.items():
        marker = " [magenta](manual)[/magenta]" if key in overridden else ""
        row(f"  {label}{marker}", deductions.get(key, 0))
    row("  Total Deductions", breakdown.get("total_deductions"), style="dim")
    table.add_row("", "", "")

    contributions = breakdown.get("employer_contributions", {})
    table.add_row("[bold]EMPLOYER CONTRIBUTIONS[/bold]", "", "")
    for key, label in EMPLOYER_LABELS.items():
        marker = " [magenta](manual)[/magenta]" if key in overridden else ""
        row(f"  {label}{marker}", contributions.get(key, 0))
    row("  Total Employer", breakdown.get("total_employer_contribution"), style="dim")
    table.add_row("", "", "")

    row("Taxable Income (display)", breakdown.get("taxable_income"), style="dim")
    row("NET PAY", breakdown.get("net_salary"), style="bold green")
    row("TOTAL CTC", breakdown.get("total_ctc"), style="bold cyan")

    console.print(table)

    if breakdown.get("is_hourly"):
        console.print(
            f"Hourly rate: [bold]{_fmt(breakdown.get('hourly_rate'))}[/bold] "
            f"[dim](display only; HRA/DA are included in basic)[/dim]"
        )


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"{amount:,.2f}"
