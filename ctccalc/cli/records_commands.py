"""Records command group for committed CTC assignments."""

import json
from typing import Optional

import click

from ctccalc.sdk import records


def format_record_row(record: dict) -> str:
    """Format one record as a fixed-width row."""
    rec_id = record.get("id", "?")
    data = record.get("data") or {}
    effective = (data.get("effective_date") or "unknown")[:10]
    kind = "hourly" if data.get("is_hourly") else "salaried"
    ctc = data.get("ctc_amount") or 0.0
    net = data.get("net_monthly_payable") or 0.0
    return f"{rec_id:<10} {effective:<12} {kind:<9} {ctc:>14,.2f} {net:>14,.2f}"


@click.group()
def records_cli():
    """Manage committed CTC assignments.

    Records are stored in <data_dir>/records/<employee_id>/, one JSON file
    per assignment, with every amount in monthly terms.

    \b
    Examples:
      ctc-calc records list
      ctc-calc records list --employee 101
      ctc-calc records show abc12345
      ctc-calc records remove abc12345
    """
    pass


@records_cli.command("list")
@click.option("--employee", "employee_id", help="Only records for this employee.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def records_list(employee_id: Optional[str], output_format: str):
    """List committed CTC assignments."""
    all_records = records.list_ctc_records(employee_id)

    if output_format == "json":
        output = [{"id": r.get("id"), "meta": r.get("meta"), "data": r.get("data")} for r in all_records]
        click.echo(json.dumps(output, indent=2))
        return

    if not all_records:
        desc = f"employee {employee_id}" if employee_id else "any employee"
        click.echo(f"No records found for {desc}")
        click.echo("\nRun 'ctc-calc assign' to commit an assignment.")
        return

    by_employee: dict = {}
    for rec in all_records:
        emp = (rec.get("data") or {}).get("employee_id") or rec.get("meta", {}).get("employee_id", "unknown")
        by_employee.setdefault(emp, []).append(rec)

    for emp, emp_records in sorted(by_employee.items()):
        click.echo(f"\nEmployee {emp}")
        click.echo("-" * 63)
        click.echo(f"{'ID':<10} {'EFFECTIVE':<12} {'TYPE':<9} {'CTC/MONTH':>14} {'NET/MONTH':>14}")
        for rec in emp_records:
            click.echo(format_record_row(rec))

    click.echo("-" * 63)
    click.echo(f"Total: {len(all_records)} record(s)")


@records_cli.command("show")
@click.argument("record_id")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def records_show(record_id: str, output_format: str):
    """Show details of a single record.

    \b
    Arguments:
      RECORD_ID    The 8-character record ID (from 'records list')
    """
    record = records.get_ctc_record(record_id)

    if not record:
        raise click.ClickException(f"Record not found: {record_id}")

    if output_format == "json":
        output = {"id": record.get("id"), "meta": record.get("meta"), "data": record.get("data")}
        click.echo(json.dumps(output, indent=2))
        return

    meta = record.get("meta", {})
    data = record.get("data", {})

    click.echo(f"Record: {record_id}")
    click.echo("-" * 40)
    click.echo(f"Employee: {meta.get('employee_id', 'unknown')}")
    click.echo(f"Entered period: {meta.get('period', 'unknown')}")
    click.echo(f"Committed: {meta.get('committed_at', 'unknown')}")

    click.echo("\nData (monthly):")
    click.echo(json.dumps(data, indent=2))


@records_cli.command("remove")
@click.argument("record_id")
@click.option("--force", is_flag=True, help="Skip confirmation prompt.")
def records_remove(record_id: str, force: bool):
    """Remove a committed record by ID."""
    record = records.get_ctc_record(record_id)
    if not record:
        raise click.ClickException(f"Record not found: {record_id}")

    data = record.get("data") or {}
    click.echo(
        f"Will remove: employee {data.get('employee_id', 'unknown')} "
        f"{(data.get('effective_date') or 'unknown')[:10]} "
        f"{data.get('ctc_amount', 0):,.2f}/month"
    )

    if not force:
        click.confirm("Proceed?", abort=True)

    if records.remove_ctc_record(record_id):
        click.echo(click.style(f"Removed record {record_id}", fg="green"))
    else:
        raise click.ClickException(f"Failed to remove record {record_id}")
