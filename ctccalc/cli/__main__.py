"""CTC Calc CLI - Command-line interface for CTC breakdowns and assignments."""

import click

from ctccalc import __version__

from .ctc_commands import calc, assign
from .records_commands import records_cli as records_group
from .employee_commands import employees as employees_group
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="ctc-calc")
def cli():
    """CTC Calc - Cost-to-company breakdowns and assignments.

    Derives earnings, statutory deductions, employer contributions,
    net pay and CTC from a single gross figure, and commits the
    result as a monthly record.

    Configuration is loaded from (in order):

    \b
    1. CTC_CALC_CONFIG_PATH environment variable
    2. settings.json 'profile' key (if set via CLI)
    3. ~/.config/ctc-calc/profile.yaml (XDG default)

    Run 'ctc-calc settings show' to see effective paths.
    """
    pass


cli.add_command(calc)
cli.add_command(assign)
cli.add_command(records_group, name="records")
cli.add_command(employees_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
