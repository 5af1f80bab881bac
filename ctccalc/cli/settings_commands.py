"""Settings commands: where ctc-calc reads its profile and writes records."""

from pathlib import Path

import click

from ctccalc.sdk import (
    ProfileInvalidError,
    get_ctc_defaults,
    get_data_path,
    get_profile_path,
    get_settings_path,
    list_employees,
    load_settings,
    save_settings,
    set_setting,
)


def _ensure_writable_dir(path: Path) -> None:
    """Create path if needed and confirm records can be written there."""
    if path.exists() and not path.is_dir():
        raise click.ClickException(f"Path exists but is not a directory: {path}")
    try:
        path.mkdir(parents=True, exist_ok=True)
        probe = path / ".write_test"
        probe.touch()
        probe.unlink()
    except OSError as e:
        raise click.ClickException(f"Directory is not writable: {path}\n{e}")


def _profile_summary() -> str:
    profile_path = get_profile_path()
    if not profile_path.exists():
        return "not found (built-in defaults, empty employee directory)"
    try:
        employees = list_employees()
        defaults = get_ctc_defaults()
    except ProfileInvalidError as e:
        return f"invalid: {e}"
    split = ", ".join(f"{k} {v:g}%" for k, v in defaults.components.items())
    return (
        f"{len(employees)} employee(s); defaults {defaults.period}, "
        f"{defaults.working_hours:g} h/month, {split}"
    )


@click.group()
def settings():
    """Manage settings.json (data_dir, profile).

    \b
    Examples:
      ctc-calc settings show
      ctc-calc settings data-dir ~/hr/ctc-data
      ctc-calc settings profile ~/hr/profile.yaml
    """
    pass


@settings.command("show")
def settings_show():
    """Show settings.json and the paths ctc-calc resolves from it."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}" + ("" if settings_path.exists() else " (not created)"))
    for key in sorted(current):
        click.echo(f"  {key}: {current[key]}")

    click.echo()
    click.echo(f"profile: {get_profile_path()}")
    click.echo(f"  {_profile_summary()}")
    click.echo(f"data_dir: {get_data_path()}")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Revert to the XDG default data directory.")
def settings_data_dir(path, clear):
    """Show, set or clear the directory committed records are written to."""
    current = load_settings()

    if clear:
        if current.pop("data_dir", None) is None:
            click.echo("data_dir was not set.")
            return
        save_settings(current)
        click.echo(f"Cleared data_dir setting. Records now go to {get_data_path()} (default)")
        return

    if not path:
        origin = "settings.json" if "data_dir" in current else "default"
        click.echo(f"data_dir: {get_data_path()} ({origin})")
        return

    data_path = Path(path).expanduser().resolve()
    _ensure_writable_dir(data_path)
    set_setting("data_dir", str(data_path))
    click.echo(f"Set data_dir: {data_path}")


@settings.command("profile")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def settings_profile(path):
    """Read the employee directory and defaults from PATH instead of the config dir."""
    profile_path = Path(path).expanduser().resolve()
    set_setting("profile", str(profile_path))
    click.echo(f"Set profile: {profile_path}")
    click.echo(f"  {_profile_summary()}")
