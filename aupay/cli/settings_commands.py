"""Settings CLI commands for AU Pay Calc.

Manages settings.json - calculator defaults, tax rules and data paths.
"""

from pathlib import Path

import click

from aupay.sdk import (
    ConfigError,
    KNOWN_SETTINGS,
    PAY_PERIODS_PER_YEAR,
    available_tax_years,
    get_data_path,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
)

TRUE_VALUES = ("true", "yes", "1", "on")
FALSE_VALUES = ("false", "no", "0", "off")


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Available settings:
    - default_tax_year: e.g. 2025-26
    - default_pay_frequency: weekly, fortnightly, monthly, quarterly
    - full_time_hours: full-time hours per week
    - private_health_insurance: true/false
    - tax_rules_dir: extra directory of <year>.yaml tax rules
    - data_dir: custom data directory path
    """
    pass


def _load():
    try:
        return load_settings()
    except ConfigError as e:
        raise click.ClickException(str(e))


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = _load()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective paths:")
    click.echo(f"  data_dir: {get_data_path()}")


def _coerce(key: str, value: str):
    """Validate and convert a setting value from the command line."""
    if key == "default_tax_year":
        years = available_tax_years()
        if value not in years:
            raise click.BadParameter(f"No tax rules for '{value}'. Available: {', '.join(years)}")
        return value

    if key == "default_pay_frequency":
        if value not in PAY_PERIODS_PER_YEAR:
            raise click.BadParameter(f"Must be one of: {', '.join(PAY_PERIODS_PER_YEAR)}")
        return value

    if key == "full_time_hours":
        try:
            hours = float(value)
        except ValueError:
            raise click.BadParameter(f"Not a number: {value}")
        if hours <= 0:
            raise click.BadParameter("full_time_hours must be positive")
        return hours

    if key == "private_health_insurance":
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise click.BadParameter(f"Expected true or false, got '{value}'")

    # Directory settings
    path = Path(value).expanduser().resolve()
    if path.exists() and not path.is_dir():
        raise click.ClickException(f"Path exists but is not a directory: {path}")
    return str(path)


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key, value):
    """Set a setting.

    Examples:
        au-pay-calc settings set default_tax_year 2024-25
        au-pay-calc settings set private_health_insurance true
    """
    _load()
    coerced = _coerce(key, value)
    path = set_setting(key, coerced)
    click.echo(f"Set {key}: {coerced}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
def settings_unset(key):
    """Remove a setting, reverting to the default."""
    _load()
    if unset_setting(key):
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
