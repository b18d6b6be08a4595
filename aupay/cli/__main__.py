"""AU Pay Calc CLI - Command-line interface for Australian payslip calculations."""

import json

import click
from rich.console import Console

from aupay import __version__
from aupay.sdk import (
    ConfigError,
    DEFAULT_INPUTS,
    PAY_CALCULATOR_TOOL_ID,
    PAY_PERIODS_PER_YEAR,
    UsageStore,
    available_tax_years,
    compute_payslip,
    load_settings,
    load_tax_rules,
)
from aupay.sdk.payslip import DEFAULT_TAX_YEAR, DEFAULT_PAY_FREQUENCY, REQUIRED_FIELDS, parse_flag

from .renderers import render_payslip, render_tax_years
from .settings_commands import settings as settings_group

OPTION_NAMES = {
    "annual_salary": "--salary",
    "pay_date": "--pay-date",
    "period_end_date": "--period-end",
    "employment_start_date": "--start-date",
}


@click.group()
@click.version_option(version=__version__, prog_name="au-pay-calc")
def cli():
    """AU Pay Calc - Australian payslip, tax and super calculator.

    Calculates income tax, Medicare levy and surcharge, superannuation,
    net pay and year-to-date totals for a pay period.

    Defaults are loaded from (in order):

    \b
    1. Command-line options
    2. settings.json (see 'au-pay-calc settings show')
    3. Built-in defaults (2025-26, fortnightly, 38 hours, FTE 1.0)
    """
    pass


cli.add_command(settings_group)


def _load_settings():
    """Read settings.json once so a corrupt file fails before any SDK call."""
    try:
        return load_settings()
    except ConfigError as e:
        raise click.ClickException(str(e))


@cli.command("payslip")
@click.option("--salary", "-s", help="Full-time equivalent annual salary (e.g. 90000)")
@click.option("--pay-date", "-d", help="Pay date (YYYY-MM-DD)")
@click.option("--period-end", "-e", help="Pay period end date (YYYY-MM-DD)")
@click.option("--start-date", help="Employment start date (YYYY-MM-DD)")
@click.option("--frequency", "-f", type=click.Choice(list(PAY_PERIODS_PER_YEAR)), default=None,
              help="Pay frequency (default: settings or fortnightly)")
@click.option("--tax-year", "-y", default=None, help="Tax year, e.g. 2025-26 (default: settings or latest)")
@click.option("--hours", default=None, help="Full-time hours per week (default 38)")
@click.option("--fte", default=None, help="Full-time equivalent, 0.0-1.0 (default 1.0)")
@click.option("--private-health/--no-private-health", default=None,
              help="Whether appropriate private hospital cover is held (no Medicare levy surcharge)")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON instead of tables")
@click.option("--no-track", is_flag=True, help="Don't record this run in usage counts")
def payslip(salary, pay_date, period_end, start_date, frequency, tax_year, hours, fte,
            private_health, as_json, no_track):
    """Calculate a payslip with year-to-date totals.

    Examples:

    \b
        au-pay-calc payslip -s 90000 -d 2025-09-12 -e 2025-09-07 --start-date 2023-02-01
        au-pay-calc payslip -s 120000 --fte 0.6 -f monthly -d 2026-03-31 \\
            -e 2026-03-31 --start-date 2025-10-01 --no-private-health --json
    """
    settings = _load_settings()
    tax_year = tax_year or settings.get("default_tax_year", DEFAULT_TAX_YEAR)
    years = available_tax_years()
    if tax_year not in years:
        raise click.BadParameter(
            f"No tax rules for '{tax_year}'. Available: {', '.join(years)}",
            param_hint="--tax-year",
        )

    if private_health is None:
        private_health = parse_flag(settings.get("private_health_insurance", False))

    raw = {
        **DEFAULT_INPUTS,
        "annual_salary": salary or "",
        "pay_date": pay_date or "",
        "period_end_date": period_end or "",
        "employment_start_date": start_date or "",
        "pay_frequency": frequency or settings.get("default_pay_frequency", DEFAULT_PAY_FREQUENCY),
        "tax_year": tax_year,
        "full_time_hours": hours or str(settings.get("full_time_hours", DEFAULT_INPUTS["full_time_hours"])),
        "fte": fte or DEFAULT_INPUTS["fte"],
        "has_private_health_insurance": private_health,
    }

    missing = [OPTION_NAMES[f] for f in REQUIRED_FIELDS if not raw[f].strip()]
    if missing:
        raise click.UsageError(f"Enter all required fields to see calculations. Missing: {', '.join(missing)}")

    result = compute_payslip(raw)
    if result is None:
        raise click.ClickException(
            "Could not calculate payslip. Check dates are YYYY-MM-DD, "
            "FTE is between 0 and 1 and salary is not negative."
        )

    if not no_track:
        UsageStore().increment_usage(PAY_CALCULATOR_TOOL_ID)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    render_payslip(Console(), result, pay_date=raw["pay_date"])


@cli.command("tax-years")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON")
def tax_years(as_json):
    """List tax years with reference tables available."""
    _load_settings()
    rules_by_year = {year: load_tax_rules(year) for year in available_tax_years()}

    if as_json:
        data = {year: rules.model_dump(mode="json") for year, rules in rules_by_year.items()}
        click.echo(json.dumps(data, indent=2, allow_nan=False))
        return

    if not rules_by_year:
        click.echo("No tax rules found.")
        return

    render_tax_years(Console(), rules_by_year)


@cli.command("usage")
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON")
def usage(as_json):
    """Show how many times each tool has been used."""
    _load_settings()
    store = UsageStore()
    counts = store.load()

    if as_json:
        click.echo(json.dumps(counts, indent=2))
        return

    click.echo(f"Usage file: {store.path}")
    if not counts:
        click.echo("No usage recorded yet.")
        return

    for tool_id, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])):
        click.echo(f"  {tool_id}: {count}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
