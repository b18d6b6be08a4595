"""Rich renderer for calculated payslips.

Transforms SDK results into formatted Rich tables.
"""

from typing import Dict

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from aupay.sdk import PayslipResult, TaxYearRules
from aupay.sdk.formatting import format_currency, format_hours, format_percent, format_rate


def render_payslip(console: Console, result: PayslipResult, pay_date: str = "") -> None:
    """Render a payslip as Rich tables.

    Args:
        console: Rich Console instance
        result: SDK output from calculate_payslip()
        pay_date: Pay date shown in the title
    """
    _render_payslip_table(console, result, pay_date)
    _render_summary(console, result)
    _render_notes(console, result)


def _render_payslip_table(console: Console, result: PayslipResult, pay_date: str) -> None:
    """Render main payslip table: current period beside year to date."""
    ytd = result.ytd
    title = f"Payslip {pay_date} ({result.tax_year})" if pay_date else f"Payslip ({result.tax_year})"

    table = Table(title=title, box=box.ROUNDED)
    table.add_column("", style="bold", min_width=28)
    table.add_column("This Period", justify="right", min_width=12)
    table.add_column("YTD", justify="right", min_width=12)

    table.add_row("Hours Worked", f"{format_hours(result.hours_worked)} hrs", "")
    table.add_row("Hourly Rate", format_currency(result.hourly_rate), "")
    table.add_row("", "", "")

    table.add_row("[bold]EARNINGS[/bold]", "", "")
    table.add_row("  Gross Pay", format_currency(result.gross_pay), format_currency(ytd.gross))
    table.add_row("  Taxable Income", format_currency(result.taxable_income), "", style="dim")
    table.add_row("", "", "")

    table.add_row("[bold]DEDUCTIONS[/bold]", "", "")
    table.add_row("  Income Tax", _deduction(result.tax), _deduction(ytd.tax))
    table.add_row(
        "  Medicare Levy",
        _deduction(result.medicare_levy),
        _deduction(ytd.medicare_levy),
    )
    if result.medicare_levy_surcharge > 0:
        table.add_row(
            "  Medicare Levy Surcharge",
            _deduction(result.medicare_levy_surcharge),
            _deduction(ytd.medicare_levy_surcharge),
        )
    table.add_row("", "", "")

    table.add_row(
        "[bold green]NET INCOME[/bold green]",
        f"[bold green]{format_currency(result.net_income)}[/bold green]",
        f"[green]{format_currency(ytd.net)}[/green]",
    )
    table.add_row("", "", "")
    table.add_row(
        f"Superannuation ({format_percent(result.super_rate)})",
        format_currency(result.superannuation),
        format_currency(ytd.superannuation),
    )
    table.add_row("Annual Leave Accrual", f"{format_hours(result.annual_leave_accrual)} hrs", "")

    console.print(table)


def _render_summary(console: Console, result: PayslipResult) -> None:
    """Render employment summary panel."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("Effective Annual Salary", format_currency(result.effective_annual_salary))
    table.add_row("FTE", format_rate(result.fte))
    table.add_row("Hours/Week", format_hours(result.weekly_hours))
    table.add_row("Pay Periods/Year", f"{result.periods_per_year:.2f}")
    table.add_row("Pay Periods to Date", str(result.periods_to_date))
    table.add_row("YTD From", result.ytd_start_date.isoformat())

    console.print(Panel(table, title="Employment Summary", border_style="dim"))


def _render_notes(console: Console, result: PayslipResult) -> None:
    notes = [
        f"Income tax calculated using {result.tax_year} ATO rates",
        f"Superannuation at {format_percent(result.super_rate)} is paid on top of gross, not deducted",
        "YTD figures are estimates capped at the pro-rated annual amounts",
    ]
    if result.medicare_levy_surcharge == 0 and result.annual.medicare_levy_surcharge == 0:
        notes.append("No Medicare levy surcharge applies")
    console.print(Panel(
        "\n".join(f"• {n}" for n in notes),
        title="Calculation Notes",
        border_style="dim",
    ))


def render_tax_years(console: Console, rules_by_year: Dict[str, TaxYearRules]) -> None:
    """Render a summary of each available tax year's reference tables."""
    table = Table(title="Tax Years", box=box.ROUNDED)
    table.add_column("Year", style="bold")
    table.add_column("Tax-free to", justify="right")
    table.add_column("Top rate", justify="right")
    table.add_column("Medicare", justify="right")
    table.add_column("Super", justify="right")

    for year, rules in rules_by_year.items():
        brackets = rules.tax_brackets
        tax_free = brackets[0].max if brackets[0].rate == 0 else 0
        table.add_row(
            year,
            format_currency(tax_free),
            format_percent(brackets[-1].rate),
            format_percent(rules.medicare_levy.rate),
            format_percent(rules.super_guarantee_rate),
        )

    console.print(table)


def _deduction(amount: float) -> str:
    """Format a deduction amount in red with a leading minus."""
    return f"[red]-{format_currency(amount)}[/red]"
