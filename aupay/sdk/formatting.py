"""Display formatting for payslip figures (AUD, hours, rates)."""

from typing import Optional


def format_currency(amount: Optional[float]) -> str:
    """Format an AUD amount with 2 decimals, e.g. $3,449.60 or -$12.00."""
    amount = amount or 0.0
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def format_hours(hours: Optional[float]) -> str:
    """Format hours with 2 decimals."""
    return f"{hours or 0.0:.2f}"


def format_rate(rate: Optional[float]) -> str:
    """Format a rate or fraction (e.g. FTE) with 4 decimals."""
    return f"{rate or 0.0:.4f}"


def format_percent(rate: float) -> str:
    """Format a decimal rate as a percentage with 1 decimal, e.g. 0.115 -> 11.5%."""
    return f"{rate * 100:.1f}%"
