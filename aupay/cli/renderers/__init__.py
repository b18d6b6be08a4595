"""Rich renderers for CLI output."""

from .payslip_renderer import render_payslip, render_tax_years

__all__ = ["render_payslip", "render_tax_years"]
