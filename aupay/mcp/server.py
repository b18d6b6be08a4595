"""AU Pay Calc MCP Server - FastMCP implementation for payslip tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from aupay.sdk import (
    DEFAULT_INPUTS,
    PAY_CALCULATOR_TOOL_ID,
    UsageStore,
    available_tax_years,
    compute_payslip,
    load_tax_rules,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("au-pay-calc")


# --- Tools ---

@mcp.tool()
async def calculate_payslip(
    annual_salary: float = Field(description="Full-time equivalent gross annual salary in AUD"),
    pay_date: str = Field(description="Pay date (YYYY-MM-DD)"),
    period_end_date: str = Field(description="Pay period end date (YYYY-MM-DD)"),
    employment_start_date: str = Field(description="Employment start date (YYYY-MM-DD)"),
    pay_frequency: str = Field(default="fortnightly", description="weekly, fortnightly, monthly or quarterly"),
    tax_year: str = Field(default="2025-26", description="Tax year, e.g. '2025-26'"),
    full_time_hours: float = Field(default=38, description="Full-time hours per week"),
    fte: float = Field(default=1.0, description="Full-time equivalent between 0 and 1"),
    has_private_health_insurance: bool = Field(
        default=False, description="True if appropriate private hospital cover is held"
    ),
) -> dict[str, Any]:
    """Calculate an Australian payslip: tax, Medicare levy and surcharge, super, net pay and YTD totals. Amounts are unrounded AUD."""
    raw = {
        **DEFAULT_INPUTS,
        "annual_salary": annual_salary,
        "pay_date": pay_date,
        "period_end_date": period_end_date,
        "employment_start_date": employment_start_date,
        "pay_frequency": pay_frequency,
        "tax_year": tax_year,
        "full_time_hours": full_time_hours,
        "fte": fte,
        "has_private_health_insurance": has_private_health_insurance,
    }

    result = compute_payslip(raw)
    if result is None:
        logger.info(f"calculate_payslip: insufficient input for tax year {tax_year}")
        return {
            "error": "Insufficient or invalid input",
            "available_tax_years": available_tax_years(),
        }

    UsageStore().increment_usage(PAY_CALCULATOR_TOOL_ID)
    return result.model_dump(mode="json")


# --- Resources ---

@mcp.resource("aupay://tax-years")
async def tax_years_resource() -> str:
    """Reference tables for each available tax year."""
    data = {year: load_tax_rules(year).model_dump(mode="json") for year in available_tax_years()}
    return json.dumps(data, indent=2, allow_nan=False)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
