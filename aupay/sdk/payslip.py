"""Payslip calculation engine.

Derives a full payslip for one pay period from salary, pay frequency,
dates and FTE:

- Current period: gross, income tax, Medicare levy and surcharge, net pay,
  superannuation, hours worked, annual leave accrual, hourly rate
- Year to date: the same figures accumulated since the later of the
  financial year start (1 July) and the employment start date

Every output is recomputed from scratch from the inputs and the tax year's
reference tables. Incomplete input produces no result rather than an error.
"""

import logging
import math
from datetime import date, datetime
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .taxes import (
    TaxYearNotFoundError,
    TaxYearRules,
    calculate_income_tax,
    calculate_medicare_levy,
    calculate_medicare_levy_surcharge,
    load_tax_rules,
)

logger = logging.getLogger(__name__)

PayFrequency = Literal["weekly", "fortnightly", "monthly", "quarterly"]

# Approximations, not calendar-exact
PAY_PERIODS_PER_YEAR = {
    "weekly": 52.18,
    "fortnightly": 26.09,
    "monthly": 12,
    "quarterly": 4,
}

PAY_PERIOD_DAYS = {
    "weekly": 7,
    "fortnightly": 14,
    "monthly": 30.44,
    "quarterly": 91.33,
}

WEEKS_PER_YEAR = 52.18
DAYS_PER_YEAR = 365.25
WORKING_DAYS_PER_YEAR = 260.87
ANNUAL_LEAVE_DAYS = 20
WORKING_DAYS_PER_WEEK = 5

DEFAULT_TAX_YEAR = "2025-26"
DEFAULT_PAY_FREQUENCY = "fortnightly"
DEFAULT_FULL_TIME_HOURS = 38.0
DEFAULT_FTE = 1.0

REQUIRED_FIELDS = ("annual_salary", "pay_date", "period_end_date", "employment_start_date")

# Raw form state before the user has entered anything
DEFAULT_INPUTS = {
    "pay_frequency": DEFAULT_PAY_FREQUENCY,
    "pay_date": "",
    "period_end_date": "",
    "annual_salary": "",
    "employment_start_date": "",
    "tax_year": DEFAULT_TAX_YEAR,
    "full_time_hours": "38",
    "fte": "1.0",
    "has_private_health_insurance": False,
}


def get_pay_periods_per_year(frequency: str) -> float:
    """Get number of pay periods per year for a frequency (fortnightly if unknown)."""
    return PAY_PERIODS_PER_YEAR.get(frequency, PAY_PERIODS_PER_YEAR[DEFAULT_PAY_FREQUENCY])


def get_pay_period_days(frequency: str) -> float:
    """Get length of a pay period in days for a frequency (fortnightly if unknown)."""
    return PAY_PERIOD_DAYS.get(frequency, PAY_PERIOD_DAYS[DEFAULT_PAY_FREQUENCY])


def parse_date(date_str: Any) -> date:
    """Parse a date string in YYYY-MM-DD format."""
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    return datetime.strptime(str(date_str).strip(), "%Y-%m-%d").date()


def parse_number(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Parse a numeric form value, returning default when blank or unparseable."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().replace(",", ""))
        except ValueError:
            return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def parse_flag(value: Any) -> bool:
    """Parse a checkbox-style value."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "on")
    return bool(value)


def financial_year_start(pay_date: date) -> date:
    """Get 1 July of the Australian financial year containing pay_date."""
    year = pay_date.year if pay_date.month >= 7 else pay_date.year - 1
    return date(year, 7, 1)


class PayslipInputs(BaseModel):
    """Validated calculator inputs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pay_frequency: PayFrequency = Field(DEFAULT_PAY_FREQUENCY)
    pay_date: date
    period_end_date: date
    employment_start_date: date
    annual_salary: float = Field(..., ge=0, description="Full-time equivalent gross annual salary")
    tax_year: str = Field(DEFAULT_TAX_YEAR, pattern=r"^\d{4}-\d{2}$")
    full_time_hours: float = Field(DEFAULT_FULL_TIME_HOURS, gt=0, description="Full-time hours per week")
    fte: float = Field(DEFAULT_FTE, ge=0, le=1)
    has_private_health_insurance: bool = False


class PayTotals(BaseModel):
    """Gross, deductions, net and super for a span (a year or year to date)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross: float
    tax: float
    medicare_levy: float
    medicare_levy_surcharge: float
    total_medicare_charges: float
    net: float
    superannuation: float


class PayslipResult(BaseModel):
    """Immutable payslip snapshot. All amounts are raw, unrounded numbers."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tax_year: str
    # Current period
    gross_pay: float
    taxable_income: float
    tax: float
    medicare_levy: float
    medicare_levy_surcharge: float
    total_medicare_charges: float
    net_income: float
    superannuation: float
    super_rate: float
    annual_leave_accrual: float = Field(..., description="Hours of annual leave accrued this period")
    hours_worked: float
    hourly_rate: float
    # Year to date and the annual figures that cap it
    ytd: PayTotals
    annual: PayTotals
    ytd_start_date: date
    ytd_proportion: float
    # Employment summary
    periods_per_year: float
    pay_period_days: float
    periods_to_date: int
    effective_annual_salary: float
    fte: float
    weekly_hours: float


def parse_inputs(raw: Mapping[str, Any]) -> Optional[PayslipInputs]:
    """Convert raw form values into PayslipInputs.

    Returns None when a required field is blank or a date is unparseable.
    Malformed numbers fall back to their defaults: full_time_hours to 38,
    fte to 1.0, annual_salary to zero.
    """
    missing = [f for f in REQUIRED_FIELDS if raw.get(f) is None or str(raw.get(f)).strip() == ""]
    if missing:
        logger.debug(f"parse_inputs: missing required fields {missing}")
        return None

    try:
        pay_date = parse_date(raw["pay_date"])
        period_end_date = parse_date(raw["period_end_date"])
        employment_start_date = parse_date(raw["employment_start_date"])
    except ValueError as e:
        logger.debug(f"parse_inputs: unparseable date: {e}")
        return None

    full_time_hours = parse_number(raw.get("full_time_hours"), DEFAULT_FULL_TIME_HOURS)
    if full_time_hours <= 0:
        full_time_hours = DEFAULT_FULL_TIME_HOURS

    try:
        return PayslipInputs(
            pay_frequency=raw.get("pay_frequency") or DEFAULT_PAY_FREQUENCY,
            pay_date=pay_date,
            period_end_date=period_end_date,
            employment_start_date=employment_start_date,
            annual_salary=parse_number(raw["annual_salary"], 0.0),
            tax_year=raw.get("tax_year") or DEFAULT_TAX_YEAR,
            full_time_hours=full_time_hours,
            fte=parse_number(raw.get("fte"), DEFAULT_FTE),
            has_private_health_insurance=parse_flag(raw.get("has_private_health_insurance", False)),
        )
    except ValidationError as e:
        logger.debug(f"parse_inputs: rejected input: {e.error_count()} error(s): {e}")
        return None


def _capped_ytd(per_period: float, periods_to_date: int, ceiling: float) -> float:
    return min(per_period * periods_to_date, ceiling)


def calculate_payslip(inputs: PayslipInputs, rules: Optional[TaxYearRules] = None) -> PayslipResult:
    """Calculate the payslip for one pay period.

    Args:
        inputs: Validated inputs
        rules: Reference tables for inputs.tax_year (loaded if not given)

    Returns:
        PayslipResult snapshot

    Raises:
        TaxYearNotFoundError: If rules is None and no rules exist for the year
    """
    if rules is None:
        rules = load_tax_rules(inputs.tax_year)

    fte = inputs.fte
    full_time_hours = inputs.full_time_hours
    periods_per_year = get_pay_periods_per_year(inputs.pay_frequency)
    pay_period_days = get_pay_period_days(inputs.pay_frequency)

    effective_annual_salary = inputs.annual_salary * fte
    gross_pay = effective_annual_salary / periods_per_year

    # Annual figures
    annual_tax = calculate_income_tax(effective_annual_salary, rules)
    annual_levy = calculate_medicare_levy(effective_annual_salary, rules)
    annual_surcharge = calculate_medicare_levy_surcharge(
        effective_annual_salary, rules, inputs.has_private_health_insurance
    )
    annual_medicare = annual_levy + annual_surcharge
    super_rate = rules.super_guarantee_rate

    # Current period
    tax = annual_tax / periods_per_year
    medicare_levy = annual_levy / periods_per_year
    medicare_levy_surcharge = annual_surcharge / periods_per_year
    total_medicare_charges = annual_medicare / periods_per_year
    net_income = gross_pay - tax - total_medicare_charges
    superannuation = gross_pay * super_rate

    hours_worked = full_time_hours * fte * pay_period_days / 7

    # 20 days a year pro-rated by FTE, accrued per working day
    accrual_rate = ANNUAL_LEAVE_DAYS * fte / WORKING_DAYS_PER_YEAR
    working_days = pay_period_days * WORKING_DAYS_PER_WEEK / 7
    hours_per_day = full_time_hours / WORKING_DAYS_PER_WEEK
    annual_leave_accrual = working_days * accrual_rate * hours_per_day

    hourly_denominator = WEEKS_PER_YEAR * full_time_hours * fte
    hourly_rate = effective_annual_salary / hourly_denominator if hourly_denominator else 0.0

    annual = PayTotals(
        gross=effective_annual_salary,
        tax=annual_tax,
        medicare_levy=annual_levy,
        medicare_levy_surcharge=annual_surcharge,
        total_medicare_charges=annual_medicare,
        net=effective_annual_salary - annual_tax - annual_medicare,
        superannuation=effective_annual_salary * super_rate,
    )

    # Year to date, capped at the pro-rated annual figures
    ytd_start_date = max(inputs.employment_start_date, financial_year_start(inputs.pay_date))
    elapsed_days = max((inputs.pay_date - ytd_start_date).days, 0)
    ytd_proportion = elapsed_days / DAYS_PER_YEAR
    periods_to_date = math.floor(elapsed_days / pay_period_days) + 1

    max_gross = effective_annual_salary * ytd_proportion
    max_tax = annual_tax * ytd_proportion
    max_levy = annual_levy * ytd_proportion
    max_surcharge = annual_surcharge * ytd_proportion
    max_medicare = annual_medicare * ytd_proportion
    max_net = max_gross - max_tax - max_medicare
    max_super = max_gross * super_rate

    ytd = PayTotals(
        gross=_capped_ytd(gross_pay, periods_to_date, max_gross),
        tax=_capped_ytd(tax, periods_to_date, max_tax),
        medicare_levy=_capped_ytd(medicare_levy, periods_to_date, max_levy),
        medicare_levy_surcharge=_capped_ytd(medicare_levy_surcharge, periods_to_date, max_surcharge),
        total_medicare_charges=_capped_ytd(total_medicare_charges, periods_to_date, max_medicare),
        net=_capped_ytd(net_income, periods_to_date, max_net),
        superannuation=_capped_ytd(superannuation, periods_to_date, max_super),
    )

    return PayslipResult(
        tax_year=inputs.tax_year,
        gross_pay=gross_pay,
        taxable_income=gross_pay,
        tax=tax,
        medicare_levy=medicare_levy,
        medicare_levy_surcharge=medicare_levy_surcharge,
        total_medicare_charges=total_medicare_charges,
        net_income=net_income,
        superannuation=superannuation,
        super_rate=super_rate,
        annual_leave_accrual=annual_leave_accrual,
        hours_worked=hours_worked,
        hourly_rate=hourly_rate,
        ytd=ytd,
        annual=annual,
        ytd_start_date=ytd_start_date,
        ytd_proportion=ytd_proportion,
        periods_per_year=periods_per_year,
        pay_period_days=pay_period_days,
        periods_to_date=periods_to_date,
        effective_annual_salary=effective_annual_salary,
        fte=fte,
        weekly_hours=full_time_hours * fte,
    )


def compute_payslip(raw: Mapping[str, Any], rules: Optional[TaxYearRules] = None) -> Optional[PayslipResult]:
    """Parse raw inputs and calculate, returning None if input is insufficient.

    An unknown tax year counts as insufficient input.
    """
    inputs = parse_inputs(raw)
    if inputs is None:
        return None
    try:
        return calculate_payslip(inputs, rules)
    except TaxYearNotFoundError as e:
        logger.debug(f"compute_payslip: {e}")
        return None
