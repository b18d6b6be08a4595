"""AU Pay Calc SDK - Core functionality for Australian payslip calculations."""

from .config import (
    ConfigError,
    KNOWN_SETTINGS,
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    unset_setting,
    get_data_path,
)

from .taxes import (
    TaxYearRules,
    TaxYearNotFoundError,
    available_tax_years,
    load_tax_rules,
    calculate_income_tax,
    calculate_medicare_levy,
    calculate_medicare_levy_surcharge,
)

from .payslip import (
    DEFAULT_INPUTS,
    PAY_PERIODS_PER_YEAR,
    PAY_PERIOD_DAYS,
    PayslipInputs,
    PayslipResult,
    PayTotals,
    parse_inputs,
    calculate_payslip,
    compute_payslip,
    financial_year_start,
    get_pay_periods_per_year,
    get_pay_period_days,
)

from .calculator import PayslipCalculator

from .usage import (
    PAY_CALCULATOR_TOOL_ID,
    UsageStore,
    UsageTracker,
)

from .formatting import (
    format_currency,
    format_hours,
    format_rate,
    format_percent,
)

__all__ = [
    # Config
    "ConfigError",
    "KNOWN_SETTINGS",
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "unset_setting",
    "get_data_path",
    # Tax rules
    "TaxYearRules",
    "TaxYearNotFoundError",
    "available_tax_years",
    "load_tax_rules",
    "calculate_income_tax",
    "calculate_medicare_levy",
    "calculate_medicare_levy_surcharge",
    # Payslip engine
    "DEFAULT_INPUTS",
    "PAY_PERIODS_PER_YEAR",
    "PAY_PERIOD_DAYS",
    "PayslipInputs",
    "PayslipResult",
    "PayTotals",
    "parse_inputs",
    "calculate_payslip",
    "compute_payslip",
    "financial_year_start",
    "get_pay_periods_per_year",
    "get_pay_period_days",
    "PayslipCalculator",
    # Usage
    "PAY_CALCULATOR_TOOL_ID",
    "UsageStore",
    "UsageTracker",
    # Formatting
    "format_currency",
    "format_hours",
    "format_rate",
    "format_percent",
]
