"""taxes - Australian income tax reference tables and annual calculations.

Scope:
- Per-year reference tables (brackets, Medicare levy, MLS, super rate)
- Annual income tax, Medicare levy and Medicare levy surcharge

Constraints:
- Pure calculation - no pay-period logic (that's in payslip)
- Year-specific rules loaded from tax-rules/{year}.yaml

Usage:
    from aupay.sdk.taxes import load_tax_rules, calculate_income_tax

    rules = load_tax_rules("2025-26")
    tax = calculate_income_tax(90000, rules)
"""

from .schemas import (
    TaxBracket,
    SurchargeBracket,
    MedicareLevyRules,
    TaxYearRules,
)

from .rules import (
    TaxYearNotFoundError,
    available_tax_years,
    load_tax_rules,
)

from .calculations import (
    find_bracket,
    calculate_income_tax,
    calculate_medicare_levy,
    calculate_medicare_levy_surcharge,
)

__all__ = [
    # Schemas
    "TaxBracket",
    "SurchargeBracket",
    "MedicareLevyRules",
    "TaxYearRules",
    # Rules
    "TaxYearNotFoundError",
    "available_tax_years",
    "load_tax_rules",
    # Calculations
    "find_bracket",
    "calculate_income_tax",
    "calculate_medicare_levy",
    "calculate_medicare_levy_surcharge",
]
