"""Annual income tax, Medicare levy and Medicare levy surcharge.

All functions take an annual taxable income and the year's TaxYearRules
and return an annual amount in dollars.
"""

from typing import Optional, Sequence

from .schemas import SurchargeBracket, TaxBracket, TaxYearRules


def find_bracket(income: float, brackets: Sequence) -> Optional[TaxBracket]:
    """Return the first ascending bracket whose max is at or above income."""
    for bracket in brackets:
        if income <= bracket.max:
            return bracket
    return None


def calculate_income_tax(taxable_income: float, rules: TaxYearRules) -> float:
    """Calculate annual income tax from the progressive bracket table.

    Income exactly at a bracket's max is taxed in that bracket, so with the
    +1 in the formula a boundary income carries one extra dollar at the
    lower rate.
    """
    if taxable_income <= 0:
        return 0.0
    bracket = find_bracket(taxable_income, rules.tax_brackets)
    if bracket is None:
        return 0.0
    return bracket.offset + (taxable_income - bracket.min + 1) * bracket.rate


def calculate_medicare_levy(taxable_income: float, rules: TaxYearRules) -> float:
    """Calculate annual Medicare levy with the low-income shade-in.

    Nothing at or below the lower threshold, the full rate above the upper
    threshold, and a linear taper of the rate across the band between.
    """
    levy = rules.medicare_levy
    if taxable_income <= levy.lower_threshold:
        return 0.0

    if taxable_income <= levy.upper_threshold:
        reduction = (levy.upper_threshold - taxable_income) / (
            levy.upper_threshold - levy.lower_threshold
        )
        return taxable_income * levy.rate * (1 - reduction)

    return taxable_income * levy.rate


def calculate_medicare_levy_surcharge(
    taxable_income: float,
    rules: TaxYearRules,
    has_private_health_insurance: bool,
) -> float:
    """Calculate annual Medicare levy surcharge.

    Zero with appropriate private hospital cover. Otherwise the matched
    tier's rate applies to the whole income (not marginally).
    """
    if has_private_health_insurance:
        return 0.0

    tier: Optional[SurchargeBracket] = find_bracket(taxable_income, rules.medicare_levy_surcharge)
    if tier is None:
        return 0.0
    return taxable_income * tier.rate
