"""Pydantic schemas for tax rules validation.

These schemas validate the tax-rules/*.yaml files and provide typed access
to the per-year reference tables: income tax brackets, Medicare levy,
Medicare levy surcharge and the superannuation guarantee rate.
"""

import math
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


def _json_bound(value: float):
    """Unbounded top brackets serialise as null; JSON has no Infinity."""
    return None if math.isinf(value) else value


class TaxBracket(BaseModel):
    """Single progressive income tax bracket.

    Tax for income in this bracket is offset + (income - min + 1) * rate.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0, description="Lower bound (inclusive)")
    max: float = Field(..., description="Upper bound (inclusive, .inf for top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as decimal")
    offset: float = Field(default=0, ge=0, description="Tax on income below this bracket")

    @field_serializer("max", when_used="json")
    def serialize_max(self, value: float):
        return _json_bound(value)


class SurchargeBracket(BaseModel):
    """Medicare levy surcharge tier. The rate applies flat to all income."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0)
    max: float = Field(...)
    rate: float = Field(..., ge=0, le=1)

    @field_serializer("max", when_used="json")
    def serialize_max(self, value: float):
        return _json_bound(value)


class MedicareLevyRules(BaseModel):
    """Medicare levy rate and low-income shade-in thresholds."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(..., ge=0, le=1)
    lower_threshold: float = Field(..., ge=0, description="No levy at or below this income")
    upper_threshold: float = Field(..., ge=0, description="Full levy above this income")

    @model_validator(mode="after")
    def thresholds_ordered(self) -> "MedicareLevyRules":
        if self.lower_threshold >= self.upper_threshold:
            raise ValueError(
                f"lower_threshold ({self.lower_threshold}) must be below "
                f"upper_threshold ({self.upper_threshold})"
            )
        return self


def _check_contiguous(brackets: list, name: str) -> None:
    """Brackets must start at 0, abut one dollar apart and end unbounded."""
    if not brackets:
        raise ValueError(f"{name} must not be empty")
    if brackets[0].min != 0:
        raise ValueError(f"{name} must start at 0, got {brackets[0].min}")
    for prev, cur in zip(brackets, brackets[1:]):
        if cur.min != prev.max + 1:
            raise ValueError(
                f"{name} not contiguous: bracket ending {prev.max} "
                f"followed by bracket starting {cur.min}"
            )
    for b in brackets:
        if b.max < b.min:
            raise ValueError(f"{name} bracket max {b.max} below min {b.min}")
    if not math.isinf(brackets[-1].max):
        raise ValueError(f"last bracket of {name} must be unbounded (max: .inf)")


class TaxYearRules(BaseModel):
    """Complete reference tables for one Australian tax year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    tax_year: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="e.g. '2025-26'")
    tax_brackets: List[TaxBracket]
    medicare_levy: MedicareLevyRules
    medicare_levy_surcharge: List[SurchargeBracket]
    super_guarantee_rate: float = Field(..., ge=0, le=1)

    @model_validator(mode="after")
    def brackets_well_formed(self) -> "TaxYearRules":
        _check_contiguous(self.tax_brackets, "tax_brackets")
        _check_contiguous(self.medicare_levy_surcharge, "medicare_levy_surcharge")
        return self
