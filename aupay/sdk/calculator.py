"""Recompute-on-change payslip calculator.

Holds the raw input record a form would edit. Each change recomputes the
whole payslip and swaps in the new result; incomplete input keeps the
previous result.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .payslip import DEFAULT_INPUTS, PayslipResult, compute_payslip
from .taxes import TaxYearRules

logger = logging.getLogger(__name__)

ResultListener = Callable[[PayslipResult], None]


class PayslipCalculator:
    """Stateful wrapper around compute_payslip.

    Usage:
        calc = PayslipCalculator(annual_salary="90000")
        calc.update(pay_date="2025-09-12", period_end_date="2025-09-07",
                    employment_start_date="2020-01-01")
        calc.result.net_income
    """

    def __init__(
        self,
        rules_by_year: Optional[Mapping[str, TaxYearRules]] = None,
        **initial: Any,
    ):
        """
        Args:
            rules_by_year: Optional preloaded reference tables keyed by tax
                year; other years are loaded from tax-rules files
            **initial: Raw input values overriding DEFAULT_INPUTS
        """
        self._check_fields(initial)
        self._rules_by_year = dict(rules_by_year or {})
        self._inputs: Dict[str, Any] = {**DEFAULT_INPUTS, **initial}
        self._result: Optional[PayslipResult] = None
        self._listeners: List[ResultListener] = []
        self._recalculate()

    @staticmethod
    def _check_fields(fields: Mapping[str, Any]) -> None:
        unknown = sorted(set(fields) - set(DEFAULT_INPUTS))
        if unknown:
            raise KeyError(f"Unknown input field(s): {', '.join(unknown)}")

    @property
    def inputs(self) -> Dict[str, Any]:
        """Copy of the current raw inputs."""
        return dict(self._inputs)

    @property
    def result(self) -> Optional[PayslipResult]:
        """Latest complete result, or None if input has never been complete."""
        return self._result

    def subscribe(self, listener: ResultListener) -> None:
        """Call listener with each new result."""
        self._listeners.append(listener)

    def set_input(self, field: str, value: Any) -> Optional[PayslipResult]:
        """Change one input field and recompute."""
        return self.update(**{field: value})

    def update(self, **fields: Any) -> Optional[PayslipResult]:
        """Change several input fields at once and recompute."""
        self._check_fields(fields)
        self._inputs = {**self._inputs, **fields}
        return self._recalculate()

    def _recalculate(self) -> Optional[PayslipResult]:
        rules = self._rules_by_year.get(self._inputs.get("tax_year"))
        result = compute_payslip(self._inputs, rules)
        if result is None:
            logger.debug("Input incomplete; keeping previous result")
            return self._result

        self._result = result
        for listener in self._listeners:
            listener(result)
        return result
