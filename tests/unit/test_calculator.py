"""Tests for the recompute-on-change PayslipCalculator."""

import pytest

from aupay.sdk import PayslipCalculator
from aupay.sdk.taxes import load_tax_rules


COMPLETE = {
    "annual_salary": "90000",
    "pay_date": "2025-09-12",
    "period_end_date": "2025-09-07",
    "employment_start_date": "2020-01-01",
}


class TestPayslipCalculator:

    def test_starts_without_result(self):
        calc = PayslipCalculator()
        assert calc.result is None
        assert calc.inputs["tax_year"] == "2025-26"
        assert calc.inputs["pay_frequency"] == "fortnightly"

    def test_result_appears_when_input_complete(self):
        calc = PayslipCalculator(annual_salary="90000")
        assert calc.result is None

        calc.update(pay_date="2025-09-12", period_end_date="2025-09-07")
        assert calc.result is None

        result = calc.set_input("employment_start_date", "2020-01-01")
        assert result is not None
        assert calc.result is result
        assert result.gross_pay == pytest.approx(90000 / 26.09)

    def test_every_change_recomputes(self):
        calc = PayslipCalculator(**COMPLETE)
        fortnightly = calc.result

        calc.set_input("pay_frequency", "monthly")
        assert calc.result is not fortnightly
        assert calc.result.gross_pay == pytest.approx(7500.0)
        assert calc.result.pay_period_days == 30.44

        calc.set_input("fte", "0.5")
        assert calc.result.gross_pay == pytest.approx(3750.0)

    def test_incomplete_change_keeps_previous_result(self):
        calc = PayslipCalculator(**COMPLETE)
        previous = calc.result

        returned = calc.set_input("annual_salary", "")
        assert returned is previous
        assert calc.result is previous
        assert calc.inputs["annual_salary"] == ""

    def test_unknown_field_rejected(self):
        calc = PayslipCalculator()
        with pytest.raises(KeyError):
            calc.set_input("salary", "90000")
        with pytest.raises(KeyError):
            PayslipCalculator(bonus="100")

    def test_inputs_is_a_copy(self):
        calc = PayslipCalculator(**COMPLETE)
        calc.inputs["annual_salary"] = "1"
        assert calc.inputs["annual_salary"] == "90000"

    def test_listeners_receive_each_new_result(self):
        calc = PayslipCalculator(**COMPLETE)
        seen = []
        calc.subscribe(seen.append)

        calc.set_input("fte", "0.8")
        calc.set_input("pay_date", "")
        calc.set_input("pay_date", "2025-10-10")

        assert len(seen) == 2
        assert seen[-1] is calc.result
        assert seen[0].fte == 0.8

    def test_preloaded_rules_used(self):
        rules = load_tax_rules("2024-25")
        calc = PayslipCalculator(rules_by_year={"2024-25": rules}, tax_year="2024-25", **COMPLETE)
        assert calc.result.super_rate == 0.115

    def test_unknown_tax_year_keeps_result(self):
        calc = PayslipCalculator(**COMPLETE)
        previous = calc.result
        calc.set_input("tax_year", "2019-20")
        assert calc.result is previous
