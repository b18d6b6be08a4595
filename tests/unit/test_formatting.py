"""Tests for display formatting helpers."""

import pytest

from aupay.sdk.formatting import format_currency, format_hours, format_percent, format_rate


@pytest.mark.parametrize("amount,expected", [
    (3449.597, "$3,449.60"),
    (0, "$0.00"),
    (None, "$0.00"),
    (1234567.891, "$1,234,567.89"),
    (-12, "-$12.00"),
])
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_hours():
    assert format_hours(76) == "76.00"
    assert format_hours(5.826666) == "5.83"
    assert format_hours(None) == "0.00"


def test_format_rate():
    assert format_rate(0.5) == "0.5000"
    assert format_rate(None) == "0.0000"


def test_format_percent():
    assert format_percent(0.115) == "11.5%"
    assert format_percent(0.12) == "12.0%"
