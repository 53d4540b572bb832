"""Mini README: Tests for amount/date formatting and month keys.

Structure:
    * format_amount - separators, rounding and the currency suffix.
    * format_day - day/month/year rendering.
    * MonthKey - parsing, navigation, bounds and labels.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from gastozero.errors import EntryValidationError
from gastozero.ledger import MonthKey
from gastozero.reports import format_amount, format_day


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (1234.5, "1.234,50 €"),
        (Decimal("1234.5"), "1.234,50 €"),
        (0, "0,00 €"),
        (Decimal("999"), "999,00 €"),
        (Decimal("1000000"), "1.000.000,00 €"),
        (Decimal("0.005"), "0,01 €"),
        (Decimal("999.999"), "1.000,00 €"),
        (Decimal("-749.5"), "-749,50 €"),
    ],
)
def test_format_amount(amount: object, expected: str) -> None:
    """Amounts use dot grouping, comma decimals and a trailing euro symbol."""

    assert format_amount(amount) == expected


def test_format_amount_always_two_decimals() -> None:
    for value in (Decimal("7"), Decimal("7.1"), Decimal("7.123"), Decimal("12345.678")):
        text = format_amount(value)
        assert text.endswith(" €")
        integer_part, decimal_part = text[:-2].split(",")
        assert len(decimal_part) == 2 and decimal_part.isdigit()


def test_format_day_pads_day_and_month() -> None:
    assert format_day(date(2024, 3, 1)) == "01/03/2024"


def test_month_key_parse_and_render() -> None:
    month = MonthKey.parse("2024-03")
    assert (month.year, month.month) == (2024, 3)
    assert str(month) == "2024-03"
    assert month.label == "Marzo de 2024"


@pytest.mark.parametrize("text", ["2024-13", "2024-3", "march", "", "2024-00"])
def test_month_key_rejects_malformed_text(text: str) -> None:
    with pytest.raises(EntryValidationError):
        MonthKey.parse(text)


def test_month_key_shift_rolls_over_years() -> None:
    assert MonthKey(2024, 1).shift(-1) == MonthKey(2023, 12)
    assert MonthKey(2024, 12).shift(1) == MonthKey(2025, 1)
    assert MonthKey(2024, 5).shift(14) == MonthKey(2025, 7)


def test_month_key_bounds_cover_leap_february() -> None:
    month = MonthKey(2024, 2)
    assert month.first_day == date(2024, 2, 1)
    assert month.last_day == date(2024, 2, 29)
    assert month.contains(date(2024, 2, 15))
    assert not month.contains(date(2023, 2, 15))


def test_format_amount_beyond_default_decimal_precision() -> None:
    """Thirty-one digit amounts still quantize to cents instead of failing."""

    assert format_amount(Decimal("1e30")) == "1" + ".000" * 10 + ",00 €"
