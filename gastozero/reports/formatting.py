"""Mini README: Display formatting for amounts and dates.

Structure:
    * format_amount - ``1234.5 -> "1.234,50 €"`` with fixed separators.
    * format_day - ``date(2024, 3, 1) -> "01/03/2024"``.
    * sign_token - ``+``/``-`` token shown before report amounts.

Grouping and decimal symbols are fixed rather than locale driven so reports
look the same on every host.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

CURRENCY_SYMBOL = "€"
THOUSANDS_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
_CENT = Decimal("0.01")

Number = Union[Decimal, int, float]


def format_amount(amount: Number) -> str:
    """Render an amount with two decimals, grouped thousands and the currency suffix."""

    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    with localcontext() as context:
        # quantize needs room for every integer digit plus the cents.
        context.prec = max(context.prec, value.adjusted() + 3)
        rounded = abs(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    integer_part, decimal_part = f"{rounded:f}".split(".")
    grouped = f"{int(integer_part):,}".replace(",", THOUSANDS_SEPARATOR)
    sign = "-" if value < 0 and rounded != 0 else ""
    return f"{sign}{grouped}{DECIMAL_SEPARATOR}{decimal_part} {CURRENCY_SYMBOL}"


def format_day(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def sign_token(negative: bool) -> str:
    return "-" if negative else "+"
