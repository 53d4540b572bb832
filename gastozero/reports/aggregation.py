"""Mini README: Month filtering and totals.

Structure:
    * filter_by_month - entries whose date falls within a month, order kept.
    * total - exact ``Decimal`` sum of entry amounts.
    * MonthSummary / summarise - income, expense and balance for a month.

All functions are pure: they never mutate their inputs and an empty month is
a regular result (zero totals), not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List

from ..ledger.entries import Entry, MonthKey
from ..logging_utils import get_logger
from .formatting import format_amount

LOGGER = get_logger(__name__)


def filter_by_month(entries: Iterable[Entry], month: MonthKey) -> List[Entry]:
    """Return the entries dated within ``month`` in their original order."""

    return [entry for entry in entries if month.contains(entry.occurred_on)]


def total(entries: Iterable[Entry]) -> Decimal:
    """Sum entry amounts at full precision; empty input sums to zero."""

    return sum((entry.amount for entry in entries), Decimal("0"))


@dataclass(frozen=True)
class MonthSummary:
    """Totals for one month. ``balance`` may be negative."""

    month: MonthKey
    total_income: Decimal
    total_expense: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expense

    def as_dict(self) -> Dict[str, object]:
        """Export raw and display values for JSON responses."""

        return {
            "month": str(self.month),
            "label": self.month.label,
            "total_income": str(self.total_income),
            "total_expense": str(self.total_expense),
            "balance": str(self.balance),
            "formatted": {
                "total_income": format_amount(self.total_income),
                "total_expense": format_amount(self.total_expense),
                "balance": format_amount(self.balance),
            },
        }


def summarise(incomes: Iterable[Entry], expenses: Iterable[Entry], month: MonthKey) -> MonthSummary:
    """Compute the month summary shown above the entry tables."""

    summary = MonthSummary(
        month=month,
        total_income=total(filter_by_month(incomes, month)),
        total_expense=total(filter_by_month(expenses, month)),
    )
    LOGGER.debug(
        "Summary for %s -> income: %s expense: %s balance: %s",
        month,
        summary.total_income,
        summary.total_expense,
        summary.balance,
    )
    return summary
