"""Mini README: Tests for the single-collection and balance report layouts.

Structure:
    * Entry reports - insertion order, the Total row and empty months.
    * Balance reports - date merge with stable ties, signed split cells and
      the balance row.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from gastozero.ledger import Entry, EntryKind, MonthKey
from gastozero.reports import (
    RowKind,
    TextSpan,
    build_balance_report,
    build_entry_report,
    filter_by_month,
    format_amount,
    merge_by_date,
    total,
)
from gastozero.reports.builder import BALANCE_FILL, TOTAL_FILL, WHITE

MARCH = MonthKey(2024, 3)


def _entry(entry_id: str, concept: str, amount: str, occurred_on: str) -> Entry:
    return Entry(
        entry_id=entry_id,
        concept=concept,
        amount=Decimal(amount),
        occurred_on=date.fromisoformat(occurred_on),
    )


def test_entry_report_keeps_insertion_order_and_appends_total() -> None:
    entries = [
        _entry("1", "Luz", "80.5", "2024-03-20"),
        _entry("2", "Hipoteca", "1234.5", "2024-03-01"),
        _entry("3", "Gas", "15", "2024-04-01"),
    ]

    report = build_entry_report(entries, MARCH, "Gastos")

    filtered = filter_by_month(entries, MARCH)
    assert len(report.rows) == len(filtered) + 1
    assert [row.texts for row in report.data_rows] == [
        ["Luz", "20/03/2024", "80,50 €"],
        ["Hipoteca", "01/03/2024", "1.234,50 €"],
    ]
    total_row = report.summary_row
    assert total_row.kind is RowKind.TOTAL
    assert total_row.texts == ["Total", "", format_amount(total(filtered))]
    assert total_row.texts[2] == "1.315,00 €"
    assert total_row.bold and total_row.fill == TOTAL_FILL
    assert not report.data_rows[0].bold and report.data_rows[0].fill == WHITE


def test_entry_report_metadata() -> None:
    report = build_entry_report([], MARCH, "Ingresos")

    assert report.title == "GastoZero - Ingresos"
    assert report.subtitle == "Marzo de 2024"
    assert report.filename == "gastocero_ingresos_2024-03.pdf"
    assert [column.label for column in report.columns] == ["Concepto", "Fecha", "Cantidad"]
    assert [column.width_mm for column in report.columns] == [None, 40, 45]


def test_empty_entry_report_has_only_total_row() -> None:
    report = build_entry_report([_entry("1", "Luz", "10", "2024-02-29")], MARCH, "Gastos")

    assert report.data_rows == []
    assert len(report.rows) == 1
    assert report.summary_row.texts == ["Total", "", "0,00 €"]


def test_merge_by_date_breaks_ties_by_concatenation_order() -> None:
    incomes = [_entry("i1", "Subsidio", "100", "2024-03-10"), _entry("i2", "Aportación", "5", "2024-03-10")]
    expenses = [_entry("e1", "Luz", "30", "2024-03-10"), _entry("e2", "Agua", "12", "2024-03-02")]

    merged = merge_by_date(incomes, expenses)

    assert [(item.kind, item.entry.entry_id) for item in merged] == [
        (EntryKind.EXPENSE, "e2"),
        (EntryKind.INCOME, "i1"),
        (EntryKind.INCOME, "i2"),
        (EntryKind.EXPENSE, "e1"),
    ]


def test_balance_report_same_day_keeps_income_before_expense() -> None:
    incomes = [_entry("i1", "Subsidio", "1000", "2024-03-05")]
    expenses = [_entry("e1", "Luz", "250.5", "2024-03-05")]

    report = build_balance_report(incomes, expenses, MARCH)

    assert [row.entry_kind for row in report.data_rows] == [EntryKind.INCOME, EntryKind.EXPENSE]
    assert [row.texts[0] for row in report.data_rows] == ["Subsidio", "Luz"]


def test_balance_report_rows_signs_and_balance() -> None:
    incomes = [
        _entry("i1", "Subsidio", "1000", "2024-03-01"),
        _entry("i2", "Ayuntamiento", "300", "2024-04-01"),
    ]
    expenses = [
        _entry("e1", "Hipoteca", "1234.5", "2024-03-15"),
        _entry("e2", "Luz", "15.5", "2024-03-03"),
    ]

    report = build_balance_report(incomes, expenses, MARCH)

    assert len(report.rows) == 1 + 2 + 1
    dates = [row.occurred_on for row in report.data_rows]
    assert dates == sorted(dates)
    for row in report.data_rows:
        prefix = "+ " if row.entry_kind is EntryKind.INCOME else "- "
        assert row.texts[2].startswith(prefix)
    assert report.data_rows[-1].texts[2] == "- 1.234,50 €"

    balance_row = report.summary_row
    assert balance_row.kind is RowKind.BALANCE
    assert balance_row.texts == ["", "", "- 250,00 €"]
    assert balance_row.bold and balance_row.fill == BALANCE_FILL


def test_balance_report_amount_cells_are_split_spans() -> None:
    incomes = [_entry("i1", "Subsidio", "1234.5", "2024-03-01")]

    report = build_balance_report(incomes, [], MARCH)

    spans = report.data_rows[0].cells[2].spans
    assert spans == (TextSpan("+", bold=True), TextSpan(" 1.234,50 €"))
    assert report.data_rows[0].cells[2].text == "+ 1.234,50 €"
    assert report.summary_row.texts[2] == "+ 1.234,50 €"


def test_empty_balance_report_shows_positive_zero() -> None:
    report = build_balance_report([], [], MARCH)

    assert report.rows == [report.summary_row]
    assert report.summary_row.texts[2] == "+ 0,00 €"
    assert report.title == "GastoZero - Marzo 2024"
    assert report.subtitle is None
    assert report.filename == "gastocero_balance_2024-03.pdf"
    assert [column.width_mm for column in report.columns] == [None, 45, 50]
