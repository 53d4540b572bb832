"""Mini README: Renderer-agnostic report layouts for PDF export.

Structure:
    * TextSpan / ReportCell - a cell is a sequence of independently styled spans.
    * ReportRow / RowKind - data rows plus the distinguished summary row.
    * ColumnSpec / Report - column widths and the document description.
    * TaggedEntry - an entry paired with the collection it came from.
    * build_entry_report - one collection for a month with a ``Total`` row.
    * build_balance_report - both collections merged by date with a balance row.

The builders decide content and layout only. Rendering backends read the
styles from the model (bold, fills, column widths) instead of patching cells
after drawing them, which is why signed amounts are emitted as two spans:
a bold sign and the normal weight number, centred together as one unit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from ..ledger.entries import Entry, EntryKind, MonthKey
from ..logging_utils import get_logger
from .aggregation import filter_by_month, summarise, total
from .formatting import format_amount, format_day, sign_token

LOGGER = get_logger(__name__)

RGB = Tuple[int, int, int]

HEADER_FILL: RGB = (28, 25, 23)
HEADER_TEXT: RGB = (255, 255, 255)
BODY_TEXT: RGB = (28, 25, 23)
SUBTITLE_TEXT: RGB = (120, 113, 108)
WHITE: RGB = (255, 255, 255)
TOTAL_FILL: RGB = (245, 245, 244)
BALANCE_FILL: RGB = (235, 235, 233)

COLUMN_LABELS = ("Concepto", "Fecha", "Cantidad")


class RowKind(str, Enum):
    DATA = "data"
    TOTAL = "total"
    BALANCE = "balance"


@dataclass(frozen=True)
class TextSpan:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class ReportCell:
    """Cell content; spans are drawn side by side and centred as one unit."""

    spans: Tuple[TextSpan, ...]

    @classmethod
    def plain(cls, text: str) -> "ReportCell":
        return cls((TextSpan(text),))

    @classmethod
    def signed(cls, sign: str, amount_text: str) -> "ReportCell":
        """Split cell with an emphasised sign followed by the amount."""

        return cls((TextSpan(sign, bold=True), TextSpan(f" {amount_text}")))

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


@dataclass(frozen=True)
class ReportRow:
    cells: Tuple[ReportCell, ...]
    kind: RowKind = RowKind.DATA
    entry_kind: Optional[EntryKind] = None
    occurred_on: Optional[date] = None

    @property
    def bold(self) -> bool:
        return self.kind is not RowKind.DATA

    @property
    def fill(self) -> RGB:
        if self.kind is RowKind.TOTAL:
            return TOTAL_FILL
        if self.kind is RowKind.BALANCE:
            return BALANCE_FILL
        return WHITE

    @property
    def texts(self) -> List[str]:
        return [cell.text for cell in self.cells]


@dataclass(frozen=True)
class ColumnSpec:
    """Column header; ``width_mm`` of ``None`` takes the remaining width."""

    label: str
    width_mm: Optional[float] = None


@dataclass
class Report:
    """Tabular document description handed to a rendering backend."""

    title: str
    subtitle: Optional[str]
    columns: Sequence[ColumnSpec]
    rows: List[ReportRow] = field(default_factory=list)
    filename: str = "report.pdf"

    @property
    def data_rows(self) -> List[ReportRow]:
        return [row for row in self.rows if row.kind is RowKind.DATA]

    @property
    def summary_row(self) -> ReportRow:
        return self.rows[-1]


@dataclass(frozen=True)
class TaggedEntry:
    """An entry tagged with its origin collection for the merged balance view."""

    kind: EntryKind
    entry: Entry


def _columns(date_width: float, amount_width: float) -> Tuple[ColumnSpec, ...]:
    concept_label, date_label, amount_label = COLUMN_LABELS
    return (
        ColumnSpec(concept_label),
        ColumnSpec(date_label, date_width),
        ColumnSpec(amount_label, amount_width),
    )


def build_entry_report(entries: Iterable[Entry], month: MonthKey, type_label: str) -> Report:
    """Lay out one collection for ``month`` in insertion order plus a ``Total`` row."""

    filtered = filter_by_month(entries, month)
    rows = [
        ReportRow(
            cells=(
                ReportCell.plain(entry.concept),
                ReportCell.plain(format_day(entry.occurred_on)),
                ReportCell.plain(format_amount(entry.amount)),
            ),
            occurred_on=entry.occurred_on,
        )
        for entry in filtered
    ]
    rows.append(
        ReportRow(
            cells=(
                ReportCell.plain("Total"),
                ReportCell.plain(""),
                ReportCell.plain(format_amount(total(filtered))),
            ),
            kind=RowKind.TOTAL,
        )
    )
    LOGGER.debug("Built %s report for %s with %s entries", type_label, month, len(filtered))
    return Report(
        title=f"GastoZero - {type_label}",
        subtitle=month.label,
        columns=_columns(40, 45),
        rows=rows,
        filename=f"gastocero_{type_label.lower()}_{month}.pdf",
    )


def merge_by_date(incomes: Iterable[Entry], expenses: Iterable[Entry]) -> List[TaggedEntry]:
    """Tag and merge both collections ordered by date.

    Ties on the same day keep the concatenation order (incomes first, then
    expenses, each in insertion order); the position is part of the sort key.
    """

    tagged = [TaggedEntry(EntryKind.INCOME, entry) for entry in incomes]
    tagged.extend(TaggedEntry(EntryKind.EXPENSE, entry) for entry in expenses)
    ordered = sorted(enumerate(tagged), key=lambda item: (item[1].entry.occurred_on, item[0]))
    return [item for _, item in ordered]


def build_balance_report(
    incomes: Iterable[Entry], expenses: Iterable[Entry], month: MonthKey
) -> Report:
    """Lay out both collections for ``month`` with signed amounts and the balance."""

    incomes = list(incomes)
    expenses = list(expenses)
    merged = merge_by_date(filter_by_month(incomes, month), filter_by_month(expenses, month))
    rows = [
        ReportRow(
            cells=(
                ReportCell.plain(item.entry.concept),
                ReportCell.plain(format_day(item.entry.occurred_on)),
                ReportCell.signed(
                    sign_token(item.kind is EntryKind.EXPENSE), format_amount(item.entry.amount)
                ),
            ),
            entry_kind=item.kind,
            occurred_on=item.entry.occurred_on,
        )
        for item in merged
    ]

    balance = summarise(incomes, expenses, month).balance
    rows.append(
        ReportRow(
            cells=(
                ReportCell.plain(""),
                ReportCell.plain(""),
                ReportCell.plain(f"{sign_token(balance < 0)} {format_amount(abs(balance))}"),
            ),
            kind=RowKind.BALANCE,
        )
    )
    LOGGER.debug("Built balance report for %s with %s entries", month, len(merged))
    return Report(
        title=f"GastoZero - {month.month_name} {month.year}",
        subtitle=None,
        columns=_columns(45, 50),
        rows=rows,
        filename=f"gastocero_balance_{month}.pdf",
    )
