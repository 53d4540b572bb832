"""Mini README: Month summaries and exportable reports.

Exports the currency formatter, the month filter and aggregator, the report
builders and the PDF renderer. The builders are pure; only ``pdf_renderer``
touches reportlab.
"""

from .aggregation import MonthSummary, filter_by_month, summarise, total
from .builder import Report, ReportCell, ReportRow, RowKind, TaggedEntry, TextSpan
from .builder import build_balance_report, build_entry_report, merge_by_date
from .formatting import format_amount, format_day
from .pdf_renderer import render_pdf, write_pdf

__all__ = [
    "MonthSummary",
    "Report",
    "ReportCell",
    "ReportRow",
    "RowKind",
    "TaggedEntry",
    "TextSpan",
    "build_balance_report",
    "build_entry_report",
    "filter_by_month",
    "format_amount",
    "format_day",
    "merge_by_date",
    "render_pdf",
    "summarise",
    "total",
    "write_pdf",
]
