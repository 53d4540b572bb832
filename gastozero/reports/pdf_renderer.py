"""Mini README: Render report layouts to paginated PDF documents.

Structure:
    * render_pdf - build the PDF in memory and return its bytes.
    * write_pdf - persist the PDF under the report's filename.

Uses reportlab's platypus flowables: a bold title, an optional subtitle and
a table whose header repeats on every page. Cells become centred
``Paragraph`` objects so multi-span cells (bold sign plus normal number) are
laid out natively as one centred line.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..logging_utils import get_logger
from .builder import (
    BODY_TEXT,
    HEADER_FILL,
    HEADER_TEXT,
    RGB,
    SUBTITLE_TEXT,
    Report,
    ReportCell,
    ReportRow,
)

LOGGER = get_logger(__name__)

PAGE_SIZE = A4
SIDE_MARGIN = 14 * mm
TOP_MARGIN = 14 * mm
BODY_FONT_SIZE = 10


def _colour(rgb: RGB) -> colors.Color:
    red, green, blue = rgb
    return colors.Color(red / 255, green / 255, blue / 255)


TITLE_STYLE = ParagraphStyle(
    "ReportTitle",
    fontName="Helvetica-Bold",
    fontSize=18,
    leading=22,
    textColor=_colour(BODY_TEXT),
    alignment=TA_LEFT,
)
SUBTITLE_STYLE = ParagraphStyle(
    "ReportSubtitle",
    fontName="Helvetica",
    fontSize=11,
    leading=14,
    textColor=_colour(SUBTITLE_TEXT),
    alignment=TA_LEFT,
)
CELL_STYLE = ParagraphStyle(
    "ReportCell",
    fontName="Helvetica",
    fontSize=BODY_FONT_SIZE,
    leading=BODY_FONT_SIZE + 2,
    textColor=_colour(BODY_TEXT),
    alignment=TA_CENTER,
)
HEADER_STYLE = ParagraphStyle(
    "ReportHeader",
    parent=CELL_STYLE,
    fontName="Helvetica-Bold",
    textColor=_colour(HEADER_TEXT),
)


def cell_markup(cell: ReportCell, *, bold_row: bool = False) -> str:
    """Translate cell spans into reportlab paragraph markup."""

    parts = []
    for span in cell.spans:
        text = escape(span.text)
        parts.append(f"<b>{text}</b>" if span.bold or bold_row else text)
    return "".join(parts)


def _column_widths(report: Report) -> List[float]:
    available = PAGE_SIZE[0] - 2 * SIDE_MARGIN
    fixed = sum(column.width_mm * mm for column in report.columns if column.width_mm is not None)
    flexible = [column for column in report.columns if column.width_mm is None]
    remaining = max(available - fixed, 0) / len(flexible) if flexible else 0
    return [
        column.width_mm * mm if column.width_mm is not None else remaining
        for column in report.columns
    ]


def _row_cells(row: ReportRow) -> List[Paragraph]:
    return [Paragraph(cell_markup(cell, bold_row=row.bold), CELL_STYLE) for cell in row.cells]


def _build_table(report: Report) -> Table:
    header = [Paragraph(escape(column.label), HEADER_STYLE) for column in report.columns]
    data = [header] + [_row_cells(row) for row in report.rows]
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), _colour(HEADER_FILL)),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#e7e5e4")),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    for index, row in enumerate(report.rows, start=1):
        commands.append(("BACKGROUND", (0, index), (-1, index), _colour(row.fill)))
    table = Table(data, colWidths=_column_widths(report), repeatRows=1)
    table.setStyle(TableStyle(commands))
    return table


def render_pdf(report: Report) -> bytes:
    """Render the report to PDF bytes."""

    buffer = BytesIO()
    document = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZE,
        leftMargin=SIDE_MARGIN,
        rightMargin=SIDE_MARGIN,
        topMargin=TOP_MARGIN,
        bottomMargin=TOP_MARGIN,
        title=report.title,
        author="GastoZero",
    )
    story = [Paragraph(escape(report.title), TITLE_STYLE)]
    if report.subtitle:
        story.append(Paragraph(escape(report.subtitle), SUBTITLE_STYLE))
    story.append(Spacer(1, 4 * mm))
    story.append(_build_table(report))
    document.build(story)
    payload = buffer.getvalue()
    LOGGER.info("Rendered %s (%s rows, %s bytes)", report.filename, len(report.rows), len(payload))
    return payload


def write_pdf(report: Report, output_directory: Path) -> Path:
    """Render the report into ``output_directory`` using its filename."""

    output_directory = Path(output_directory)
    output_directory.mkdir(parents=True, exist_ok=True)
    destination = output_directory / report.filename
    destination.write_bytes(render_pdf(report))
    LOGGER.info("Exported report to %s", destination)
    return destination
