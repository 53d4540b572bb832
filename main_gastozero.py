"""Mini README: Command line entry point for GastoZero.

This script exposes a Typer CLI that starts the web interface, prints a
month summary, or exports a month report as PDF. Settings come from
``GASTOZERO_*`` environment variables (or ``.env``) unless overridden by
options.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from gastozero.configuration import get_settings
from gastozero.errors import EntryValidationError, StorageError
from gastozero.ledger import EntryKind, EntryStore, JsonFileStorage, MonthKey
from gastozero.ledger.entries import optional_month
from gastozero.logging_utils import configure_root_logger
from gastozero.reports import build_balance_report, build_entry_report, summarise, write_pdf
from gastozero.reports.formatting import format_amount

cli = typer.Typer(help="Track monthly incomes and expenses and export PDF reports.")

BALANCE_REPORT = "balance"


def _open_store(data_directory: Optional[Path]) -> EntryStore:
    directory = data_directory or get_settings().data_directory
    try:
        return EntryStore(JsonFileStorage(directory))
    except StorageError as error:
        typer.echo(f"Unable to load entries: {error}", err=True)
        raise typer.Exit(code=1) from error


def _resolve_month(month: Optional[str]) -> MonthKey:
    try:
        return optional_month(month)
    except EntryValidationError as error:
        raise typer.BadParameter(str(error), param_hint="--month") from error


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: Optional[bool] = typer.Option(
        None,
        "--production/--development",
        help="Disable or enable auto-reload (defaults to the configured environment).",
    ),
) -> None:
    """Start the web interface using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)
    if production is None:
        production = settings.is_production

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting GastoZero on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "gastozero.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary(
    month: Optional[str] = typer.Option(None, help="Month as YYYY-MM (defaults to the current month)."),
    data_directory: Optional[Path] = typer.Option(None, help="Override the configured data directory."),
) -> None:
    """Print income, expense and balance totals for a month."""

    configure_root_logger(get_settings().log_level)
    selected_month = _resolve_month(month)
    store = _open_store(data_directory)
    result = summarise(store.incomes, store.expenses, selected_month)
    typer.echo(selected_month.label)
    typer.echo(f"  Ingresos: {format_amount(result.total_income)}")
    typer.echo(f"  Gastos:   {format_amount(result.total_expense)}")
    typer.echo(f"  Balance:  {format_amount(result.balance)}")


@cli.command()
def export(
    kind: str = typer.Argument(..., help="income, expense or balance."),
    month: Optional[str] = typer.Option(None, help="Month as YYYY-MM (defaults to the current month)."),
    output_directory: Path = typer.Option(Path("."), help="Directory the PDF is written to."),
    data_directory: Optional[Path] = typer.Option(None, help="Override the configured data directory."),
) -> None:
    """Export a month report as PDF."""

    configure_root_logger(get_settings().log_level)
    selected_month = _resolve_month(month)
    store = _open_store(data_directory)
    if kind.strip().lower() == BALANCE_REPORT:
        report = build_balance_report(store.incomes, store.expenses, selected_month)
    else:
        try:
            entry_kind = EntryKind.from_str(kind)
        except EntryValidationError as error:
            raise typer.BadParameter(str(error), param_hint="KIND") from error
        report = build_entry_report(store.entries(entry_kind), selected_month, entry_kind.label)
    destination = write_pdf(report, output_directory)
    typer.echo(str(destination))


if __name__ == "__main__":
    cli()
