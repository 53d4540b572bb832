"""Mini README: FastAPI web interface for GastoZero.

Structure:
    * create_application - application factory wiring the store, routes and templates.
    * Dashboard - month navigation, summary and the active tab's entry table.
    * Entry form - create and edit entries, re-rendered with errors on rejection.
    * JSON API - month summary and month entries for scripting.
    * Exports - single collection and balance PDFs for the selected month.

The store is injected so tests can run against ``InMemoryStorage``. Every
request recomputes the month view from the store; nothing is cached between
requests.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Dict, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import GastoZeroSettings, get_settings
from ..errors import EntryNotFoundError, EntryValidationError, StorageError
from ..ledger import EntryKind, EntryStore, JsonFileStorage, MonthKey
from ..ledger.entries import Entry, optional_month
from ..logging_utils import get_logger
from ..reports import (
    build_balance_report,
    build_entry_report,
    filter_by_month,
    format_amount,
    format_day,
    render_pdf,
    summarise,
)

LOGGER = get_logger(__name__)

OTHER_CONCEPT = "Otro"
EMPTY_MESSAGES = {
    EntryKind.INCOME: "No hay ingresos este mes",
    EntryKind.EXPENSE: "No hay gastos este mes",
}


def _parse_month(value: Optional[str]) -> MonthKey:
    try:
        return optional_month(value)
    except EntryValidationError as error:
        raise HTTPException(status_code=400, detail=str(error)) from error


def _dashboard_url(kind: EntryKind, month: MonthKey) -> str:
    return f"/?tab={kind.value}&month={month}"


def _neighbour(month: MonthKey, delta: int) -> Optional[MonthKey]:
    """Adjacent month for navigation, or ``None`` past year 1 or 9999."""

    try:
        return month.shift(delta)
    except EntryValidationError:
        return None


def _entry_row(entry: Entry) -> Dict[str, str]:
    return {
        "id": entry.entry_id,
        "concept": entry.concept,
        "day": format_day(entry.occurred_on),
        "amount": format_amount(entry.amount),
    }


def _default_day(month: MonthKey) -> date:
    today = date.today()
    return today if month.contains(today) else month.first_day


def _pdf_response(payload: bytes, filename: str) -> Response:
    return Response(
        content=payload,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def create_application(
    store: Optional[EntryStore] = None, settings: Optional[GastoZeroSettings] = None
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    if store is None:
        settings = settings or get_settings()
        store = EntryStore(JsonFileStorage(settings.data_directory))

    app = FastAPI(title="GastoZero", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")
    app.state.store = store

    @app.exception_handler(StorageError)
    async def storage_failure(request: Request, error: StorageError) -> JSONResponse:
        LOGGER.error("Storage failure on %s %s: %s", request.method, request.url.path, error)
        return JSONResponse({"detail": str(error)}, status_code=503)

    def render_form(
        request: Request,
        kind: EntryKind,
        month: MonthKey,
        *,
        entry_id: Optional[str] = None,
        values: Optional[Dict[str, str]] = None,
        error: Optional[str] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        values = dict(values or {})
        concept = values.get("concept", "")
        if concept and concept not in kind.concepts and concept != OTHER_CONCEPT:
            values["concept_other"] = concept
            values["concept"] = OTHER_CONCEPT
        values.setdefault("occurred_on", _default_day(month).isoformat())
        editing = entry_id is not None
        verb = "Editar" if editing else "Añadir"
        return templates.TemplateResponse(
            request,
            "entry_form.html",
            {
                "kind": kind,
                "month": month,
                "title": f"{verb} {kind.singular_label}",
                "submit_label": "Guardar cambios" if editing else "Guardar entrada",
                "action": f"/entries/{kind.value}/{entry_id}" if editing else f"/entries/{kind.value}",
                "concepts": kind.concepts,
                "other_concept": OTHER_CONCEPT,
                "values": values,
                "min_date": month.first_day.isoformat(),
                "max_date": month.last_day.isoformat(),
                "error": error,
                "cancel_url": _dashboard_url(kind, month),
            },
            status_code=status_code,
        )

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(
        request: Request, month: Optional[str] = None, tab: Optional[str] = None
    ) -> HTMLResponse:
        """Render the month summary and the active tab's entries."""

        selected_month = _parse_month(month)
        try:
            active = EntryKind.from_str(tab) if tab else EntryKind.INCOME
        except EntryValidationError:
            active = EntryKind.INCOME
        summary = summarise(store.incomes, store.expenses, selected_month)
        rows = [_entry_row(entry) for entry in filter_by_month(store.entries(active), selected_month)]
        LOGGER.debug("Rendering dashboard month=%s tab=%s rows=%s", selected_month, active.value, len(rows))
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "month": selected_month,
                "previous_month": _neighbour(selected_month, -1),
                "next_month": _neighbour(selected_month, 1),
                "active": active,
                "kinds": list(EntryKind),
                "summary": summary.as_dict()["formatted"],
                "rows": rows,
                "empty_message": EMPTY_MESSAGES[active],
            },
        )

    @app.get("/entries/{kind}/new", response_class=HTMLResponse)
    async def new_entry(request: Request, kind: EntryKind, month: Optional[str] = None) -> HTMLResponse:
        return render_form(request, kind, _parse_month(month))

    @app.get("/entries/{kind}/{entry_id}/edit", response_class=HTMLResponse)
    async def edit_entry(
        request: Request, kind: EntryKind, entry_id: str, month: Optional[str] = None
    ) -> Response:
        selected_month = _parse_month(month)
        try:
            entry = store.get(kind, entry_id)
        except EntryNotFoundError:
            LOGGER.info("Edit requested for unknown %s %s; redirecting", kind.value, entry_id)
            return RedirectResponse("/", status_code=303)
        values = {
            "concept": entry.concept,
            "amount": str(entry.amount),
            "occurred_on": entry.occurred_on.isoformat(),
        }
        return render_form(request, kind, selected_month, entry_id=entry_id, values=values)

    @app.post("/entries/{kind}")
    async def create_entry(
        request: Request,
        kind: EntryKind,
        concept: str = Form(""),
        concept_other: str = Form(""),
        amount: str = Form(""),
        occurred_on: str = Form(""),
        month: Optional[str] = Form(None),
    ) -> Response:
        """Validate and store a new entry, staying on the form when rejected."""

        selected_month = _parse_month(month)
        resolved = concept_other if concept == OTHER_CONCEPT else concept
        try:
            entry = store.add(kind, resolved, amount, occurred_on)
        except EntryValidationError as error:
            LOGGER.info("Rejected new %s: %s", kind.value, error)
            values = {"concept": concept, "concept_other": concept_other, "amount": amount, "occurred_on": occurred_on}
            return render_form(request, kind, selected_month, values=values, error=str(error), status_code=400)
        return RedirectResponse(_dashboard_url(kind, MonthKey.from_date(entry.occurred_on)), status_code=303)

    @app.post("/entries/{kind}/{entry_id}")
    async def update_entry(
        request: Request,
        kind: EntryKind,
        entry_id: str,
        concept: str = Form(""),
        concept_other: str = Form(""),
        amount: str = Form(""),
        occurred_on: str = Form(""),
        month: Optional[str] = Form(None),
    ) -> Response:
        """Overwrite an entry's fields; unknown ids redirect to the dashboard."""

        selected_month = _parse_month(month)
        resolved = concept_other if concept == OTHER_CONCEPT else concept
        try:
            entry = store.update(kind, entry_id, concept=resolved, amount=amount, occurred_on=occurred_on)
        except EntryNotFoundError:
            LOGGER.info("Update requested for unknown %s %s; redirecting", kind.value, entry_id)
            return RedirectResponse("/", status_code=303)
        except EntryValidationError as error:
            LOGGER.info("Rejected update of %s %s: %s", kind.value, entry_id, error)
            values = {"concept": concept, "concept_other": concept_other, "amount": amount, "occurred_on": occurred_on}
            return render_form(
                request, kind, selected_month, entry_id=entry_id, values=values, error=str(error), status_code=400
            )
        return RedirectResponse(_dashboard_url(kind, MonthKey.from_date(entry.occurred_on)), status_code=303)

    @app.post("/entries/{kind}/{entry_id}/delete")
    async def delete_entry(kind: EntryKind, entry_id: str, month: Optional[str] = Form(None)) -> Response:
        """Remove a confirmed deletion; unknown ids are a no-op."""

        selected_month = _parse_month(month)
        try:
            store.remove(kind, entry_id)
        except EntryNotFoundError:
            LOGGER.info("Delete requested for unknown %s %s; ignoring", kind.value, entry_id)
        return RedirectResponse(_dashboard_url(kind, selected_month), status_code=303)

    @app.get("/api/summary")
    async def month_summary(month: Optional[str] = None) -> JSONResponse:
        summary = summarise(store.incomes, store.expenses, _parse_month(month))
        return JSONResponse(summary.as_dict())

    @app.get("/api/entries/{kind}")
    async def month_entries(kind: EntryKind, month: Optional[str] = None) -> JSONResponse:
        selected_month = _parse_month(month)
        entries = [entry.as_dict() for entry in filter_by_month(store.entries(kind), selected_month)]
        return JSONResponse({"kind": kind.value, "month": str(selected_month), "entries": entries})

    @app.get("/export/balance")
    async def export_balance(month: Optional[str] = None) -> Response:
        """Download the merged income/expense report for the month."""

        report = build_balance_report(store.incomes, store.expenses, _parse_month(month))
        return _pdf_response(render_pdf(report), report.filename)

    @app.get("/export/entries/{kind}")
    async def export_entries(kind: EntryKind, month: Optional[str] = None) -> Response:
        """Download the active tab's entries for the month."""

        report = build_entry_report(store.entries(kind), _parse_month(month), kind.label)
        return _pdf_response(render_pdf(report), report.filename)

    return app
