"""Mini README: Entry model, entry kinds and month keys.

Structure:
    * EntryKind - enum separating the income and expense collections.
    * Entry - dataclass holding one dated, categorised amount.
    * MonthKey - ``(year, month)`` value scoping every summary and report.
    * validate_fields - shared coercion/validation of user supplied fields.
    * INCOME_CONCEPTS / EXPENSE_CONCEPTS - concept suggestions for the form.

Amounts are kept as ``Decimal`` so totals accumulate exactly; only display
rounds to cents. Every constructor path funnels through ``validate_fields``
so an invalid entry never reaches the store.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Optional, Tuple

from ..errors import EntryValidationError

MONTH_NAMES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)

INCOME_CONCEPTS = ("Ayuntamiento", "Subsidio", "Aportación")
EXPENSE_CONCEPTS = (
    "Hipoteca",
    "Defunción",
    "Adeslas",
    "Luz",
    "Movistar+",
    "Orange",
    "Uñas",
    "Google",
    "Gas",
    "Moto",
    "Agua",
    "Horno",
    "Gasolina",
    "Tabaco",
    "Pilates",
    "Mercadona",
    "Ropa",
    "Nespresso",
)

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
MAX_AMOUNT = Decimal("999999999999.99")


class EntryKind(str, Enum):
    """The two independent entry collections."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "EntryKind":
        """Coerce arbitrary casing into a valid entry kind."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise EntryValidationError(f"Unsupported entry kind: {value}") from error

    @property
    def storage_key(self) -> str:
        return "incomes" if self is EntryKind.INCOME else "expenses"

    @property
    def label(self) -> str:
        """Plural heading used in report titles and tabs."""

        return "Ingresos" if self is EntryKind.INCOME else "Gastos"

    @property
    def singular_label(self) -> str:
        return "ingreso" if self is EntryKind.INCOME else "gasto"

    @property
    def concepts(self) -> Tuple[str, ...]:
        return INCOME_CONCEPTS if self is EntryKind.INCOME else EXPENSE_CONCEPTS


@dataclass(frozen=True, order=True)
class MonthKey:
    """A calendar month used to scope reads; never filters the store itself."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise EntryValidationError(f"Month must be within 1..12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise EntryValidationError(f"Year must be within 1..9999, got {self.year}")

    @classmethod
    def parse(cls, value: str) -> "MonthKey":
        """Parse the canonical ``YYYY-MM`` form."""

        match = _MONTH_PATTERN.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise EntryValidationError(f"Month keys must look like YYYY-MM, got {value!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def from_date(cls, value: date) -> "MonthKey":
        return cls(value.year, value.month)

    @classmethod
    def current(cls) -> "MonthKey":
        return cls.from_date(date.today())

    def shift(self, delta: int) -> "MonthKey":
        """Return the month ``delta`` months away, rolling over years."""

        index = self.year * 12 + (self.month - 1) + delta
        return MonthKey(index // 12, index % 12 + 1)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def label(self) -> str:
        """Long Spanish label, e.g. ``Marzo de 2024``."""

        return f"{self.month_name} de {self.year}"

    def contains(self, value: date) -> bool:
        return value.year == self.year and value.month == self.month

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, slots=True)
class Entry:
    """A single income or expense record."""

    entry_id: str
    concept: str
    amount: Decimal
    occurred_on: date

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "Entry":
        """Build an entry from its persisted JSON form, validating every field."""

        if not isinstance(payload, dict):
            raise EntryValidationError("Persisted entries must be JSON objects.")
        entry_id = payload.get("id")
        if entry_id is None or str(entry_id).strip() == "":
            raise EntryValidationError("Persisted entries require an id.")
        concept, amount, occurred_on = validate_fields(
            payload.get("concept"), payload.get("amount"), payload.get("date")
        )
        return cls(entry_id=str(entry_id), concept=concept, amount=amount, occurred_on=occurred_on)

    def as_dict(self) -> Dict[str, object]:
        """Export the entry in the persisted layout (amount as a JSON number)."""

        if self.amount == self.amount.to_integral_value():
            amount: object = int(self.amount)
        else:
            amount = float(self.amount)
        return {
            "id": self.entry_id,
            "concept": self.concept,
            "amount": amount,
            "date": self.occurred_on.isoformat(),
        }


def parse_concept(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise EntryValidationError("Concept must be a non-empty string.")
    return value.strip()


def parse_amount(value: object) -> Decimal:
    """Coerce numbers or numeric text into a strictly positive ``Decimal``."""

    if isinstance(value, bool) or value is None:
        raise EntryValidationError("Amount must be a number.")
    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float)):
            amount = Decimal(str(value))
        elif isinstance(value, str):
            amount = Decimal(value.strip().replace(",", "."))
        else:
            raise EntryValidationError("Amount must be a number.")
    except InvalidOperation as error:
        raise EntryValidationError(f"Amount is not numeric: {value!r}") from error
    if not amount.is_finite() or amount <= 0:
        raise EntryValidationError(f"Amount must be strictly positive, got {value!r}")
    if amount > MAX_AMOUNT:
        raise EntryValidationError(f"Amount must not exceed {MAX_AMOUNT}, got {value!r}")
    return amount


def parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects into a calendar day."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise EntryValidationError(f"Invalid date: {value!r}") from error
    raise EntryValidationError("Dates must be provided as ISO strings or date instances.")


def validate_fields(
    concept: object, amount: object, occurred_on: object
) -> Tuple[str, Decimal, date]:
    """Validate the editable entry fields, returning their coerced values."""

    return parse_concept(concept), parse_amount(amount), parse_date(occurred_on)


def optional_month(value: Optional[str]) -> MonthKey:
    """Parse a month query value, defaulting to the current month."""

    if value is None or value == "":
        return MonthKey.current()
    return MonthKey.parse(value)
