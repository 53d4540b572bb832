"""Mini README: Entry store owning the income and expense collections.

Structure:
    * EntryStore - loads, validates, mutates and persists both collections.

The store is created once by the application root and handed to the web
interface and CLI, so tests can substitute one backed by
``InMemoryStorage``. Every mutation is prepared on a copy of the affected
collection, persisted, and only then committed to memory: when the write
fails the in-memory state still matches what is on disk and the
``StorageError`` reaches the caller.
"""

from __future__ import annotations

import json
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from ..errors import EntryNotFoundError, EntryValidationError
from ..logging_utils import get_logger
from .entries import Entry, EntryKind, parse_amount, parse_concept, parse_date, validate_fields
from .storage import KeyValueStorage

LOGGER = get_logger(__name__)


class EntryStore:
    """Manage the two entry collections on top of a key-value storage."""

    def __init__(self, storage: KeyValueStorage, *, autoload: bool = True) -> None:
        self.storage = storage
        self._collections: Dict[EntryKind, List[Entry]] = {kind: [] for kind in EntryKind}
        if autoload:
            self.load()

    @property
    def incomes(self) -> List[Entry]:
        return self.entries(EntryKind.INCOME)

    @property
    def expenses(self) -> List[Entry]:
        return self.entries(EntryKind.EXPENSE)

    def load(self) -> Tuple[List[Entry], List[Entry]]:
        """Read both collections, substituting empty ones for absent or bad data."""

        for kind in EntryKind:
            self._collections[kind] = self._read_collection(kind)
        LOGGER.info(
            "Loaded %s incomes and %s expenses",
            len(self._collections[EntryKind.INCOME]),
            len(self._collections[EntryKind.EXPENSE]),
        )
        return self.incomes, self.expenses

    def _read_collection(self, kind: EntryKind) -> List[Entry]:
        raw = self.storage.get(kind.storage_key)
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError) as error:
            LOGGER.warning("Stored %s are not valid JSON (%s); starting empty", kind.storage_key, error)
            return []
        if not isinstance(payload, list):
            LOGGER.warning("Stored %s are not a JSON array; starting empty", kind.storage_key)
            return []

        entries: List[Entry] = []
        seen_ids = set()
        for record in payload:
            try:
                entry = Entry.from_dict(record)
            except EntryValidationError as error:
                LOGGER.warning("Skipping invalid stored %s record: %s", kind.value, error)
                continue
            if entry.entry_id in seen_ids:
                LOGGER.warning("Skipping duplicate %s id %s", kind.value, entry.entry_id)
                continue
            seen_ids.add(entry.entry_id)
            entries.append(entry)
        return entries

    def save(self) -> None:
        """Write both collections to storage."""

        for kind in EntryKind:
            self._write(kind, self._collections[kind])

    def _write(self, kind: EntryKind, entries: List[Entry]) -> None:
        document = json.dumps([entry.as_dict() for entry in entries], ensure_ascii=False)
        self.storage.set(kind.storage_key, document)

    def _commit(self, kind: EntryKind, entries: List[Entry]) -> None:
        self._write(kind, entries)
        self._collections[kind] = entries

    def entries(self, kind: EntryKind) -> List[Entry]:
        """Return a copy of a collection in insertion order."""

        return list(self._collections[kind])

    def get(self, kind: EntryKind, entry_id: str) -> Entry:
        """Retrieve an entry, raising ``EntryNotFoundError`` when missing."""

        for entry in self._collections[kind]:
            if entry.entry_id == entry_id:
                return entry
        raise EntryNotFoundError(f"{kind.value.capitalize()} {entry_id} not found")

    def _mint_id(self, kind: EntryKind) -> str:
        existing = {entry.entry_id for entry in self._collections[kind]}
        entry_id = uuid4().hex
        while entry_id in existing:
            entry_id = uuid4().hex
        return entry_id

    def add(self, kind: EntryKind, concept: object, amount: object, occurred_on: object) -> Entry:
        """Validate and append a new entry with a freshly minted id."""

        concept, amount, occurred_on = validate_fields(concept, amount, occurred_on)
        entry = Entry(
            entry_id=self._mint_id(kind),
            concept=concept,
            amount=amount,
            occurred_on=occurred_on,
        )
        self._commit(kind, self._collections[kind] + [entry])
        LOGGER.info("Added %s %s (%s on %s)", kind.value, entry.entry_id, entry.concept, entry.occurred_on)
        return entry

    def update(
        self,
        kind: EntryKind,
        entry_id: str,
        *,
        concept: Optional[object] = None,
        amount: Optional[object] = None,
        occurred_on: Optional[object] = None,
    ) -> Entry:
        """Overwrite selected fields of an entry, keeping its id and position."""

        current = self.get(kind, entry_id)
        updated = Entry(
            entry_id=current.entry_id,
            concept=current.concept if concept is None else parse_concept(concept),
            amount=current.amount if amount is None else parse_amount(amount),
            occurred_on=current.occurred_on if occurred_on is None else parse_date(occurred_on),
        )
        entries = [updated if entry.entry_id == entry_id else entry for entry in self._collections[kind]]
        self._commit(kind, entries)
        LOGGER.info("Updated %s %s", kind.value, entry_id)
        return updated

    def remove(self, kind: EntryKind, entry_id: str) -> Entry:
        """Delete an entry, returning the removed record."""

        removed = self.get(kind, entry_id)
        self._commit(kind, [entry for entry in self._collections[kind] if entry.entry_id != entry_id])
        LOGGER.info("Removed %s %s", kind.value, entry_id)
        return removed
