"""Mini README: Ledger package holding entries and their persistence.

Exposes the entry model, month keys, storage backends and the entry store.
"""

from .entries import EXPENSE_CONCEPTS, INCOME_CONCEPTS, Entry, EntryKind, MonthKey
from .storage import InMemoryStorage, JsonFileStorage, KeyValueStorage
from .store import EntryStore

__all__ = [
    "EXPENSE_CONCEPTS",
    "INCOME_CONCEPTS",
    "Entry",
    "EntryKind",
    "EntryStore",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "MonthKey",
]
