"""Mini README: Exception hierarchy shared across GastoZero.

Structure:
    * GastoZeroError - base class for every expected failure.
    * EntryValidationError - rejected entry fields or month keys.
    * EntryNotFoundError - edit/delete referencing an unknown id.
    * StorageError - persistence could not be read or written.

Validation errors subclass ``ValueError`` and not-found errors subclass
``KeyError`` so callers written against the builtin types keep working.
"""

from __future__ import annotations


class GastoZeroError(Exception):
    """Base class for GastoZero errors."""


class EntryValidationError(GastoZeroError, ValueError):
    """Raised when entry fields break the ledger invariants."""


class EntryNotFoundError(GastoZeroError, KeyError):
    """Raised when an entry id is absent from its collection."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class StorageError(GastoZeroError):
    """Raised when the persistent storage cannot be read or written."""
