"""Mini README: Key-value storage backends for the entry collections.

Structure:
    * KeyValueStorage - protocol with ``get``/``set`` of string documents.
    * JsonFileStorage - one ``<key>.json`` file per key inside a directory.
    * InMemoryStorage - dictionary backed storage for tests and demos.

Each key is written independently so a damaged incomes document never
touches the expenses document. File writes go through a temporary file and
``os.replace`` so a crash mid-write leaves the previous document intact.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..errors import StorageError
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class KeyValueStorage(Protocol):
    """Minimal persistent storage contract consumed by the entry store."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored document or ``None`` when the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key``, raising ``StorageError`` on failure."""


class InMemoryStorage:
    """Volatile storage used by tests and throwaway sessions."""

    def __init__(self, documents: Optional[Dict[str, str]] = None) -> None:
        self.documents: Dict[str, str] = dict(documents or {})

    def get(self, key: str) -> Optional[str]:
        return self.documents.get(key)

    def set(self, key: str, value: str) -> None:
        self.documents[key] = value


class JsonFileStorage:
    """Persist each key as a JSON document inside ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        LOGGER.debug("JSON storage directory set to %s", self.directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as error:
            raise StorageError(f"Unable to read {path}: {error}") from error
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            LOGGER.warning("%s is not valid UTF-8; undecodable bytes replaced", path)
            return raw.decode("utf-8", errors="replace")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            handle, temp_name = tempfile.mkstemp(
                dir=str(self.directory), prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(handle, "w", encoding="utf-8") as temp_file:
                    temp_file.write(value)
                os.replace(temp_name, path)
            except BaseException:
                if os.path.exists(temp_name):
                    os.unlink(temp_name)
                raise
        except OSError as error:
            raise StorageError(f"Unable to write {path}: {error}") from error
        LOGGER.debug("Wrote %s bytes to %s", len(value), path)
