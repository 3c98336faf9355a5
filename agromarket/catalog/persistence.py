"""Persistence ports for the catalog store.

The store only knows the `CatalogPersistence` protocol; adapters decide
where the serialized collection lives.
"""

import json
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger()

DEFAULT_STORAGE_KEY = "agroMarketItems"


class CatalogPersistence(Protocol):
    """Load/save port for the serialized record collection."""

    def load(self) -> list[dict[str, Any]]:
        """Return the persisted records, or an empty list."""
        ...

    def save(self, records: list[dict[str, Any]]) -> None:
        """Replace the persisted records."""
        ...


class InMemoryPersistence:
    """Keeps the serialized collection in process memory."""

    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self._records: list[dict[str, Any]] = [dict(r) for r in records or []]
        self.save_count = 0

    def load(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._records]

    def save(self, records: list[dict[str, Any]]) -> None:
        self._records = [dict(r) for r in records]
        self.save_count += 1


class JsonFilePersistence:
    """Key/value JSON document on disk.

    The file holds a JSON object; the catalog lives under a single key,
    so several stores can share one document. A missing, unreadable or
    malformed document loads as an empty collection.

    Example usage:
        persistence = JsonFilePersistence("data/agromarket.json")
        store = CatalogStore(persistence)
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        """Initialize file persistence.

        Args:
            path: Location of the JSON document.
            key: Key the records are stored under.
        """
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Storage unreadable", path=str(self.path), error=str(e))
            return {}

        try:
            document = json.loads(raw or "{}")
        except json.JSONDecodeError as e:
            logger.warning("Storage is not valid JSON", path=str(self.path), error=str(e))
            return {}

        if not isinstance(document, dict):
            logger.warning("Storage root is not an object", path=str(self.path))
            return {}
        return document

    def load(self) -> list[dict[str, Any]]:
        """Load records stored under the configured key.

        Returns:
            Raw record dictionaries; entries that are not objects are dropped.
        """
        entries = self._read_document().get(self.key, [])
        if not isinstance(entries, list):
            logger.warning("Stored catalog is not a list", key=self.key)
            return []
        return [entry for entry in entries if isinstance(entry, dict)]

    def save(self, records: list[dict[str, Any]]) -> None:
        """Write records under the configured key, keeping other keys.

        Args:
            records: Serialized records.
        """
        document = self._read_document()
        document[self.key] = records
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(document, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
