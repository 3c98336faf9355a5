"""Catalog store.

Owns the canonical record collection: creation, merge-update, availability
toggling and deletion, with the whole collection written through a
persistence port after each mutation. Queries go through snapshots.
"""

from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

import structlog

from agromarket.catalog.models import (
    ProductRecord,
    generate_product_id,
    normalize_product,
    utc_now,
)
from agromarket.catalog.persistence import CatalogPersistence
from agromarket.domain.exceptions import (
    CatalogFullError,
    ProductNotFoundError,
    ProductValidationError,
)

logger = structlog.get_logger()

# Fields owned by the store; input values for these are ignored.
_IMMUTABLE_FIELDS = ("id", "created_at", "updated_at", "createdAt", "updatedAt")


class CatalogStore:
    """Record store backed by a persistence port.

    Example usage:
        store = CatalogStore(JsonFilePersistence("agromarket.json"))
        record = store.create({"name": "Tomate", "category": "vegetable"})
        store.toggle_availability(record.id)
        view = CatalogQueryEngine().query(store.snapshot(), FilterCriteria())
    """

    def __init__(
        self,
        persistence: CatalogPersistence,
        max_items: int = 1000,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize store and load the persisted collection.

        Args:
            persistence: Load/save port.
            max_items: Maximum number of records.
            clock: Source of timestamps.
        """
        self.persistence = persistence
        self.max_items = max_items
        self._clock = clock
        self._records: list[ProductRecord] = self._load()

    def _load(self) -> list[ProductRecord]:
        """Load and normalize the persisted collection.

        Normalization fills in missing ids and creation times. When that
        changes anything, the normalized collection is written back once so
        later loads see the same values.
        """
        raw_records = self.persistence.load()
        records: list[ProductRecord] = []
        seen: set[str] = set()
        for raw in raw_records:
            record = normalize_product(raw)
            if record.id in seen:
                logger.warning("Duplicate product id dropped", product_id=record.id)
                continue
            seen.add(record.id)
            records.append(record)

        serialized = [r.to_dict() for r in records]
        if serialized != raw_records:
            self.persistence.save(serialized)
            logger.info("Catalog normalized on load", product_count=len(records))

        logger.info("Catalog loaded", product_count=len(records))
        return records

    def _commit(self, records: list[ProductRecord]) -> None:
        # Persist first: a failed save leaves the in-memory collection as it was.
        self.persistence.save([r.to_dict() for r in records])
        self._records = records

    def _index_of(self, product_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == product_id:
                return index
        raise ProductNotFoundError(product_id)

    def _replaced(self, index: int, record: ProductRecord) -> list[ProductRecord]:
        records = list(self._records)
        records[index] = record
        return records

    def __len__(self) -> int:
        return len(self._records)

    def snapshot(self) -> tuple[ProductRecord, ...]:
        """Return an immutable point-in-time copy of the collection."""
        return tuple(self._records)

    def get(self, product_id: str) -> ProductRecord | None:
        """Get a record by id.

        Args:
            product_id: Product id.

        Returns:
            Record if found, None otherwise.
        """
        for record in self._records:
            if record.id == product_id:
                return record
        return None

    def create(self, data: Mapping[str, Any]) -> ProductRecord:
        """Create a record from raw input.

        Args:
            data: Raw product fields.

        Returns:
            The stored record.

        Raises:
            ProductValidationError: If the name is blank.
            CatalogFullError: If the store is at capacity.
        """
        _require_name(data.get("name"))
        if len(self._records) >= self.max_items:
            raise CatalogFullError(self.max_items)

        fields = {k: v for k, v in data.items() if k not in _IMMUTABLE_FIELDS}
        record = normalize_product(
            {
                **fields,
                "id": generate_product_id(),
                "created_at": self._clock(),
                "updated_at": None,
            }
        )

        self._commit([*self._records, record])
        logger.info("Product created", product_id=record.id, name=record.name)
        return record

    def update(self, product_id: str, updates: Mapping[str, Any]) -> ProductRecord:
        """Merge updates into a record.

        Args:
            product_id: Product id.
            updates: Fields to change.

        Returns:
            The updated record.

        Raises:
            ProductNotFoundError: If no record has this id.
            ProductValidationError: If the update blanks the name.
        """
        index = self._index_of(product_id)
        if "name" in updates:
            _require_name(updates["name"])

        current = self._records[index]
        changes = {k: v for k, v in updates.items() if k not in _IMMUTABLE_FIELDS}
        record = normalize_product(
            {
                **current.to_dict(),
                **changes,
                "id": current.id,
                "created_at": current.created_at,
                "updated_at": self._clock(),
            }
        )

        self._commit(self._replaced(index, record))
        logger.info(
            "Product updated",
            product_id=product_id,
            fields=sorted(changes),
        )
        return record

    def toggle_availability(self, product_id: str) -> ProductRecord:
        """Flip the availability flag of a record.

        Args:
            product_id: Product id.

        Returns:
            The updated record.

        Raises:
            ProductNotFoundError: If no record has this id.
        """
        index = self._index_of(product_id)
        current = self._records[index]
        record = replace(current, active=not current.active, updated_at=self._clock())

        self._commit(self._replaced(index, record))
        logger.info("Product availability toggled", product_id=product_id, active=record.active)
        return record

    def delete(self, product_id: str) -> ProductRecord:
        """Remove a record.

        Args:
            product_id: Product id.

        Returns:
            The removed record.

        Raises:
            ProductNotFoundError: If no record has this id.
        """
        index = self._index_of(product_id)
        removed = self._records[index]
        self._commit(self._records[:index] + self._records[index + 1 :])
        logger.info("Product deleted", product_id=product_id)
        return removed

    def clear(self) -> int:
        """Remove every record with a single save.

        Returns:
            Number of records removed.
        """
        removed = len(self._records)
        self._commit([])
        logger.info("Catalog cleared", removed=removed)
        return removed

    def clear_unavailable(self) -> int:
        """Remove every inactive record.

        Returns:
            Number of records removed.
        """
        kept = [r for r in self._records if r.active]
        removed = len(self._records) - len(kept)
        self._commit(kept)
        logger.info("Unavailable products cleared", removed=removed)
        return removed


def _require_name(value: Any) -> None:
    if value is None or not str(value).strip():
        raise ProductValidationError("name", "Name is required")
