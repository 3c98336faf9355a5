"""Catalog query engine.

Pure filtering and aggregation over a snapshot of product records. Nothing
here mutates its inputs or keeps state between calls.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from agromarket.catalog.models import Category, ProductRecord

ALL = "all"
STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"

_STATUSES = {ALL, STATUS_ACTIVE, STATUS_INACTIVE}


@dataclass(frozen=True)
class FilterCriteria:
    """Filter parameters for a catalog query.

    Attributes:
        status: "all", "active" or "inactive".
        category: "all" or a category value.
        priority: "all" or a priority value.
        search: Free-text query matched against name and description.
    """

    status: str = ALL
    category: str = ALL
    priority: str = ALL
    search: str = ""


@dataclass(frozen=True)
class CatalogStats:
    """Aggregate statistics over a record collection."""

    total: int = 0
    active: int = 0
    inactive: int = 0
    by_category: dict[str, int] = field(default_factory=dict)
    total_value: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "total": self.total,
            "active": self.active,
            "inactive": self.inactive,
            "by_category": dict(self.by_category),
            "total_value": self.total_value,
        }


@dataclass(frozen=True)
class CatalogView:
    """Filtered records together with stats over the unfiltered collection."""

    items: list[ProductRecord]
    stats: CatalogStats

    @property
    def total(self) -> int:
        """Number of records that survived filtering."""
        return len(self.items)


# ============================================================================
# Predicates
# ============================================================================


def filter_by_status(
    records: Iterable[ProductRecord], status: str = ALL
) -> list[ProductRecord]:
    """Keep records matching the availability status."""
    if status == ALL:
        return list(records)
    if status not in _STATUSES:
        return []
    wanted = status == STATUS_ACTIVE
    return [r for r in records if r.active == wanted]


def filter_by_category(
    records: Iterable[ProductRecord], category: str = ALL
) -> list[ProductRecord]:
    """Keep records in the given category."""
    if category == ALL:
        return list(records)
    return [r for r in records if r.category == category]


def filter_by_priority(
    records: Iterable[ProductRecord], priority: str = ALL
) -> list[ProductRecord]:
    """Keep records with the given priority."""
    if priority == ALL:
        return list(records)
    return [r for r in records if r.priority == priority]


def search_products(
    records: Iterable[ProductRecord], query: str | None = ""
) -> list[ProductRecord]:
    """Keep records whose name or description contains the query.

    Matching is a case-insensitive substring test; a blank query keeps
    everything.
    """
    term = (query or "").strip().lower()
    if not term:
        return list(records)
    return [
        r
        for r in records
        if term in r.name.lower() or term in (r.description or "").lower()
    ]


# ============================================================================
# Engine
# ============================================================================


class CatalogQueryEngine:
    """Stateless filter/aggregate pipeline over product records.

    Example usage:
        engine = CatalogQueryEngine()
        view = engine.query(
            store.snapshot(),
            FilterCriteria(status="active", search="mango"),
        )
    """

    def filter(
        self,
        records: Sequence[ProductRecord],
        criteria: FilterCriteria,
    ) -> list[ProductRecord]:
        """Apply all criteria, preserving input order.

        Args:
            records: Snapshot of the catalog.
            criteria: Filter parameters.

        Returns:
            Records matching every criterion.
        """
        result = filter_by_status(records, criteria.status)
        result = filter_by_category(result, criteria.category)
        result = filter_by_priority(result, criteria.priority)
        return search_products(result, criteria.search)

    def aggregate(self, records: Sequence[ProductRecord]) -> CatalogStats:
        """Compute counts and total stock value.

        Args:
            records: Full (unfiltered) collection.

        Returns:
            Catalog statistics.
        """
        total = len(records)
        active = 0
        by_category: dict[str, int] = {}
        total_value = 0.0

        for record in records:
            if record.active:
                active += 1
            key = _category_key(record.category)
            by_category[key] = by_category.get(key, 0) + 1
            total_value += record.price * record.stock

        return CatalogStats(
            total=total,
            active=active,
            inactive=total - active,
            by_category=by_category,
            total_value=total_value,
        )

    def query(
        self,
        records: Sequence[ProductRecord],
        criteria: FilterCriteria | None = None,
    ) -> CatalogView:
        """Filter a snapshot and aggregate the unfiltered snapshot.

        Args:
            records: Snapshot of the catalog.
            criteria: Filter parameters, defaults to no filtering.

        Returns:
            Catalog view.
        """
        criteria = criteria or FilterCriteria()
        return CatalogView(
            items=self.filter(records, criteria),
            stats=self.aggregate(records),
        )


def _category_key(category: Category | str) -> str:
    return category.value if isinstance(category, Category) else str(category)
