"""Product catalog.

Provides product records, the query engine (filtering and statistics),
the record store and its persistence adapters.
"""

from agromarket.catalog.models import (
    CATEGORY_LABELS,
    PRIORITY_LABELS,
    Category,
    Priority,
    ProductRecord,
    normalize_product,
)
from agromarket.catalog.persistence import (
    CatalogPersistence,
    InMemoryPersistence,
    JsonFilePersistence,
)
from agromarket.catalog.query import (
    CatalogQueryEngine,
    CatalogStats,
    CatalogView,
    FilterCriteria,
)
from agromarket.catalog.store import CatalogStore

__all__ = [
    # Models
    "CATEGORY_LABELS",
    "PRIORITY_LABELS",
    "Category",
    "Priority",
    "ProductRecord",
    "normalize_product",
    # Query
    "CatalogQueryEngine",
    "CatalogStats",
    "CatalogView",
    "FilterCriteria",
    # Store
    "CatalogStore",
    "CatalogPersistence",
    "InMemoryPersistence",
    "JsonFilePersistence",
]
