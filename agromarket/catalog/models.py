"""Product records for the agricultural catalog.

Defines the catalog vocabulary (categories, priorities) and the immutable
ProductRecord value, plus normalization of loosely-typed input into records.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


# ============================================================================
# Vocabulary
# ============================================================================


class Category(str, Enum):
    """Product categories offered on the platform."""

    FRUIT = "fruit"
    VEGETABLE = "vegetable"
    GRAIN = "grain"
    DAIRY = "dairy"
    TUBER = "tuber"


class Priority(str, Enum):
    """Perishability class of a product."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


CATEGORY_LABELS: dict[Category, str] = {
    Category.FRUIT: "Fruits",
    Category.VEGETABLE: "Vegetables",
    Category.GRAIN: "Grains",
    Category.DAIRY: "Dairy",
    Category.TUBER: "Tubers",
}

PRIORITY_LABELS: dict[Priority, str] = {
    Priority.HIGH: "Perishable",
    Priority.MEDIUM: "Standard",
    Priority.LOW: "Long-lasting",
}

DEFAULT_CATEGORY = Category.FRUIT
DEFAULT_PRIORITY = Priority.MEDIUM
DEFAULT_UNIT = "kg"
DEFAULT_NAME = "Unnamed product"


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def generate_product_id() -> str:
    """Generate an opaque product identifier."""
    return uuid4().hex


# ============================================================================
# Product Record
# ============================================================================


@dataclass(frozen=True)
class ProductRecord:
    """A catalog entry.

    Records are immutable; the store replaces a record with a new value on
    every mutation.

    Attributes:
        id: Opaque unique identifier.
        name: Product name (non-empty).
        description: Free text, may be empty.
        category: Product category.
        priority: Perishability class.
        price: Price per unit, never negative.
        stock: Available quantity, never negative.
        unit: Unit of measure label (e.g. "kg").
        active: Whether the product is available for sale.
        created_at: Creation timestamp, set once.
        updated_at: Last mutation timestamp, None until the first update.
    """

    id: str
    name: str
    description: str = ""
    category: Category = DEFAULT_CATEGORY
    priority: Priority = DEFAULT_PRIORITY
    price: float = 0.0
    stock: float = 0.0
    unit: str = DEFAULT_UNIT
    active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None

    @property
    def stock_value(self) -> float:
        """Value of the stock on hand (price times stock)."""
        return self.price * self.stock

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary form.

        Returns:
            Dictionary with JSON-compatible values.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "priority": self.priority.value,
            "price": self.price,
            "stock": self.stock,
            "unit": self.unit,
            "active": self.active,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductRecord":
        """Build a record from persisted or user-supplied data.

        Args:
            data: Raw field mapping.

        Returns:
            Normalized record.
        """
        return normalize_product(data)


# ============================================================================
# Normalization
# ============================================================================


def coerce_non_negative(value: Any) -> float:
    """Coerce a value to a non-negative float.

    Non-numeric, NaN and negative values become 0.
    """
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or number < 0:
        return 0.0
    return number


def coerce_category(value: Any) -> Category:
    """Map a raw value onto a Category, falling back to the default."""
    try:
        return Category(value)
    except ValueError:
        return DEFAULT_CATEGORY


def coerce_priority(value: Any) -> Priority:
    """Map a raw value onto a Priority, falling back to the default."""
    try:
        return Priority(value)
    except ValueError:
        return DEFAULT_PRIORITY


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _timestamp_field(data: Mapping[str, Any], name: str, alias: str) -> datetime | None:
    value = data.get(name)
    if value is None:
        value = data.get(alias)
    return parse_timestamp(value)


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()


def normalize_product(data: Mapping[str, Any]) -> ProductRecord:
    """Apply defaults and coercions to raw product data.

    Missing or malformed fields never raise: numbers fall back to 0,
    unknown categories and priorities fall back to fruit/medium. Timestamps
    are also read from the camelCase keys (`createdAt`, `updatedAt`) used by
    documents written by the browser client.

    Args:
        data: Raw field mapping.

    Returns:
        Normalized ProductRecord.
    """
    active = data.get("active", True)
    return ProductRecord(
        id=_text(data.get("id")) or generate_product_id(),
        name=_text(data.get("name")) or DEFAULT_NAME,
        description=_text(data.get("description")),
        category=coerce_category(data.get("category")),
        priority=coerce_priority(data.get("priority")),
        price=coerce_non_negative(data.get("price")),
        stock=coerce_non_negative(data.get("stock")),
        unit=_text(data.get("unit")) or DEFAULT_UNIT,
        active=active if isinstance(active, bool) else bool(active),
        created_at=_timestamp_field(data, "created_at", "createdAt") or utc_now(),
        updated_at=_timestamp_field(data, "updated_at", "updatedAt"),
    )
