"""Pydantic schemas for the AgroMarket API.

Request and response models for catalog products, statistics and the
marketplace.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from agromarket.catalog.models import Category, Priority, ProductRecord
from agromarket.catalog.query import CatalogStats
from agromarket.domain.items import ItemKind
from agromarket.domain.marketplace import MarketplaceStats


# ============================================================================
# Common
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable message")
    details: list | dict = Field(default_factory=list, description="Error context")


# ============================================================================
# Catalog
# ============================================================================


class ProductCreateRequest(BaseModel):
    """Fields for a new product.

    Numeric fields accept any value; negative or non-numeric input is
    stored as 0, and unknown categories/priorities fall back to defaults.
    """

    name: str = Field(..., description="Product name")
    description: str = Field(default="", description="Product description")
    category: str | None = Field(None, description="Category value")
    priority: str | None = Field(None, description="Perishability class")
    price: float | str | None = Field(None, description="Price per unit")
    stock: float | str | None = Field(None, description="Quantity in stock")
    unit: str | None = Field(None, description="Unit of measure")
    active: bool = Field(default=True, description="Availability flag")


class ProductUpdateRequest(BaseModel):
    """Partial product update; omitted fields keep their value."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    priority: str | None = None
    price: float | str | None = None
    stock: float | str | None = None
    unit: str | None = None
    active: bool | None = None


class ProductSchema(BaseModel):
    """Product details."""

    id: str
    name: str
    description: str
    category: Category
    priority: Priority
    price: float
    stock: float
    unit: str
    active: bool
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: ProductRecord) -> "ProductSchema":
        return cls(
            id=record.id,
            name=record.name,
            description=record.description,
            category=record.category,
            priority=record.priority,
            price=record.price,
            stock=record.stock,
            unit=record.unit,
            active=record.active,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class CatalogStatsSchema(BaseModel):
    """Catalog statistics."""

    total: int
    active: int
    inactive: int
    by_category: dict[str, int]
    total_value: float

    @classmethod
    def from_stats(cls, stats: CatalogStats) -> "CatalogStatsSchema":
        return cls(**stats.to_dict())


class ProductListResponse(BaseModel):
    """Filtered products with statistics over the whole catalog."""

    items: list[ProductSchema]
    total: int = Field(..., description="Number of products matching the filters")
    stats: CatalogStatsSchema


class ClearUnavailableResponse(BaseModel):
    """Result of removing unavailable products."""

    removed: int


class CategorySchema(BaseModel):
    """Category with its label and current product count."""

    value: Category
    label: str
    product_count: int


# ============================================================================
# Marketplace
# ============================================================================


class ItemCreateRequest(BaseModel):
    """Fields for a new marketplace item.

    Only the fields of the selected kind are used.
    """

    name: str = Field(..., min_length=1)
    location: str
    kind: ItemKind
    sweet_level: str = "Medium"
    season: str = "All year"
    organic: bool = False
    weight: str = "1kg"
    quantity: str = "100kg"
    quality: str = "Normal"
    publisher_id: str | None = Field(None, description="Farmer publishing the item")


class ItemSchema(BaseModel):
    """Marketplace item with its kind-specific fields."""

    id: str
    name: str
    kind: ItemKind
    location: str
    active: bool
    created_at: datetime
    sweet_level: str | None = None
    season: str | None = None
    organic: bool | None = None
    weight: str | None = None
    quantity: str | None = None
    quality: str | None = None


class UserCreateRequest(BaseModel):
    """Fields for a new farmer or buyer."""

    name: str = Field(..., min_length=1)
    email: str
    role: Literal["farmer", "buyer"]
    farm_name: str | None = None
    address: str | None = None


class UserSchema(BaseModel):
    """Registered user with role-specific fields."""

    id: str
    name: str
    email: str
    role: Literal["farmer", "buyer"]
    registered_at: datetime
    farm_name: str | None = None
    published_items: list[str] | None = None
    address: str | None = None
    orders: list[str] | None = None


class MarketplaceStatsSchema(BaseModel):
    """Marketplace statistics."""

    total_products: int
    active_products: int
    inactive_products: int
    products_by_kind: dict[str, int]
    total_users: int

    @classmethod
    def from_stats(cls, stats: MarketplaceStats) -> "MarketplaceStatsSchema":
        return cls(**stats.to_dict())
