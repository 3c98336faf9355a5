"""Marketplace domain layer.

Items, users and the marketplace system, plus the domain exceptions shared
with the catalog.
"""

from agromarket.domain.exceptions import (
    CatalogFullError,
    DomainError,
    DuplicateEmailError,
    InvalidEmailError,
    InvalidItemNameError,
    InvalidLocationError,
    ItemNotFoundError,
    ProductNotFoundError,
    ProductValidationError,
    RoleMismatchError,
    UserNotFoundError,
)
from agromarket.domain.items import (
    FruitDetails,
    GrainDetails,
    ItemDetails,
    ItemKind,
    MarketItem,
    VegetableDetails,
)
from agromarket.domain.marketplace import (
    MarketplaceStats,
    MarketplaceSystem,
    seed_demo_marketplace,
)
from agromarket.domain.people import BuyerRole, FarmerRole, Person, UserAccount

__all__ = [
    # Exceptions
    "CatalogFullError",
    "DomainError",
    "DuplicateEmailError",
    "InvalidEmailError",
    "InvalidItemNameError",
    "InvalidLocationError",
    "ItemNotFoundError",
    "ProductNotFoundError",
    "ProductValidationError",
    "RoleMismatchError",
    "UserNotFoundError",
    # Items
    "FruitDetails",
    "GrainDetails",
    "ItemDetails",
    "ItemKind",
    "MarketItem",
    "VegetableDetails",
    # People
    "BuyerRole",
    "FarmerRole",
    "Person",
    "UserAccount",
    # System
    "MarketplaceStats",
    "MarketplaceSystem",
    "seed_demo_marketplace",
]
