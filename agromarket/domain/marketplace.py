"""Marketplace system.

Holds the published items and registered users of the direct-sales
platform. The system is an explicit object handed to whoever needs it.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from agromarket.domain.exceptions import (
    CatalogFullError,
    DuplicateEmailError,
    ItemNotFoundError,
)
from agromarket.domain.items import (
    FruitDetails,
    GrainDetails,
    ItemKind,
    MarketItem,
    VegetableDetails,
)
from agromarket.domain.people import UserAccount

logger = structlog.get_logger()

SYSTEM_NAME = "Agricultural Direct Sales Platform"
SYSTEM_VERSION = "1.0.0"
MAX_ITEMS = 1000


@dataclass(frozen=True)
class MarketplaceStats:
    """Counts over the marketplace contents."""

    total_products: int = 0
    active_products: int = 0
    inactive_products: int = 0
    products_by_kind: dict[str, int] = field(default_factory=dict)
    total_users: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "total_products": self.total_products,
            "active_products": self.active_products,
            "inactive_products": self.inactive_products,
            "products_by_kind": dict(self.products_by_kind),
            "total_users": self.total_users,
        }


class MarketplaceSystem:
    """Items and users of the platform.

    Example usage:
        system = MarketplaceSystem(max_items=500)
        system.add_item(MarketItem.create("Mango", "Tolima", FruitDetails()))
        system.search_by_name("man")
    """

    def __init__(
        self,
        name: str = SYSTEM_NAME,
        version: str = SYSTEM_VERSION,
        max_items: int = MAX_ITEMS,
    ) -> None:
        self.name = name
        self.version = version
        self.max_items = max_items
        self._items: list[MarketItem] = []
        self._users: list[UserAccount] = []

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_item(self, item: MarketItem) -> MarketItem:
        """Add an item.

        Raises:
            CatalogFullError: If the system already holds max_items items.
        """
        if len(self._items) >= self.max_items:
            raise CatalogFullError(self.max_items)
        self._items.append(item)
        logger.info("Item added", item_id=item.id, kind=item.kind.value)
        return item

    def remove_item(self, item_id: str) -> MarketItem:
        """Remove an item by id.

        Raises:
            ItemNotFoundError: If no item has this id.
        """
        for index, item in enumerate(self._items):
            if item.id == item_id:
                logger.info("Item removed", item_id=item_id)
                return self._items.pop(index)
        raise ItemNotFoundError(item_id)

    def find_item(self, item_id: str) -> MarketItem | None:
        return next((item for item in self._items if item.id == item_id), None)

    def all_items(self) -> list[MarketItem]:
        return list(self._items)

    def search_by_name(self, query: str) -> list[MarketItem]:
        """Items whose name contains the query, ignoring case."""
        term = (query or "").strip().lower()
        if not term:
            return self.all_items()
        return [item for item in self._items if term in item.name.lower()]

    def filter_by_kind(self, kind: ItemKind | str) -> list[MarketItem]:
        return [item for item in self._items if item.kind == kind]

    def filter_by_status(self, active: bool) -> list[MarketItem]:
        return [item for item in self._items if item.active == active]

    def get_stats(self) -> MarketplaceStats:
        """Compute counts over items and users."""
        total = len(self._items)
        active = sum(1 for item in self._items if item.active)
        by_kind: dict[str, int] = {}
        for item in self._items:
            by_kind[item.kind.value] = by_kind.get(item.kind.value, 0) + 1

        return MarketplaceStats(
            total_products=total,
            active_products=active,
            inactive_products=total - active,
            products_by_kind=by_kind,
            total_users=len(self._users),
        )

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def add_user(self, account: UserAccount) -> UserAccount:
        """Register a user.

        Raises:
            DuplicateEmailError: If another user has the same email, ignoring case.
        """
        if self.find_user_by_email(account.email) is not None:
            raise DuplicateEmailError(account.email)
        self._users.append(account)
        logger.info("User registered", user_id=account.id, role=account.role_name)
        return account

    def find_user(self, user_id: str) -> UserAccount | None:
        return next((u for u in self._users if u.id == user_id), None)

    def find_user_by_email(self, email: str) -> UserAccount | None:
        """Find a user by email, ignoring case."""
        wanted = email.lower()
        return next((u for u in self._users if u.email.lower() == wanted), None)

    def all_users(self) -> list[UserAccount]:
        return list(self._users)


def seed_demo_marketplace(system: MarketplaceSystem) -> MarketplaceSystem:
    """Load demo farmers, buyers and items into a system.

    Args:
        system: Target system.

    Returns:
        The same system, populated.
    """
    carlos = system.add_user(
        UserAccount.farmer("Carlos Ramírez", "carlos@finca.com", "Finca El Progreso")
    )
    maria = system.add_user(
        UserAccount.farmer("María Gómez", "maria@campo.com", "Finca La Esperanza")
    )
    system.add_user(UserAccount.buyer("Juan Torres", "juan@gmail.com", "Bogotá"))
    system.add_user(UserAccount.buyer("Laura Martínez", "laura@gmail.com", "Medellín"))

    mango = system.add_item(MarketItem.create("Mango", "Tolima", FruitDetails("High", "Summer")))
    banana = system.add_item(
        MarketItem.create("Banano", "Urabá", FruitDetails("Medium", "All year"))
    )
    system.add_item(MarketItem.create("Tomate", "Cundinamarca", VegetableDetails(True, "1kg")))
    system.add_item(MarketItem.create("Lechuga", "Boyacá", VegetableDetails(True, "500g")))
    rice = system.add_item(MarketItem.create("Arroz", "Meta", GrainDetails("100kg", "Premium")))
    corn = system.add_item(
        MarketItem.create("Maíz", "Valle del Cauca", GrainDetails("200kg", "High"))
    )

    carlos.publish_product(mango.id)
    carlos.publish_product(rice.id)
    maria.publish_product(banana.id)
    maria.publish_product(corn.id)

    return system
