"""Agricultural items published on the marketplace.

An item is a shared record (name, location, availability) plus a details
variant that carries the kind-specific fields. The kind is derived from the
variant, and kind-specific views are produced by matching on it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from agromarket.domain.exceptions import InvalidItemNameError, InvalidLocationError


class ItemKind(str, Enum):
    """Kinds of agricultural items."""

    FRUIT = "fruit"
    VEGETABLE = "vegetable"
    GRAIN = "grain"


# ============================================================================
# Details Variants
# ============================================================================


@dataclass(frozen=True)
class FruitDetails:
    """Fruit-specific fields."""

    sweet_level: str = "Medium"
    season: str = "All year"


@dataclass(frozen=True)
class VegetableDetails:
    """Vegetable-specific fields."""

    organic: bool = False
    weight: str = "1kg"


@dataclass(frozen=True)
class GrainDetails:
    """Grain-specific fields."""

    quantity: str = "100kg"
    quality: str = "Normal"


ItemDetails = FruitDetails | VegetableDetails | GrainDetails


def kind_of(details: ItemDetails) -> ItemKind:
    """Return the item kind a details variant belongs to."""
    match details:
        case FruitDetails():
            return ItemKind.FRUIT
        case VegetableDetails():
            return ItemKind.VEGETABLE
        case GrainDetails():
            return ItemKind.GRAIN
    raise TypeError(f"Unknown item details: {type(details).__name__}")


def details_info(details: ItemDetails) -> dict[str, Any]:
    """Kind-specific fields of a details variant."""
    match details:
        case FruitDetails(sweet_level=sweet_level, season=season):
            return {"sweet_level": sweet_level, "season": season}
        case VegetableDetails(organic=organic, weight=weight):
            return {"organic": organic, "weight": weight}
        case GrainDetails(quantity=quantity, quality=quality):
            return {"quantity": quantity, "quality": quality}
    raise TypeError(f"Unknown item details: {type(details).__name__}")


# ============================================================================
# Item
# ============================================================================


@dataclass
class MarketItem:
    """An agricultural product published by a farmer.

    Attributes:
        id: Unique item identifier.
        name: Item name.
        location: Farm or region the item comes from.
        details: Kind-specific details variant.
        active: Whether the item is listed.
        created_at: Creation timestamp.
    """

    id: str
    name: str
    location: str
    details: ItemDetails
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, name: str, location: str, details: ItemDetails) -> "MarketItem":
        """Create a new active item.

        Args:
            name: Item name.
            location: Origin of the item.
            details: Kind-specific details.

        Returns:
            New MarketItem with generated id.

        Raises:
            InvalidItemNameError: If name is blank.
            InvalidLocationError: If location is blank.
        """
        name = (name or "").strip()
        if not name:
            raise InvalidItemNameError()
        location = (location or "").strip()
        if not location:
            raise InvalidLocationError()
        return cls(id=str(uuid4()), name=name, location=location, details=details)

    @property
    def kind(self) -> ItemKind:
        """Item kind derived from the details variant."""
        return kind_of(self.details)

    def activate(self) -> bool:
        """List the item.

        Returns:
            True if the item was inactive, False if it was already active.
        """
        if self.active:
            return False
        self.active = True
        return True

    def deactivate(self) -> bool:
        """Unlist the item.

        Returns:
            True if the item was active, False if it was already inactive.
        """
        if not self.active:
            return False
        self.active = False
        return True

    def relocate(self, location: str) -> None:
        """Change the item location.

        Raises:
            InvalidLocationError: If location is blank.
        """
        location = (location or "").strip()
        if not location:
            raise InvalidLocationError()
        self.location = location

    def info(self) -> dict[str, Any]:
        """Shared fields plus the kind-specific view."""
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "location": self.location,
            "active": self.active,
            "created_at": self.created_at.isoformat(),
            **details_info(self.details),
        }
