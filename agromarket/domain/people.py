"""Marketplace users.

A user account is a shared person record plus a role payload: farmers own
a farm and publish items, buyers have a shipping address and place orders.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from agromarket.domain.exceptions import InvalidEmailError, RoleMismatchError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email: str) -> str:
    """Return the address unchanged if it is well formed.

    Raises:
        InvalidEmailError: If the address does not match the pattern.
    """
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        raise InvalidEmailError(str(email))
    return email


@dataclass
class Person:
    """Fields shared by every user."""

    id: str
    name: str
    email: str
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class FarmerRole:
    """Farmer payload: farm name and ids of published items."""

    farm_name: str
    published_items: list[str] = field(default_factory=list)


@dataclass
class BuyerRole:
    """Buyer payload: shipping address and order references."""

    address: str
    orders: list[str] = field(default_factory=list)


Role = FarmerRole | BuyerRole


@dataclass
class UserAccount:
    """A person together with their marketplace role."""

    person: Person
    role: Role

    @classmethod
    def farmer(cls, name: str, email: str, farm_name: str) -> "UserAccount":
        """Register a farmer.

        Raises:
            InvalidEmailError: If the email is malformed.
        """
        person = Person(id=str(uuid4()), name=name, email=validate_email(email))
        return cls(person=person, role=FarmerRole(farm_name=farm_name))

    @classmethod
    def buyer(cls, name: str, email: str, address: str) -> "UserAccount":
        """Register a buyer.

        Raises:
            InvalidEmailError: If the email is malformed.
        """
        person = Person(id=str(uuid4()), name=name, email=validate_email(email))
        return cls(person=person, role=BuyerRole(address=address))

    @property
    def id(self) -> str:
        return self.person.id

    @property
    def email(self) -> str:
        return self.person.email

    @property
    def role_name(self) -> str:
        match self.role:
            case FarmerRole():
                return "farmer"
            case BuyerRole():
                return "buyer"
        raise TypeError(f"Unknown role: {type(self.role).__name__}")

    def change_email(self, email: str) -> None:
        """Replace the email after validating it."""
        self.person.email = validate_email(email)

    def publish_product(self, item_id: str) -> None:
        """Record an item as published by this farmer.

        Raises:
            RoleMismatchError: If the user is not a farmer.
        """
        if not isinstance(self.role, FarmerRole):
            raise RoleMismatchError(self.id, self.role_name, "publish products")
        self.role.published_items.append(item_id)

    def add_order(self, order_id: str) -> None:
        """Record an order placed by this buyer.

        Raises:
            RoleMismatchError: If the user is not a buyer.
        """
        if not isinstance(self.role, BuyerRole):
            raise RoleMismatchError(self.id, self.role_name, "place orders")
        self.role.orders.append(order_id)

    def info(self) -> dict[str, Any]:
        """Person fields plus the role-specific view."""
        base = {
            "id": self.person.id,
            "name": self.person.name,
            "email": self.person.email,
            "registered_at": self.person.registered_at.isoformat(),
            "role": self.role_name,
        }
        match self.role:
            case FarmerRole(farm_name=farm_name, published_items=published):
                return {**base, "farm_name": farm_name, "published_items": list(published)}
            case BuyerRole(address=address, orders=orders):
                return {**base, "address": address, "orders": list(orders)}
        return base
