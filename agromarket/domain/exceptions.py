"""Domain exceptions.

All domain-level errors that represent business rule violations. The
catalog store and the marketplace raise these; the API layer translates
them into HTTP error responses.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Catalog Errors
# ============================================================================


class CatalogError(DomainError):
    """Base class for catalog-related errors."""

    pass


class ProductNotFoundError(CatalogError):
    """Raised when a product id is not present in the catalog."""

    def __init__(self, product_id: str) -> None:
        """Initialize product not found error.

        Args:
            product_id: The missing product id.
        """
        super().__init__(
            f"Product not found: {product_id}",
            details={"product_id": product_id},
        )


class ProductValidationError(CatalogError):
    """Raised when product input fails validation."""

    def __init__(self, field: str, reason: str) -> None:
        """Initialize product validation error.

        Args:
            field: Name of the offending field.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason},
        )


class CatalogFullError(CatalogError):
    """Raised when adding an entry would exceed the configured capacity."""

    def __init__(self, max_items: int) -> None:
        """Initialize catalog full error.

        Args:
            max_items: Configured capacity.
        """
        super().__init__(
            f"Item limit reached ({max_items})",
            details={"max_items": max_items},
        )


# ============================================================================
# Marketplace Errors
# ============================================================================


class MarketplaceError(DomainError):
    """Base class for marketplace-related errors."""

    pass


class ItemNotFoundError(MarketplaceError):
    """Raised when a marketplace item is not found."""

    def __init__(self, item_id: str) -> None:
        """Initialize item not found error.

        Args:
            item_id: The missing item id.
        """
        super().__init__(
            f"Item not found: {item_id}",
            details={"item_id": item_id},
        )


class InvalidLocationError(MarketplaceError):
    """Raised when an item location is blank."""

    def __init__(self) -> None:
        super().__init__("Location cannot be empty", details={"field": "location"})


class InvalidItemNameError(MarketplaceError):
    """Raised when an item name is blank."""

    def __init__(self) -> None:
        super().__init__("Item name cannot be empty", details={"field": "name"})


class DuplicateEmailError(MarketplaceError):
    """Raised when an email address is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            f"Email already registered: {email}",
            details={"field": "email", "email": email},
        )


class InvalidEmailError(MarketplaceError):
    """Raised when an email address is malformed."""

    def __init__(self, email: str) -> None:
        """Initialize invalid email error.

        Args:
            email: The rejected address.
        """
        super().__init__(
            f"Invalid email format: {email!r}",
            details={"field": "email", "email": email},
        )


class UserNotFoundError(MarketplaceError):
    """Raised when a marketplace user is not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}", details={"user_id": user_id})


class RoleMismatchError(MarketplaceError):
    """Raised when an operation is not available for a user's role."""

    def __init__(self, user_id: str, role: str, operation: str) -> None:
        """Initialize role mismatch error.

        Args:
            user_id: ID of the user.
            role: Current role of the user.
            operation: Attempted operation.
        """
        super().__init__(
            f"User {user_id} with role '{role}' cannot {operation}",
            details={"user_id": user_id, "role": role, "operation": operation},
        )
