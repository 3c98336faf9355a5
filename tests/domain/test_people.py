"""Tests for marketplace users."""

import pytest

from agromarket.domain.exceptions import InvalidEmailError, RoleMismatchError
from agromarket.domain.people import BuyerRole, FarmerRole, UserAccount, validate_email


class TestEmail:
    """Tests for email validation."""

    @pytest.mark.parametrize("email", ["carlos@finca.com", "a.b@c.co"])
    def test_valid(self, email) -> None:
        """Well-formed addresses pass through."""
        assert validate_email(email) == email

    @pytest.mark.parametrize("email", ["", "carlos", "carlos@finca", "a b@c.com", "@x.com"])
    def test_invalid(self, email) -> None:
        """Malformed addresses raise InvalidEmailError."""
        with pytest.raises(InvalidEmailError):
            validate_email(email)


class TestUserAccount:
    """Tests for UserAccount roles."""

    def test_farmer(self) -> None:
        """Farmers carry a farm name and publish items."""
        farmer = UserAccount.farmer("Carlos Ramírez", "carlos@finca.com", "Finca El Progreso")
        farmer.publish_product("item-1")

        assert farmer.role_name == "farmer"
        assert isinstance(farmer.role, FarmerRole)
        assert farmer.role.published_items == ["item-1"]

    def test_buyer(self) -> None:
        """Buyers carry an address and place orders."""
        buyer = UserAccount.buyer("Juan Torres", "juan@gmail.com", "Bogotá")
        buyer.add_order("order-1")

        assert buyer.role_name == "buyer"
        assert isinstance(buyer.role, BuyerRole)
        assert buyer.role.orders == ["order-1"]

    def test_buyer_cannot_publish(self) -> None:
        """Publishing is reserved for farmers."""
        buyer = UserAccount.buyer("Juan Torres", "juan@gmail.com", "Bogotá")
        with pytest.raises(RoleMismatchError):
            buyer.publish_product("item-1")

    def test_farmer_cannot_order(self) -> None:
        """Ordering is reserved for buyers."""
        farmer = UserAccount.farmer("María Gómez", "maria@campo.com", "Finca La Esperanza")
        with pytest.raises(RoleMismatchError):
            farmer.add_order("order-1")

    def test_invalid_email_on_registration(self) -> None:
        """Registration validates the email."""
        with pytest.raises(InvalidEmailError):
            UserAccount.buyer("Juan", "not-an-email", "Bogotá")

    def test_change_email(self) -> None:
        """Email changes are validated."""
        buyer = UserAccount.buyer("Juan Torres", "juan@gmail.com", "Bogotá")

        buyer.change_email("juan@torres.co")
        assert buyer.email == "juan@torres.co"

        with pytest.raises(InvalidEmailError):
            buyer.change_email("broken")
        assert buyer.email == "juan@torres.co"

    def test_info(self) -> None:
        """Info exposes only the role's own fields."""
        farmer = UserAccount.farmer("Carlos", "carlos@finca.com", "Finca El Progreso")
        info = farmer.info()

        assert info["role"] == "farmer"
        assert info["farm_name"] == "Finca El Progreso"
        assert "address" not in info
