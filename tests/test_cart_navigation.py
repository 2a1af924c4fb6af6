"""Tests for the cart and the navigation header."""

from unittest.mock import AsyncMock

import pytest

from conftest import CUSTOMER_USER
from magnetcraft_admin import (
    SessionNavigation,
    build_header,
    handle_logout,
)
from magnetcraft_admin.models.auth import User
from magnetcraft_admin.models.cart import Cart, CartItem, Product

MAGNET = Product(id=1, name="Photo magnet", price=300)
FRIDGE_SET = Product(id=2, name="Fridge set", price=1200)


class StubContext:
    def __init__(self, user=None, count=0):
        self.current_user = user
        self.cart_item_count = count
        self.logout = AsyncMock()


class TestCart:
    """Test cart arithmetic."""

    def test_add_merges_lines(self):
        cart = Cart()
        cart.add(MAGNET)
        cart.add(MAGNET)
        cart.add(FRIDGE_SET)

        assert len(cart.items) == 2
        assert cart.items[0].quantity == 2
        assert cart.item_count() == 3
        assert cart.total() == 1800

    def test_update_quantity_and_remove(self):
        cart = Cart()
        cart.add(MAGNET)
        cart.add(FRIDGE_SET)

        cart.update_quantity(1, 4)
        assert cart.items[0].quantity == 4

        cart.update_quantity(2, 0)
        assert [item.id for item in cart.items] == [1]

        cart.clear()
        assert cart.item_count() == 0

    def test_custom_lines_are_not_merged(self):
        cart = Cart()
        line = CartItem(id="custom-1", name="Custom magnet", price=350, quantity=6, order_id=77)
        cart.add_custom(line)
        cart.add_custom(line.model_copy(update={"order_id": 78}))

        assert cart.item_count() == 12
        assert cart.order_ids() == [77, 78]
        assert len(cart.items_for_order(77)) == 1


class TestHeader:
    """Test the header view model."""

    def test_signed_out(self):
        header = build_header(StubContext())

        assert [link.label for link in header.links] == ["Home", "About", "Contact"]
        assert [action.label for action in header.actions] == ["Login", "Sign Up"]
        assert header.cart_badge is None
        assert header.user_name is None

    def test_signed_in_with_cart(self):
        header = build_header(StubContext(User(**CUSTOMER_USER), count=3))

        assert "Dashboard" in [link.label for link in header.links]
        assert [action.label for action in header.actions] == ["Logout"]
        assert header.cart_badge == 3
        assert header.user_name == "Jane"

    @pytest.mark.asyncio
    async def test_logout_redirects_home(self):
        context = StubContext(User(**CUSTOMER_USER))

        assert await handle_logout(context) == "/"
        context.logout.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_session_navigation(self):
        auth = AsyncMock()
        auth.current_user = User(**CUSTOMER_USER)
        cart = Cart()
        cart.add(MAGNET)
        navigation = SessionNavigation(auth, cart)

        header = build_header(navigation)
        assert header.cart_badge == 1

        await handle_logout(navigation)
        auth.logout.assert_awaited_once()
