"""Unit tests for the stock-checking cart checkout service."""

from ordercore.domain.model.cart import Cart
from ordercore.domain.model.value_objects import Money, Weight
from ordercore.domain.service.cart_checkout import (
    AllowAllCheckoutService,
    StockCheckingCheckoutService,
)
from tests.fakes import FakeStockLevels


def _cart(**quantities: int) -> Cart:
    cart = Cart.create("cart-1", "alice")
    for product_id, qty in quantities.items():
        cart.add_item(product_id, product_id.title(), qty, Money.of("5"), Weight.of("1"))
    return cart


class TestStockCheckingCheckoutService:

    def test_allows_when_every_line_is_in_stock(self):
        svc = StockCheckingCheckoutService(FakeStockLevels({"widget": 10, "gadget": 2}))
        assert svc.can_checkout(_cart(widget=10, gadget=1))

    def test_denies_when_a_line_exceeds_stock(self):
        svc = StockCheckingCheckoutService(FakeStockLevels({"widget": 10, "gadget": 2}))
        cart = _cart(widget=3, gadget=5)
        assert not svc.can_checkout(cart)
        assert svc.unavailable_items(cart) == ["gadget"]

    def test_unknown_product_is_unavailable(self):
        svc = StockCheckingCheckoutService(FakeStockLevels({"widget": 10}))
        cart = _cart(widget=1, mystery=1)
        assert svc.unavailable_items(cart) == ["mystery"]

    def test_zero_stock_is_unavailable(self):
        svc = StockCheckingCheckoutService(FakeStockLevels({"widget": 0}))
        assert not svc.can_checkout(_cart(widget=1))


def test_allow_all_service():
    assert AllowAllCheckoutService().can_checkout(_cart(widget=1))
