"""Domain service: may this cart be checked out?

The Cart asks this service before producing a checkout descriptor.  The
stock-checking implementation looks every line up in an external stock
lookup and only says yes when all lines can be served.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ordercore.domain.repository.stock_levels import StockLevels

if TYPE_CHECKING:
    from ordercore.domain.model.cart import Cart


class CartCheckoutService(ABC):

    @abstractmethod
    def can_checkout(self, cart: Cart) -> bool:
        """Return True if *cart* may be turned into an order."""


class AllowAllCheckoutService(CartCheckoutService):
    """Checkout policy for setups with no stock source configured."""

    def can_checkout(self, cart: Cart) -> bool:
        return True


class StockCheckingCheckoutService(CartCheckoutService):

    def __init__(self, stock_levels: StockLevels) -> None:
        self._stock_levels = stock_levels

    def can_checkout(self, cart: Cart) -> bool:
        return not self.unavailable_items(cart)

    def unavailable_items(self, cart: Cart) -> list[str]:
        """Product IDs whose requested quantity exceeds available stock.

        Products without a stock record count as unavailable.
        """
        missing: list[str] = []
        for line in cart.items:
            available = self._stock_levels.available_quantity(line.product_id)
            if available is None or line.quantity.value > available:
                missing.append(line.product_id)
        return missing
