"""Cart aggregate: the customer's line items before checkout.

The Cart owns its totals: every mutation validates its input first,
changes the items, then recomputes ``total_cost`` and ``total_weight``
from scratch so the stored values can never drift from the lines.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ordercore.domain.events import (
    CartCheckedOut,
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    EventRecorder,
)
from ordercore.domain.exceptions import (
    CheckoutNotAllowed,
    CurrencyMismatch,
    EmptyCart,
    ItemNotFound,
    ValidationError,
)
from ordercore.domain.model.line_item import LineItem
from ordercore.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    Money,
    Quantity,
    Weight,
)

if TYPE_CHECKING:
    from ordercore.domain.service.cart_checkout import CartCheckoutService


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CheckoutDescriptor:
    """What a successful checkout hands over to order creation."""

    cart_id: str
    customer_id: str
    items: tuple[LineItem, ...]
    total_cost: Money
    total_weight: Weight


@dataclass
class Cart(EventRecorder):
    """Aggregate root for a customer's shopping cart.

    Use ``Cart.create()`` for new carts.  The ``__init__`` stays simple so
    the repository can reconstitute persisted carts.
    """

    id: str
    customer_id: str
    currency: str = DEFAULT_CURRENCY
    items: list[LineItem] = field(default_factory=list)
    total_cost: Money = field(default_factory=Money.zero)
    total_weight: Weight = field(default_factory=Weight.zero)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(cart_id: str, customer_id: str, currency: str = DEFAULT_CURRENCY) -> Cart:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")
        now = _utcnow()
        cart = Cart(
            id=cart_id,
            customer_id=customer_id.strip(),
            currency=currency,
            total_cost=Money.zero(currency),
            created_at=now,
            updated_at=now,
        )
        return cart

    # --- Item management ------------------------------------------------------

    def add_item(
        self,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: Money,
        weight: Weight,
    ) -> None:
        """Add a product, or top up its line if it is already in the cart.

        When the product is already present, the line takes this call's
        name, unit price and weight; prices may have changed since the
        first add.
        """
        requested = Quantity(quantity)
        if unit_price.currency != self.currency:
            raise CurrencyMismatch(
                f"Cart is priced in {self.currency}, item is priced in {unit_price.currency}"
            )
        index = self._index_of(product_id)
        if index is None:
            line = LineItem(product_id, product_name, requested, unit_price, weight)
            self.items.append(line)
        else:
            existing = self.items[index]
            line = LineItem(
                product_id,
                product_name,
                existing.quantity + requested,
                unit_price,
                weight,
            )
            self.items[index] = line

        self._after_mutation()
        self._record(
            CartItemAdded(
                cart_id=self.id,
                product_id=product_id,
                quantity_added=requested.value,
                line_quantity=line.quantity.value,
                total_cost=self.total_cost,
            )
        )

    def remove_item(self, product_id: str) -> None:
        """Remove a product's line.  Removing an absent product is a no-op."""
        index = self._index_of(product_id)
        if index is None:
            return
        del self.items[index]
        self._after_mutation()
        self._record(
            CartItemRemoved(
                cart_id=self.id,
                product_id=product_id,
                total_cost=self.total_cost,
            )
        )

    def update_item_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity.  Use ``remove_item`` to drop a line."""
        index = self._index_of(product_id)
        if index is None:
            raise ItemNotFound(f"Product '{product_id}' is not in cart {self.id}")
        new_quantity = Quantity(quantity)

        existing = self.items[index]
        self.items[index] = dataclasses.replace(existing, quantity=new_quantity)
        self._after_mutation()
        self._record(
            CartItemQuantityUpdated(
                cart_id=self.id,
                product_id=product_id,
                previous_quantity=existing.quantity.value,
                new_quantity=new_quantity.value,
                total_cost=self.total_cost,
            )
        )

    def clear(self) -> None:
        had_items = bool(self.items)
        self.items.clear()
        self._after_mutation()
        if had_items:
            self._record(CartCleared(cart_id=self.id))

    # --- Queries --------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self.items

    def get_item(self, product_id: str) -> LineItem | None:
        index = self._index_of(product_id)
        return None if index is None else self.items[index]

    def calculate_totals(self) -> tuple[Money, Weight]:
        """Recompute and store totals from the current items.

        Idempotent; also usable from outside to check a reconstituted cart.
        """
        cost = Money.zero(self.currency)
        weight = Weight.zero()
        for item in self.items:
            cost = cost + item.subtotal
            weight = weight + item.total_weight
        self.total_cost = cost
        self.total_weight = weight
        return cost, weight

    # --- Checkout -------------------------------------------------------------

    def checkout(self, checkout_service: CartCheckoutService) -> CheckoutDescriptor:
        """Validate the cart for checkout and describe it for order creation.

        Does not create the order and does not delete the cart; both are
        the caller's job.
        """
        if self.is_empty():
            raise EmptyCart(f"Cart {self.id} is empty")
        if not checkout_service.can_checkout(self):
            raise CheckoutNotAllowed(f"Cart {self.id} cannot be checked out")

        total_cost, total_weight = self.calculate_totals()
        descriptor = CheckoutDescriptor(
            cart_id=self.id,
            customer_id=self.customer_id,
            items=tuple(self.items),
            total_cost=total_cost,
            total_weight=total_weight,
        )
        self._record(
            CartCheckedOut(
                cart_id=self.id,
                customer_id=self.customer_id,
                item_count=len(descriptor.items),
                total_cost=total_cost,
                total_weight=total_weight,
            )
        )
        return descriptor

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, product_id: str) -> int | None:
        for i, item in enumerate(self.items):
            if item.product_id == product_id:
                return i
        return None

    def _after_mutation(self) -> None:
        self.calculate_totals()
        self.updated_at = _utcnow()
