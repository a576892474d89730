"""LineItem: one product entry in a Cart or an Order.

Frozen so that an order's lines stay a snapshot of what the customer
checked out, no matter what later happens to the cart or the product.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordercore.domain.exceptions import InvalidPrice, ValidationError
from ordercore.domain.model.value_objects import Money, Quantity, Weight


@dataclass(frozen=True)
class LineItem:

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    weight: Weight  # per unit

    def __post_init__(self) -> None:
        if not self.product_id or not str(self.product_id).strip():
            raise ValidationError("Product ID is required")
        if not self.unit_price.is_positive:
            raise InvalidPrice(
                f"Unit price must be greater than zero, got {self.unit_price.amount}"
            )

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def total_weight(self) -> Weight:
        return self.weight * self.quantity.value
