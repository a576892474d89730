"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from ordercore.domain.model.cart import Cart
from ordercore.domain.model.line_item import LineItem
from ordercore.domain.model.order import Order

_TIMESTAMP = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    weight: str
    subtotal: str


@dataclass(frozen=True)
class CartDTO:

    id: str
    customer_id: str
    items: list[LineItemDTO]
    total_cost: str
    total_weight: str
    updated_at: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_id: str
    cart_id: str
    status: str
    items: list[LineItemDTO]
    delivery_cost: str
    total_cost: str
    transport_method: str
    estimated_delivery: str
    delivery_notes: str | None
    payment_id: str | None
    created_at: str


def line_item_dto(item: LineItem) -> LineItemDTO:
    return LineItemDTO(
        product_id=item.product_id,
        product_name=item.product_name,
        quantity=item.quantity.value,
        unit_price=str(item.unit_price),
        weight=str(item.weight),
        subtotal=str(item.subtotal),
    )


def cart_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        id=cart.id,
        customer_id=cart.customer_id,
        items=[line_item_dto(item) for item in cart.items],
        total_cost=str(cart.total_cost),
        total_weight=str(cart.total_weight),
        updated_at=cart.updated_at.strftime(_TIMESTAMP),
    )


def order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        customer_id=order.customer_id,
        cart_id=order.cart_id,
        status=order.status.value,
        items=[line_item_dto(item) for item in order.items],
        delivery_cost=str(order.delivery_cost),
        total_cost=str(order.total_cost),
        transport_method=order.transport_method.value,
        estimated_delivery=order.estimated_delivery_time.strftime(_TIMESTAMP),
        delivery_notes=order.delivery_notes,
        payment_id=order.payment_id,
        created_at=order.created_at.strftime(_TIMESTAMP),
    )
