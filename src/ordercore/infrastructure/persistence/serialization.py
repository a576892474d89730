"""JSON mapping for value objects shared by the cart and order files."""

from __future__ import annotations

from decimal import Decimal

from ordercore.domain.model.line_item import LineItem
from ordercore.domain.model.value_objects import Money, Quantity, Weight


def money_to_raw(money: Money) -> dict:
    return {"amount": str(money.amount), "currency": money.currency}


def money_from_raw(raw: dict) -> Money:
    return Money(Decimal(raw["amount"]), raw.get("currency", "USD"))


def line_to_raw(item: LineItem) -> dict:
    return {
        "product_id": item.product_id,
        "product_name": item.product_name,
        "quantity": item.quantity.value,
        "unit_price": money_to_raw(item.unit_price),
        "weight": str(item.weight.kilograms),
    }


def line_from_raw(raw: dict) -> LineItem:
    return LineItem(
        product_id=raw["product_id"],
        product_name=raw["product_name"],
        quantity=Quantity(raw["quantity"]),
        unit_price=money_from_raw(raw["unit_price"]),
        weight=Weight(Decimal(raw["weight"])),
    )
