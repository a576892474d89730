"""Application service: Add Cart Item use case.

Finds the customer's active cart (or opens one on the first add), adds
the product line and saves.  Product name, price and weight arrive from
the caller: the core never reaches into the catalog.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from ordercore.application.dto import CartDTO, cart_dto
from ordercore.application.publishing import publish_pending
from ordercore.domain.event_sink import EventSink
from ordercore.domain.model.cart import Cart
from ordercore.domain.model.value_objects import DEFAULT_CURRENCY, Money, Weight
from ordercore.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class AddCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        event_sink: EventSink,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._cart_repo = cart_repo
        self._event_sink = event_sink
        self._currency = currency

    def handle(
        self,
        customer_id: str,
        product_id: str,
        product_name: str,
        quantity: int,
        unit_price: str | int | Decimal,
        weight: str | int | Decimal,
    ) -> CartDTO:
        cart = self._cart_repo.find_by_customer(customer_id)
        if cart is None:
            cart = Cart.create(self._cart_repo.next_identity(), customer_id, self._currency)
            logger.info("cart_opened", cart_id=cart.id, customer_id=cart.customer_id)

        cart.add_item(
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=Money.of(unit_price, cart.currency),
            weight=Weight.of(weight),
        )
        self._cart_repo.save(cart)
        publish_pending(self._event_sink, cart)

        logger.info(
            "cart_item_added",
            cart_id=cart.id,
            product_id=product_id,
            quantity=quantity,
            total_cost=str(cart.total_cost),
        )
        return cart_dto(cart)
