"""Application service: Remove Cart Item use case."""

from __future__ import annotations

from ordercore.application.dto import CartDTO, cart_dto
from ordercore.application.publishing import publish_pending
from ordercore.domain.event_sink import EventSink
from ordercore.domain.exceptions import EntityNotFoundError
from ordercore.domain.repository.cart_repository import CartRepository


class RemoveCartItemHandler:

    def __init__(self, cart_repo: CartRepository, event_sink: EventSink) -> None:
        self._cart_repo = cart_repo
        self._event_sink = event_sink

    def handle(self, customer_id: str, product_id: str) -> CartDTO:
        """Drop a product from the cart.  Unknown products are ignored."""
        cart = self._cart_repo.find_by_customer(customer_id)
        if cart is None:
            raise EntityNotFoundError(f"No active cart for customer '{customer_id}'")

        cart.remove_item(product_id)
        self._cart_repo.save(cart)
        publish_pending(self._event_sink, cart)
        return cart_dto(cart)
