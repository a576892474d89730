"""Application service: Abandon Cart use case."""

from __future__ import annotations

import structlog

from ordercore.domain.exceptions import EntityNotFoundError
from ordercore.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class AbandonCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, customer_id: str) -> str:
        """Delete the customer's cart and return its ID."""
        cart = self._cart_repo.find_by_customer(customer_id)
        if cart is None:
            raise EntityNotFoundError(f"No active cart for customer '{customer_id}'")

        self._cart_repo.remove(cart.id)
        logger.info("cart_abandoned", cart_id=cart.id, item_count=len(cart.items))
        return cart.id
