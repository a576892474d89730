"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from ordercore.application.dto import CartDTO, cart_dto
from ordercore.domain.exceptions import EntityNotFoundError
from ordercore.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, customer_id: str) -> CartDTO:
        cart = self._cart_repo.find_by_customer(customer_id)
        if cart is None:
            raise EntityNotFoundError(f"No active cart for customer '{customer_id}'")
        return cart_dto(cart)
