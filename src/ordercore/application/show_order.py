"""Application services: Show Order and List Customer Orders (queries)."""

from __future__ import annotations

from ordercore.application.dto import OrderDTO, order_dto
from ordercore.domain.exceptions import EntityNotFoundError
from ordercore.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        return order_dto(order)


class ListCustomerOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, customer_id: str) -> list[OrderDTO]:
        return [order_dto(order) for order in self._order_repo.find_by_customer(customer_id)]
