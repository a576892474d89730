"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_identity(self) -> str:
        """Generate a new unique order ID."""

    @abstractmethod
    def find_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find_by_customer(self, customer_id: str) -> list[Order]:
        """Return every order placed by a customer, oldest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order."""
