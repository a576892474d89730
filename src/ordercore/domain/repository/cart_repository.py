"""Abstract repository for Cart aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  ``find_by_customer`` backs the one-active-cart-per-customer
rule enforced by the application layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def next_identity(self) -> str:
        """Generate a new unique cart ID."""

    @abstractmethod
    def find_by_id(self, cart_id: str) -> Cart | None:
        """Return a cart by its ID, or None if not found."""

    @abstractmethod
    def find_by_customer(self, customer_id: str) -> Cart | None:
        """Return the customer's active cart, or None."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""

    @abstractmethod
    def remove(self, cart_id: str) -> None:
        """Delete a cart.  Removing an unknown ID is not an error."""
