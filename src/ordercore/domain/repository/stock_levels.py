"""Abstract lookup for available stock, owned by an external inventory context."""

from __future__ import annotations

from abc import ABC, abstractmethod


class StockLevels(ABC):

    @abstractmethod
    def available_quantity(self, product_id: str) -> int | None:
        """Return units available for a product, or None if it is unknown."""
