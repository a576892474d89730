"""JSON-file-backed stock lookup.

Stands in for the inventory context: ``stock.json`` maps product IDs to
available units.  The core only reads it; ``set_available`` exists for
the ``stock set`` command.
"""

from __future__ import annotations

import json
from pathlib import Path

from ordercore.domain.exceptions import ValidationError
from ordercore.domain.repository.stock_levels import StockLevels


class JsonStockLevels(StockLevels):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def available_quantity(self, product_id: str) -> int | None:
        return self._load().get(product_id)

    def set_available(self, product_id: str, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        stock = self._load()
        stock[product_id] = quantity
        self._file_path.write_text(
            json.dumps(stock, indent=2, sort_keys=True) + "\n", encoding="utf-8"
        )

    def list_all(self) -> dict[str, int]:
        return self._load()

    def _load(self) -> dict[str, int]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
