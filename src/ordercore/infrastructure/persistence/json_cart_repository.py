"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

import json
import uuid
from datetime import datetime
from pathlib import Path

from ordercore.domain.model.cart import Cart
from ordercore.domain.model.value_objects import Weight
from ordercore.domain.repository.cart_repository import CartRepository
from ordercore.infrastructure.persistence.serialization import (
    line_from_raw,
    line_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def next_identity(self) -> str:
        return f"cart-{uuid.uuid4().hex[:12]}"

    def find_by_id(self, cart_id: str) -> Cart | None:
        raw = self._load_raw().get(cart_id)
        return None if raw is None else self._to_domain(raw)

    def find_by_customer(self, customer_id: str) -> Cart | None:
        for raw in self._load_raw().values():
            if raw["customer_id"] == customer_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        carts = self._load_raw()
        carts[cart.id] = self._to_raw(cart)
        self._persist_raw(carts)

    def remove(self, cart_id: str) -> None:
        carts = self._load_raw()
        if carts.pop(cart_id, None) is not None:
            self._persist_raw(carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "customer_id": cart.customer_id,
            "currency": cart.currency,
            "items": [line_to_raw(item) for item in cart.items],
            "total_cost": money_to_raw(cart.total_cost),
            "total_weight": str(cart.total_weight.kilograms),
            "created_at": cart.created_at.isoformat(),
            "updated_at": cart.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            id=raw["id"],
            customer_id=raw["customer_id"],
            currency=raw["currency"],
            items=[line_from_raw(i) for i in raw["items"]],
            total_cost=money_from_raw(raw["total_cost"]),
            total_weight=Weight.of(raw["total_weight"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, carts: dict[str, dict]) -> None:
        self._file_path.write_text(
            json.dumps(carts, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
