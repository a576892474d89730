"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
import uuid
from datetime import datetime
from pathlib import Path

from ordercore.domain.model.order import Order
from ordercore.domain.model.order_status import OrderStatus
from ordercore.domain.model.transport import TransportMethod
from ordercore.domain.repository.order_repository import OrderRepository
from ordercore.infrastructure.persistence.serialization import (
    line_from_raw,
    line_to_raw,
    money_from_raw,
    money_to_raw,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_identity(self) -> str:
        return f"order-{uuid.uuid4().hex[:12]}"

    def find_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def find_by_customer(self, customer_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["customer_id"] == customer_id
        ]

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "cart_id": order.cart_id,
            "status": order.status.value,
            "items": [line_to_raw(item) for item in order.items],
            "total_cost": money_to_raw(order.total_cost),
            "delivery_cost": money_to_raw(order.delivery_cost),
            "delivery_notes": order.delivery_notes,
            "transport_method": order.transport_method.value,
            "estimated_delivery_time": order.estimated_delivery_time.isoformat(),
            "payment_id": order.payment_id,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            cart_id=raw["cart_id"],
            items=tuple(line_from_raw(i) for i in raw["items"]),
            total_cost=money_from_raw(raw["total_cost"]),
            delivery_cost=money_from_raw(raw["delivery_cost"]),
            transport_method=TransportMethod(raw["transport_method"]),
            estimated_delivery_time=datetime.fromisoformat(raw["estimated_delivery_time"]),
            delivery_notes=raw.get("delivery_notes"),
            payment_id=raw.get("payment_id"),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
