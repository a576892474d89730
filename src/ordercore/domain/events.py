"""Domain events raised by Cart and Order lifecycle operations.

Aggregates never call a sink directly.  They append events to their own
outbox (``EventRecorder``); the application layer drains the outbox with
``pull_events()`` after saving and hands the events to an ``EventSink``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ordercore.domain.model.order_status import OrderStatus
from ordercore.domain.model.transport import TransportMethod
from ordercore.domain.model.value_objects import Money, Weight


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _plain(value: Any) -> Any:
    if isinstance(value, Money):
        return {"amount": str(value.amount), "currency": value.currency}
    if isinstance(value, Weight):
        return str(value.kilograms)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    # Built after the state change, so this is the emission time.
    occurred_at: datetime = field(default_factory=_utcnow)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"event": self.name}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data


# --- Cart events --------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class CartItemAdded(DomainEvent):
    cart_id: str
    product_id: str
    quantity_added: int
    line_quantity: int
    total_cost: Money


@dataclass(frozen=True, kw_only=True)
class CartItemRemoved(DomainEvent):
    cart_id: str
    product_id: str
    total_cost: Money


@dataclass(frozen=True, kw_only=True)
class CartItemQuantityUpdated(DomainEvent):
    cart_id: str
    product_id: str
    previous_quantity: int
    new_quantity: int
    total_cost: Money


@dataclass(frozen=True, kw_only=True)
class CartCleared(DomainEvent):
    cart_id: str


@dataclass(frozen=True, kw_only=True)
class CartCheckedOut(DomainEvent):
    cart_id: str
    customer_id: str
    item_count: int
    total_cost: Money
    total_weight: Weight


# --- Order events -------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    order_id: str
    customer_id: str
    cart_id: str
    total_cost: Money
    delivery_cost: Money
    transport_method: TransportMethod
    estimated_delivery_time: datetime


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    order_id: str
    previous_status: OrderStatus
    status: OrderStatus


@dataclass(frozen=True, kw_only=True)
class OrderDispatched(OrderStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class OrderInTransit(OrderStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class OrderDelivered(OrderStatusChanged):
    pass


@dataclass(frozen=True, kw_only=True)
class OrderCancelled(OrderStatusChanged):
    reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class OrderPaymentLinked(DomainEvent):
    order_id: str
    payment_id: str


# --- Outbox -------------------------------------------------------------------


@dataclass
class EventRecorder:
    """Mixin giving an aggregate an in-memory outbox of recorded events."""

    _pending_events: list[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False
    )

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._pending_events)

    def pull_events(self) -> list[DomainEvent]:
        """Return recorded events in emission order and empty the outbox."""
        events, self._pending_events = self._pending_events, []
        return events

    def _record(self, event: DomainEvent) -> DomainEvent:
        self._pending_events.append(event)
        return event
