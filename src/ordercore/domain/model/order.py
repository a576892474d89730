"""Order aggregate: the core of the domain.

An Order is built once from a checked-out Cart and then only moves
through its delivery states.  Line items are frozen snapshots; the only
fields that change after creation are ``status``, ``payment_id`` and
``updated_at``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from ordercore.domain.events import (
    EventRecorder,
    OrderCancelled,
    OrderCreated,
    OrderDelivered,
    OrderDispatched,
    OrderInTransit,
    OrderPaymentLinked,
    OrderStatusChanged,
)
from ordercore.domain.exceptions import (
    CurrencyMismatch,
    EmptyCart,
    InvalidDeliveryCost,
    InvalidStateTransition,
    ValidationError,
)
from ordercore.domain.model.cart import CheckoutDescriptor
from ordercore.domain.model.line_item import LineItem
from ordercore.domain.model.order_status import ALLOWED_TRANSITIONS, OrderStatus
from ordercore.domain.model.transport import TransportMethod
from ordercore.domain.model.value_objects import Money
from ordercore.domain.service.delivery_policy import DeliveryPolicyService


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order(EventRecorder):
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    customer_id: str
    cart_id: str
    items: tuple[LineItem, ...]
    total_cost: Money
    delivery_cost: Money
    transport_method: TransportMethod
    estimated_delivery_time: datetime
    delivery_notes: str | None = None
    payment_id: str | None = None
    status: OrderStatus = OrderStatus.CREATED
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: str,
        checkout: CheckoutDescriptor,
        delivery_cost: Money,
        delivery_policy: DeliveryPolicyService,
        transport_method: TransportMethod | str | None = None,
        delivery_notes: str | None = None,
    ) -> Order:
        """Create a new order from a cart checkout, enforcing all invariants."""
        if not checkout.items:
            raise EmptyCart(f"Cart {checkout.cart_id} has no items to order")
        if delivery_cost.is_negative:
            raise InvalidDeliveryCost(
                f"Delivery cost cannot be negative, got {delivery_cost.amount}"
            )
        currency = checkout.items[0].unit_price.currency
        if delivery_cost.currency != currency:
            raise CurrencyMismatch(
                f"Delivery cost in {delivery_cost.currency} for an order priced in {currency}"
            )

        if transport_method is None:
            method = delivery_policy.determine_transport_method(checkout.total_weight)
        else:
            method = TransportMethod.parse(transport_method)

        items = tuple(checkout.items)
        now = _utcnow()
        order = Order(
            id=order_id,
            customer_id=checkout.customer_id,
            cart_id=checkout.cart_id,
            items=items,
            total_cost=delivery_policy.calculate_total(items, delivery_cost),
            delivery_cost=delivery_cost,
            transport_method=method,
            estimated_delivery_time=delivery_policy.estimate_delivery_time(method, now),
            delivery_notes=(delivery_notes or "").strip() or None,
            created_at=now,
            updated_at=now,
        )
        order._record(
            OrderCreated(
                order_id=order.id,
                customer_id=order.customer_id,
                cart_id=order.cart_id,
                total_cost=order.total_cost,
                delivery_cost=order.delivery_cost,
                transport_method=order.transport_method,
                estimated_delivery_time=order.estimated_delivery_time,
            )
        )
        return order

    # --- State transitions ----------------------------------------------------

    def mark_as_dispatched(self) -> OrderDispatched:
        """Transition CREATED -> DISPATCHED."""
        return self._transition(OrderStatus.DISPATCHED, OrderDispatched)

    def mark_as_in_transit(self) -> OrderInTransit:
        """Transition DISPATCHED -> IN_TRANSIT."""
        return self._transition(OrderStatus.IN_TRANSIT, OrderInTransit)

    def mark_as_delivered(self) -> OrderDelivered:
        """Transition IN_TRANSIT -> DELIVERED."""
        return self._transition(OrderStatus.DELIVERED, OrderDelivered)

    def cancel(self, reason: str | None = None) -> OrderCancelled:
        """Transition CREATED|DISPATCHED -> CANCELLED.

        Once the order is in transit or delivered it can no longer be
        cancelled.
        """
        return self._transition(
            OrderStatus.CANCELLED, OrderCancelled, reason=(reason or "").strip() or None
        )

    def link_payment(self, payment_id: str) -> OrderPaymentLinked | None:
        """Attach the completed payment's ID.

        Linking the same ID twice is a no-op and returns None.
        """
        if not payment_id or not payment_id.strip():
            raise ValidationError("Payment ID is required")
        payment_id = payment_id.strip()
        if self.status == OrderStatus.CANCELLED:
            raise InvalidStateTransition(
                f"Cannot link a payment to order {self.id} in CANCELLED status"
            )
        if self.payment_id == payment_id:
            return None
        if self.payment_id is not None:
            raise ValidationError(
                f"Order {self.id} is already linked to payment {self.payment_id}"
            )
        self._assert_totals_consistent()

        self.payment_id = payment_id
        self.updated_at = _utcnow()
        event = OrderPaymentLinked(order_id=self.id, payment_id=payment_id)
        self._record(event)
        return event

    # --- Queries --------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def can_transition_to(self, status: OrderStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[self.status]

    @property
    def items_total(self) -> Money:
        total = Money.zero(self.delivery_cost.currency)
        for item in self.items:
            total = total + item.subtotal
        return total

    def calculate_total_cost(self) -> Money:
        """Recompute the total from the lines and the delivery cost."""
        return self.items_total + self.delivery_cost

    def has_consistent_totals(self) -> bool:
        return self.calculate_total_cost() == self.total_cost

    # --- Internal helpers -----------------------------------------------------

    def _transition(
        self,
        target: OrderStatus,
        event_type: type[OrderStatusChanged],
        **event_fields: object,
    ) -> OrderStatusChanged:
        if not self.can_transition_to(target):
            raise InvalidStateTransition(
                f"Cannot move order {self.id} from {self.status.value} to {target.value}"
            )
        self._assert_totals_consistent()

        previous = self.status
        self.status = target
        self.updated_at = _utcnow()
        event = event_type(
            order_id=self.id,
            previous_status=previous,
            status=target,
            **event_fields,
        )
        self._record(event)
        return event

    def _assert_totals_consistent(self) -> None:
        if not self.has_consistent_totals():
            raise ValidationError(
                f"Order {self.id} total {self.total_cost} does not match "
                f"its items and delivery cost ({self.calculate_total_cost()})"
            )
