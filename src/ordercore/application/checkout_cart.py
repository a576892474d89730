"""Application service: Checkout Cart use case.

Orchestrates the Cart aggregate (checkout validation), the cart checkout
service (stock), the delivery policy and the Order aggregate.  This is the
only place that coordinates both aggregates: the Cart never learns about
the Order it becomes.

Steps:
1. Load the customer's cart.
2. ``cart.checkout()`` -> descriptor (fails on empty cart / no stock).
3. ``Order.create()`` snapshots the lines and prices delivery.
4. Save the order, then delete the cart.
5. Publish cart events followed by order events.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from ordercore.application.dto import OrderDTO, order_dto
from ordercore.application.publishing import publish_pending
from ordercore.domain.event_sink import EventSink
from ordercore.domain.exceptions import DomainException, EntityNotFoundError
from ordercore.domain.model.order import Order
from ordercore.domain.model.transport import TransportMethod
from ordercore.domain.model.value_objects import Money
from ordercore.domain.repository.cart_repository import CartRepository
from ordercore.domain.repository.order_repository import OrderRepository
from ordercore.domain.service.cart_checkout import CartCheckoutService
from ordercore.domain.service.delivery_policy import DeliveryPolicyService

logger = structlog.get_logger(__name__)


class CheckoutCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        checkout_service: CartCheckoutService,
        delivery_policy: DeliveryPolicyService,
        event_sink: EventSink,
    ) -> None:
        self._cart_repo = cart_repo
        self._order_repo = order_repo
        self._checkout_service = checkout_service
        self._delivery_policy = delivery_policy
        self._event_sink = event_sink

    def handle(
        self,
        customer_id: str,
        delivery_cost: str | int | Decimal,
        transport_method: TransportMethod | str | None = None,
        delivery_notes: str | None = None,
    ) -> OrderDTO:
        cart = self._cart_repo.find_by_customer(customer_id)
        if cart is None:
            raise EntityNotFoundError(f"No active cart for customer '{customer_id}'")

        checkout = cart.checkout(self._checkout_service)
        try:
            order = Order.create(
                order_id=self._order_repo.next_identity(),
                checkout=checkout,
                delivery_cost=Money.of(delivery_cost, cart.currency),
                delivery_policy=self._delivery_policy,
                transport_method=transport_method,
                delivery_notes=delivery_notes,
            )
        except DomainException:
            # The cart stays active, so its CartCheckedOut event must not leak out later.
            cart.pull_events()
            raise

        self._order_repo.save(order)
        self._cart_repo.remove(cart.id)
        publish_pending(self._event_sink, cart, order)

        logger.info(
            "order_created",
            order_id=order.id,
            cart_id=cart.id,
            customer_id=order.customer_id,
            total_cost=str(order.total_cost),
            transport_method=order.transport_method.value,
        )
        return order_dto(order)
