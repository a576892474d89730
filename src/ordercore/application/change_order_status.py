"""Application services: order status transitions.

Each handler loads the order, asks the aggregate to make one transition,
saves it and publishes the resulting event.  The aggregate rejects
anything outside its transition table before touching any state, so a
failed call leaves the stored order as it was.
"""

from __future__ import annotations

import structlog

from ordercore.application.dto import OrderDTO, order_dto
from ordercore.application.publishing import publish_pending
from ordercore.domain.event_sink import EventSink
from ordercore.domain.exceptions import EntityNotFoundError
from ordercore.domain.model.order import Order
from ordercore.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class _OrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, event_sink: EventSink) -> None:
        self._order_repo = order_repo
        self._event_sink = event_sink

    def _load(self, order_id: str) -> Order:
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        return order

    def _commit(self, order: Order, previous_status: str) -> OrderDTO:
        self._order_repo.save(order)
        publish_pending(self._event_sink, order)
        logger.info(
            "order_status_changed",
            order_id=order.id,
            previous_status=previous_status,
            status=order.status.value,
        )
        return order_dto(order)


class DispatchOrderHandler(_OrderStatusHandler):

    def handle(self, order_id: str) -> OrderDTO:
        order = self._load(order_id)
        previous = order.status.value
        order.mark_as_dispatched()
        return self._commit(order, previous)


class MarkOrderInTransitHandler(_OrderStatusHandler):

    def handle(self, order_id: str) -> OrderDTO:
        order = self._load(order_id)
        previous = order.status.value
        order.mark_as_in_transit()
        return self._commit(order, previous)


class DeliverOrderHandler(_OrderStatusHandler):

    def handle(self, order_id: str) -> OrderDTO:
        order = self._load(order_id)
        previous = order.status.value
        order.mark_as_delivered()
        return self._commit(order, previous)


class CancelOrderHandler(_OrderStatusHandler):

    def handle(self, order_id: str, reason: str | None = None) -> OrderDTO:
        order = self._load(order_id)
        previous = order.status.value
        order.cancel(reason)
        return self._commit(order, previous)
