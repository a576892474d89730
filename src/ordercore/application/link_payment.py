"""Application service: Link Payment use case.

Payment processing happens elsewhere; this only records which payment
settled the order.
"""

from __future__ import annotations

import structlog

from ordercore.application.dto import OrderDTO, order_dto
from ordercore.application.publishing import publish_pending
from ordercore.domain.event_sink import EventSink
from ordercore.domain.exceptions import EntityNotFoundError
from ordercore.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class LinkPaymentHandler:

    def __init__(self, order_repo: OrderRepository, event_sink: EventSink) -> None:
        self._order_repo = order_repo
        self._event_sink = event_sink

    def handle(self, order_id: str, payment_id: str) -> OrderDTO:
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")

        if order.link_payment(payment_id) is not None:
            self._order_repo.save(order)
            publish_pending(self._event_sink, order)
            logger.info("order_payment_linked", order_id=order.id, payment_id=order.payment_id)
        return order_dto(order)
