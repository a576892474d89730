"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from ordercore.domain.event_sink import EventSink
from ordercore.domain.service.cart_checkout import (
    AllowAllCheckoutService,
    CartCheckoutService,
    StockCheckingCheckoutService,
)
from ordercore.domain.service.delivery_policy import DeliveryPolicyService
from ordercore.infrastructure.config import Settings
from ordercore.infrastructure.events import LoggingEventSink
from ordercore.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from ordercore.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from ordercore.infrastructure.persistence.json_stock_levels import JsonStockLevels


def cart_repository(settings: Settings) -> JsonCartRepository:
    return JsonCartRepository(settings.data_dir / "carts.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def stock_levels(settings: Settings) -> JsonStockLevels:
    return JsonStockLevels(settings.data_dir / "stock.json")


def checkout_service(settings: Settings) -> CartCheckoutService:
    if settings.stock_check:
        return StockCheckingCheckoutService(stock_levels(settings))
    return AllowAllCheckoutService()


def delivery_policy(settings: Settings) -> DeliveryPolicyService:
    return DeliveryPolicyService(settings.transport_policy)


def event_sink() -> EventSink:
    return LoggingEventSink()
