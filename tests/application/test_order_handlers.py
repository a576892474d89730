"""Integration tests for order status, payment and query use cases."""

import pytest

from ordercore.application.change_order_status import (
    CancelOrderHandler,
    DeliverOrderHandler,
    DispatchOrderHandler,
    MarkOrderInTransitHandler,
)
from ordercore.application.link_payment import LinkPaymentHandler
from ordercore.application.show_order import ListCustomerOrdersHandler, ShowOrderHandler
from ordercore.domain.exceptions import EntityNotFoundError, InvalidStateTransition
from ordercore.domain.model.cart import Cart
from ordercore.domain.model.order import Order
from ordercore.domain.model.order_status import OrderStatus
from ordercore.domain.model.value_objects import Money, Weight
from ordercore.domain.service.cart_checkout import AllowAllCheckoutService
from ordercore.domain.service.delivery_policy import DeliveryPolicyService
from tests.fakes import FailingEventSink, FakeOrderRepository, RecordingEventSink


def _setup(customer: str = "alice"):
    order_repo = FakeOrderRepository()
    sink = RecordingEventSink()
    cart = Cart.create("cart-1", customer)
    cart.add_item("P1", "Kettle", 1, Money.of("25"), Weight.of("1"))
    order = Order.create(
        order_repo.next_identity(),
        cart.checkout(AllowAllCheckoutService()),
        Money.of("5"),
        DeliveryPolicyService(),
    )
    order.pull_events()
    order_repo.save(order)
    return order_repo, sink, order.id


class TestStatusHandlers:

    def test_full_delivery(self):
        order_repo, sink, order_id = _setup()
        DispatchOrderHandler(order_repo, sink).handle(order_id)
        MarkOrderInTransitHandler(order_repo, sink).handle(order_id)
        dto = DeliverOrderHandler(order_repo, sink).handle(order_id)

        assert dto.status == "DELIVERED"
        assert order_repo.find_by_id(order_id).status == OrderStatus.DELIVERED
        assert sink.names == ["OrderDispatched", "OrderInTransit", "OrderDelivered"]

    def test_cancel_with_reason(self):
        order_repo, sink, order_id = _setup()
        dto = CancelOrderHandler(order_repo, sink).handle(order_id, reason="duplicate")
        assert dto.status == "CANCELLED"
        assert sink.events[0].reason == "duplicate"

    def test_cancelled_order_cannot_be_dispatched(self):
        order_repo, sink, order_id = _setup()
        CancelOrderHandler(order_repo, sink).handle(order_id)
        with pytest.raises(InvalidStateTransition):
            DispatchOrderHandler(order_repo, sink).handle(order_id)
        assert order_repo.find_by_id(order_id).status == OrderStatus.CANCELLED
        assert sink.names == ["OrderCancelled"]

    def test_skipping_a_state_is_rejected(self):
        order_repo, sink, order_id = _setup()
        with pytest.raises(InvalidStateTransition):
            DeliverOrderHandler(order_repo, sink).handle(order_id)
        assert sink.events == []

    def test_in_transit_cannot_be_cancelled(self):
        order_repo, sink, order_id = _setup()
        DispatchOrderHandler(order_repo, sink).handle(order_id)
        MarkOrderInTransitHandler(order_repo, sink).handle(order_id)
        with pytest.raises(InvalidStateTransition):
            CancelOrderHandler(order_repo, sink).handle(order_id)
        assert order_repo.find_by_id(order_id).status == OrderStatus.IN_TRANSIT

    def test_unknown_order(self):
        order_repo, sink, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            DispatchOrderHandler(order_repo, sink).handle("order-999")

    def test_sink_failure_does_not_fail_transition(self):
        order_repo, _, order_id = _setup()
        dto = DispatchOrderHandler(order_repo, FailingEventSink()).handle(order_id)
        assert dto.status == "DISPATCHED"
        assert order_repo.find_by_id(order_id).status == OrderStatus.DISPATCHED


class TestLinkPayment:

    def test_links_payment(self):
        order_repo, sink, order_id = _setup()
        dto = LinkPaymentHandler(order_repo, sink).handle(order_id, "pay-42")
        assert dto.payment_id == "pay-42"
        assert sink.names == ["OrderPaymentLinked"]

    def test_relinking_same_payment_publishes_nothing(self):
        order_repo, sink, order_id = _setup()
        handler = LinkPaymentHandler(order_repo, sink)
        handler.handle(order_id, "pay-42")
        handler.handle(order_id, "pay-42")
        assert sink.names == ["OrderPaymentLinked"]


class TestQueries:

    def test_show_order(self):
        order_repo, _, order_id = _setup()
        dto = ShowOrderHandler(order_repo).handle(order_id)
        assert dto.total_cost == "$30.00"
        assert dto.delivery_cost == "$5.00"
        assert dto.transport_method == "BIKE"
        assert dto.items[0].product_name == "Kettle"

    def test_show_missing_order(self):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(FakeOrderRepository()).handle("order-1")

    def test_list_customer_orders(self):
        order_repo, _, order_id = _setup()
        assert [o.id for o in ListCustomerOrdersHandler(order_repo).handle("alice")] == [order_id]
        assert ListCustomerOrdersHandler(order_repo).handle("bob") == []
