"""Integration tests for the CheckoutCart use case."""

import pytest

from ordercore.application.add_cart_item import AddCartItemHandler
from ordercore.application.checkout_cart import CheckoutCartHandler
from ordercore.domain.exceptions import (
    CheckoutNotAllowed,
    EmptyCart,
    EntityNotFoundError,
    InvalidDeliveryCost,
)
from ordercore.domain.model.order_status import OrderStatus
from ordercore.domain.model.transport import TransportMethod
from ordercore.domain.model.value_objects import Money
from ordercore.domain.service.cart_checkout import StockCheckingCheckoutService
from ordercore.domain.service.delivery_policy import DeliveryPolicyService
from tests.fakes import (
    FailingEventSink,
    FakeCartRepository,
    FakeOrderRepository,
    FakeStockLevels,
    RecordingEventSink,
)


def _setup(stock: dict[str, int] | None = None, sink=None):
    cart_repo = FakeCartRepository()
    order_repo = FakeOrderRepository()
    sink = sink or RecordingEventSink()
    levels = FakeStockLevels({"P1": 100, "P2": 100} if stock is None else stock)
    checkout = CheckoutCartHandler(
        cart_repo,
        order_repo,
        StockCheckingCheckoutService(levels),
        DeliveryPolicyService(),
        sink,
    )
    add = AddCartItemHandler(cart_repo, sink)
    return add, checkout, cart_repo, order_repo, sink


class TestCheckoutHappyPath:

    def test_scenario(self):
        add, checkout, cart_repo, order_repo, _ = _setup()
        add.handle("alice", "P1", "Kettle", 2, "1000", "1")
        add.handle("alice", "P2", "Mug", 1, "500", "1")
        add.handle("alice", "P1", "Kettle", 1, "1000", "1")

        dto = checkout.handle("alice", "300")

        assert dto.total_cost == "$3800.00"
        assert dto.status == "CREATED"
        order = order_repo.find_by_id(dto.id)
        assert order.status == OrderStatus.CREATED
        assert order.total_cost == Money.of("3800")
        assert order.calculate_total_cost() == order.total_cost
        assert [i.quantity.value for i in order.items] == [3, 1]

    def test_cart_is_removed(self):
        add, checkout, cart_repo, _, _ = _setup()
        add.handle("alice", "P1", "Kettle", 1, "10", "1")
        dto = checkout.handle("alice", "0")
        assert cart_repo.find_by_customer("alice") is None
        assert cart_repo.find_by_id(dto.cart_id) is None

    def test_publishes_cart_then_order_events(self):
        add, checkout, _, _, sink = _setup()
        add.handle("alice", "P1", "Kettle", 1, "10", "1")
        sink.events.clear()
        checkout.handle("alice", "2")
        assert sink.names == ["CartCheckedOut", "OrderCreated"]

    def test_transport_override_and_notes(self):
        add, checkout, _, order_repo, _ = _setup()
        add.handle("alice", "P1", "Kettle", 1, "10", "1")
        dto = checkout.handle("alice", "5", transport_method="TRUCK", delivery_notes="Gate code 12")
        order = order_repo.find_by_id(dto.id)
        assert order.transport_method == TransportMethod.TRUCK
        assert order.delivery_notes == "Gate code 12"

    def test_sink_failure_does_not_undo_checkout(self):
        sink = FailingEventSink()
        add, checkout, cart_repo, order_repo, _ = _setup(sink=sink)
        add.handle("alice", "P1", "Kettle", 1, "10", "1")
        dto = checkout.handle("alice", "1")
        assert order_repo.find_by_id(dto.id) is not None
        assert cart_repo.find_by_customer("alice") is None
        assert sink.attempts == 3  # CartItemAdded, CartCheckedOut, OrderCreated


class TestCheckoutFailures:

    def test_no_cart(self):
        _, checkout, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            checkout.handle("alice", "1")

    def test_empty_cart_builds_no_order(self):
        add, checkout, cart_repo, order_repo, _ = _setup()
        add.handle("alice", "P1", "Kettle", 1, "10", "1")
        cart_repo.find_by_customer("alice").remove_item("P1")
        with pytest.raises(EmptyCart):
            checkout.handle("alice", "1")
        assert order_repo.all() == []
        assert cart_repo.find_by_customer("alice") is not None

    def test_out_of_stock(self):
        add, checkout, cart_repo, order_repo, _ = _setup(stock={"P1": 1})
        add.handle("alice", "P1", "Kettle", 2, "10", "1")
        with pytest.raises(CheckoutNotAllowed):
            checkout.handle("alice", "1")
        assert order_repo.all() == []
        assert cart_repo.find_by_customer("alice") is not None

    def test_negative_delivery_cost_keeps_cart(self):
        add, checkout, cart_repo, order_repo, sink = _setup()
        add.handle("alice", "P1", "Kettle", 1, "10", "1")
        sink.events.clear()
        with pytest.raises(InvalidDeliveryCost):
            checkout.handle("alice", "-1")
        assert order_repo.all() == []
        assert cart_repo.find_by_customer("alice") is not None
        assert cart_repo.find_by_customer("alice").pending_events == ()
        assert sink.events == []
