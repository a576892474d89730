"""Tests for the structlog-backed event sink."""

import structlog
from structlog.testing import capture_logs

from ordercore.application.publishing import publish_pending
from ordercore.domain.events import OrderDispatched
from ordercore.domain.model.cart import Cart
from ordercore.domain.model.order_status import OrderStatus
from ordercore.domain.model.value_objects import Money, Weight
from ordercore.infrastructure.events import LoggingEventSink
from ordercore.infrastructure.logging import configure_logging
from tests.fakes import FailingEventSink


def test_event_logged_with_its_fields():
    event = OrderDispatched(
        order_id="order-1",
        previous_status=OrderStatus.CREATED,
        status=OrderStatus.DISPATCHED,
    )
    with capture_logs() as logs:
        LoggingEventSink().publish(event)

    [entry] = logs
    assert entry["event"] == "domain_event"
    assert entry["event_type"] == "OrderDispatched"
    assert entry["order_id"] == "order-1"
    assert entry["status"] == "DISPATCHED"


def test_failed_publish_is_logged_not_raised():
    cart = Cart.create("cart-1", "alice")
    cart.add_item("P1", "Kettle", 1, Money.of("5"), Weight.of("1"))
    sink = FailingEventSink()

    with capture_logs() as logs:
        events = publish_pending(sink, cart)

    assert [e.name for e in events] == ["CartItemAdded"]
    assert sink.attempts == 1
    assert logs[0]["event"] == "event_publish_failed"
    assert logs[0]["event_type"] == "CartItemAdded"
    assert logs[0]["log_level"] == "error"


def test_configure_logging_json(capsys):
    configure_logging("INFO", json=True)
    structlog.get_logger("ordercore.test").info("hello", answer=42)
    err = capsys.readouterr().err
    assert '"event": "hello"' in err
    assert '"answer": 42' in err


def test_failed_publish_with_configured_logging(capsys):
    configure_logging("INFO", json=True)
    cart = Cart.create("cart-1", "alice")
    cart.add_item("P1", "Kettle", 1, Money.of("5"), Weight.of("1"))
    cart.clear()
    sink = FailingEventSink()

    events = publish_pending(sink, cart)

    assert [e.name for e in events] == ["CartItemAdded", "CartCleared"]
    assert sink.attempts == 2
    err = capsys.readouterr().err
    assert '"event": "event_publish_failed"' in err
    assert '"event_type": "CartCleared"' in err
    assert "ConnectionError" in err
