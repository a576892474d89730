"""End-to-end tests for the click CLI against JSON files in tmp_path."""

import re

import pytest
from click.testing import CliRunner

from ordercore.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {"ORDERCORE_DATA_DIR": str(tmp_path), "LOG_LEVEL": "CRITICAL"}

    def _run(*args: str):
        return runner.invoke(cli, list(args), env=env)

    return _run


def _add(run, product_id: str, qty: int, price: str, weight: str = "1"):
    return run(
        "cart", "add",
        "--customer", "alice",
        "--product-id", product_id,
        "--name", f"Product {product_id}",
        "--qty", str(qty),
        "--price", price,
        "--weight", weight,
    )


def _checkout(run, *extra: str) -> str:
    result = run("cart", "checkout", "--customer", "alice", "--delivery-cost", "300", *extra)
    assert result.exit_code == 0, result.output
    return re.search(r"Order (order-\w+) created", result.output).group(1)


def test_cart_to_delivered_order(run):
    run("stock", "set", "--product-id", "P1", "--qty", "10")
    run("stock", "set", "--product-id", "P2", "--qty", "10")
    _add(run, "P1", 2, "1000")
    _add(run, "P2", 1, "500")
    result = _add(run, "P1", 1, "1000")
    assert result.exit_code == 0, result.output
    assert "$3500.00" in result.output

    order_id = _checkout(run)

    shown = run("order", "show", "--id", order_id)
    assert "status=CREATED" in shown.output
    assert "$3800.00" in shown.output

    for command in ("dispatch", "in-transit", "deliver"):
        result = run("order", command, "--id", order_id)
        assert result.exit_code == 0, result.output
    assert "status=DELIVERED" in result.output

    assert "No active cart" in run("cart", "show", "--customer", "alice").output


def test_checkout_blocked_without_stock(run):
    _add(run, "P1", 1, "10")
    result = run("cart", "checkout", "--customer", "alice", "--delivery-cost", "1")
    assert result.exit_code == 1
    assert "cannot be checked out" in result.output


def test_checkout_without_stock_check(run, tmp_path):
    runner = CliRunner()
    env = {
        "ORDERCORE_DATA_DIR": str(tmp_path),
        "ORDERCORE_STOCK_CHECK": "0",
        "LOG_LEVEL": "CRITICAL",
    }
    _add(run, "P1", 1, "10")
    result = runner.invoke(
        cli,
        ["cart", "checkout", "--customer", "alice", "--delivery-cost", "1", "--transport", "car"],
        env=env,
    )
    assert result.exit_code == 0, result.output
    assert "CAR" in result.output


def test_invalid_transition_reports_error(run):
    run("stock", "set", "--product-id", "P1", "--qty", "5")
    _add(run, "P1", 1, "10")
    order_id = _checkout(run)

    assert run("order", "cancel", "--id", order_id, "--reason", "changed mind").exit_code == 0
    result = run("order", "dispatch", "--id", order_id)
    assert result.exit_code == 1
    assert "CANCELLED to DISPATCHED" in result.output


def test_invalid_quantity_reports_error(run):
    result = _add(run, "P1", 0, "10")
    assert result.exit_code == 1
    assert "Quantity must be at least 1" in result.output


def test_payment_and_listing(run):
    run("stock", "set", "--product-id", "P1", "--qty", "5")
    _add(run, "P1", 1, "10")
    order_id = _checkout(run)

    result = run("order", "pay", "--id", order_id, "--payment-id", "pay-9")
    assert result.exit_code == 0, result.output
    assert "pay-9" in result.output

    listing = run("order", "list", "--customer", "alice")
    assert order_id in listing.output
    assert "No orders" in run("order", "list", "--customer", "bob").output


def test_cart_editing(run):
    _add(run, "P1", 2, "10")
    _add(run, "P2", 1, "5")
    assert "$35.00" in run("cart", "update", "--customer", "alice", "--product-id", "P1", "--qty", "3").output
    assert "$30.00" in run("cart", "remove", "--customer", "alice", "--product-id", "P2").output
    assert run("cart", "clear", "--customer", "alice").exit_code == 0
    assert "(empty)" in run("cart", "show", "--customer", "alice").output
    assert "abandoned" in run("cart", "abandon", "--customer", "alice").output


def test_bad_configuration(tmp_path):
    result = CliRunner().invoke(
        cli,
        ["order", "list", "--customer", "alice"],
        env={"ORDERCORE_DATA_DIR": str(tmp_path), "ORDERCORE_CAR_MAX_WEIGHT": "1"},
    )
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_stock_listing(run):
    assert "No stock records" in run("stock", "show").output
    run("stock", "set", "--product-id", "P2", "--qty", "4")
    assert run("stock", "set", "--product-id", "P1", "--qty", "-1").exit_code == 1

    listing = run("stock", "show").output
    assert "P2" in listing
    assert "P1" not in listing


def test_out_of_range_duration_reported(tmp_path):
    result = CliRunner().invoke(
        cli,
        ["order", "list", "--customer", "alice"],
        env={"ORDERCORE_DATA_DIR": str(tmp_path), "ORDERCORE_BIKE_DELIVERY_HOURS": "1e30"},
    )
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
