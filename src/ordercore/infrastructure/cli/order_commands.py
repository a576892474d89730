"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from ordercore.application.change_order_status import (
    CancelOrderHandler,
    DeliverOrderHandler,
    DispatchOrderHandler,
    MarkOrderInTransitHandler,
)
from ordercore.application.link_payment import LinkPaymentHandler
from ordercore.application.show_order import ListCustomerOrdersHandler, ShowOrderHandler
from ordercore.domain.exceptions import DomainException
from ordercore.infrastructure import bootstrap
from ordercore.infrastructure.cli.display import display_order
from ordercore.infrastructure.config import Settings

pass_settings = click.make_pass_decorator(Settings)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@pass_settings
def order_show(settings: Settings, order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=bootstrap.order_repository(settings))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)


@click.command("list")
@click.option("--customer", required=True, help="Customer ID.")
@pass_settings
def order_list(settings: Settings, customer: str) -> None:
    """List a customer's orders."""
    handler = ListCustomerOrdersHandler(order_repo=bootstrap.order_repository(settings))
    orders = handler.handle(customer)
    if not orders:
        click.echo(f"No orders for {customer}.")
        return
    for dto in orders:
        click.echo(f"{dto.id:<20} {dto.status:<12} {dto.total_cost:>12}  {dto.created_at}")


def _run_transition(handler, order_id: str, message: str, **kwargs) -> None:
    try:
        dto = handler.handle(order_id, **kwargs)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Order {dto.id} {message}  (status={dto.status})")


@click.command("dispatch")
@click.option("--id", "order_id", required=True, help="Order ID to dispatch.")
@pass_settings
def order_dispatch(settings: Settings, order_id: str) -> None:
    """Mark an order as dispatched."""
    handler = DispatchOrderHandler(bootstrap.order_repository(settings), bootstrap.event_sink())
    _run_transition(handler, order_id, "dispatched")


@click.command("in-transit")
@click.option("--id", "order_id", required=True, help="Order ID.")
@pass_settings
def order_in_transit(settings: Settings, order_id: str) -> None:
    """Mark a dispatched order as in transit."""
    handler = MarkOrderInTransitHandler(
        bootstrap.order_repository(settings), bootstrap.event_sink()
    )
    _run_transition(handler, order_id, "in transit")


@click.command("deliver")
@click.option("--id", "order_id", required=True, help="Order ID.")
@pass_settings
def order_deliver(settings: Settings, order_id: str) -> None:
    """Mark an order in transit as delivered."""
    handler = DeliverOrderHandler(bootstrap.order_repository(settings), bootstrap.event_sink())
    _run_transition(handler, order_id, "delivered")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--reason", default=None, help="Why the order is cancelled.")
@pass_settings
def order_cancel(settings: Settings, order_id: str, reason: str | None) -> None:
    """Cancel an order that has not left for delivery yet."""
    handler = CancelOrderHandler(bootstrap.order_repository(settings), bootstrap.event_sink())
    _run_transition(handler, order_id, "cancelled", reason=reason)


@click.command("pay")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--payment-id", required=True, help="ID of the completed payment.")
@pass_settings
def order_pay(settings: Settings, order_id: str, payment_id: str) -> None:
    """Link a completed payment to an order."""
    handler = LinkPaymentHandler(bootstrap.order_repository(settings), bootstrap.event_sink())

    try:
        dto = handler.handle(order_id, payment_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} linked to payment {dto.payment_id}.")
