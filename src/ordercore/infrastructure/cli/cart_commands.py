"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from ordercore.application.abandon_cart import AbandonCartHandler
from ordercore.application.add_cart_item import AddCartItemHandler
from ordercore.application.checkout_cart import CheckoutCartHandler
from ordercore.application.clear_cart import ClearCartHandler
from ordercore.application.remove_cart_item import RemoveCartItemHandler
from ordercore.application.show_cart import ShowCartHandler
from ordercore.application.update_cart_item import UpdateCartItemHandler
from ordercore.domain.exceptions import DomainException
from ordercore.domain.model.transport import TransportMethod
from ordercore.infrastructure import bootstrap
from ordercore.infrastructure.cli.display import display_cart, display_order
from ordercore.infrastructure.config import Settings

pass_settings = click.make_pass_decorator(Settings)


@click.command("add")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--name", "product_name", required=True, help="Product name at the time of adding.")
@click.option("--qty", "quantity", required=True, type=int, help="Units to add.")
@click.option("--price", required=True, help="Unit price, e.g. 15.00.")
@click.option("--weight", required=True, help="Unit weight in kg.")
@pass_settings
def cart_add(
    settings: Settings,
    customer: str,
    product_id: str,
    product_name: str,
    quantity: int,
    price: str,
    weight: str,
) -> None:
    """Add a product to the customer's cart (opens a cart if needed)."""
    handler = AddCartItemHandler(
        cart_repo=bootstrap.cart_repository(settings),
        event_sink=bootstrap.event_sink(),
        currency=settings.currency,
    )

    try:
        dto = handler.handle(customer, product_id, product_name, quantity, price, weight)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("remove")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--product-id", required=True, help="Product ID to remove.")
@pass_settings
def cart_remove(settings: Settings, customer: str, product_id: str) -> None:
    """Remove a product line from the cart."""
    handler = RemoveCartItemHandler(
        bootstrap.cart_repository(settings), bootstrap.event_sink()
    )

    try:
        dto = handler.handle(customer, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("update")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--product-id", required=True, help="Product ID to change.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (1 or more).")
@pass_settings
def cart_update(settings: Settings, customer: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a product already in the cart."""
    handler = UpdateCartItemHandler(
        bootstrap.cart_repository(settings), bootstrap.event_sink()
    )

    try:
        dto = handler.handle(customer, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("show")
@click.option("--customer", required=True, help="Customer ID.")
@pass_settings
def cart_show(settings: Settings, customer: str) -> None:
    """Show the customer's cart."""
    handler = ShowCartHandler(bootstrap.cart_repository(settings))

    try:
        dto = handler.handle(customer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("clear")
@click.option("--customer", required=True, help="Customer ID.")
@pass_settings
def cart_clear(settings: Settings, customer: str) -> None:
    """Remove every item but keep the cart."""
    handler = ClearCartHandler(bootstrap.cart_repository(settings), bootstrap.event_sink())

    try:
        handler.handle(customer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart for {customer} cleared.")


@click.command("abandon")
@click.option("--customer", required=True, help="Customer ID.")
@pass_settings
def cart_abandon(settings: Settings, customer: str) -> None:
    """Delete the customer's cart."""
    handler = AbandonCartHandler(bootstrap.cart_repository(settings))

    try:
        cart_id = handler.handle(customer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {cart_id} abandoned.")


@click.command("checkout")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--delivery-cost", required=True, help="Delivery cost, e.g. 3.00.")
@click.option(
    "--transport",
    type=click.Choice([m.value for m in TransportMethod], case_sensitive=False),
    default=None,
    help="Override the weight-based transport method.",
)
@click.option("--notes", default=None, help="Delivery notes.")
@pass_settings
def cart_checkout(
    settings: Settings,
    customer: str,
    delivery_cost: str,
    transport: str | None,
    notes: str | None,
) -> None:
    """Turn the customer's cart into an order."""
    handler = CheckoutCartHandler(
        cart_repo=bootstrap.cart_repository(settings),
        order_repo=bootstrap.order_repository(settings),
        checkout_service=bootstrap.checkout_service(settings),
        delivery_policy=bootstrap.delivery_policy(settings),
        event_sink=bootstrap.event_sink(),
    )

    try:
        dto = handler.handle(
            customer,
            delivery_cost,
            transport_method=transport,
            delivery_notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created  (status={dto.status})")
    click.echo()
    display_order(dto)
