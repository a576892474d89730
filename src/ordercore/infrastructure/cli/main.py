import click

from ordercore.domain.exceptions import DomainException
from ordercore.infrastructure.cli.cart_commands import (
    cart_abandon,
    cart_add,
    cart_checkout,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from ordercore.infrastructure.cli.order_commands import (
    order_cancel,
    order_deliver,
    order_dispatch,
    order_in_transit,
    order_list,
    order_pay,
    order_show,
)
from ordercore.infrastructure.cli.stock_commands import stock_set, stock_show
from ordercore.infrastructure.config import Settings
from ordercore.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """ordercore: carts, checkout and order delivery tracking"""
    try:
        settings = Settings.from_env()
    except DomainException as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    configure_logging(settings.log_level, json=settings.log_json)
    ctx.obj = settings


@cli.group()
def cart() -> None:
    """Manage a customer's cart."""


@cli.group()
def order() -> None:
    """Track and update orders."""


@cli.group()
def stock() -> None:
    """Maintain the stock levels consulted at checkout."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_update)
cart.add_command(cart_show)
cart.add_command(cart_clear)
cart.add_command(cart_abandon)
cart.add_command(cart_checkout)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_dispatch)
order.add_command(order_in_transit)
order.add_command(order_deliver)
order.add_command(order_cancel)
order.add_command(order_pay)
stock.add_command(stock_set)
stock.add_command(stock_show)
