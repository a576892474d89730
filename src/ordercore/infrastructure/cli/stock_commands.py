"""CLI commands for the stock levels consulted at checkout."""

from __future__ import annotations

import click

from ordercore.domain.exceptions import DomainException
from ordercore.infrastructure import bootstrap
from ordercore.infrastructure.config import Settings

pass_settings = click.make_pass_decorator(Settings)


@click.command("set")
@click.option("--product-id", required=True, help="Product ID.")
@click.option("--qty", "quantity", required=True, type=int, help="Units available.")
@pass_settings
def stock_set(settings: Settings, product_id: str, quantity: int) -> None:
    """Set the available units for a product."""
    try:
        bootstrap.stock_levels(settings).set_available(product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product_id}' set to {quantity}")


@click.command("show")
@pass_settings
def stock_show(settings: Settings) -> None:
    """Show available units per product."""
    levels = bootstrap.stock_levels(settings).list_all()

    if not levels:
        click.echo("No stock records found.")
        return

    click.echo(f"{'Product':<20} {'Available':>10}")
    click.echo("-" * 31)
    for product_id, quantity in sorted(levels.items()):
        click.echo(f"{product_id:<20} {quantity:>10}")
