"""Shared formatting for cart and order output."""

from __future__ import annotations

import click

from ordercore.application.dto import CartDTO, LineItemDTO, OrderDTO


def _echo_items(items: list[LineItemDTO]) -> None:
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Weight':>10} {'Subtotal':>12}")
    click.echo(f"  {'-'*61}")
    for item in items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} "
            f"{item.weight:>10} {item.subtotal:>12}"
        )
    click.echo(f"  {'-'*61}")


def display_cart(dto: CartDTO) -> None:
    click.echo(f"Cart {dto.id}  (customer={dto.customer_id})")
    click.echo(f"Updated: {dto.updated_at}")
    click.echo()
    if not dto.items:
        click.echo("  (empty)")
        return
    _echo_items(dto.items)
    click.echo(f"  {'Total weight':<27} {dto.total_weight:>35}")
    click.echo(f"  {'Cart Total':<27} {dto.total_cost:>35}")


def display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Delivery: {dto.transport_method}, expected {dto.estimated_delivery}")
    if dto.delivery_notes:
        click.echo(f"Notes:    {dto.delivery_notes}")
    if dto.payment_id:
        click.echo(f"Payment:  {dto.payment_id}")
    click.echo()
    _echo_items(dto.items)
    click.echo(f"  {'Delivery':<27} {dto.delivery_cost:>35}")
    click.echo(f"  {'Order Total':<27} {dto.total_cost:>35}")
