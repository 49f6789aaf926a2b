"""CLI commands for the Item catalog."""

from __future__ import annotations

import click

from turfledger.application.archive_item import ArchiveItemHandler
from turfledger.application.create_item import CreateItemHandler
from turfledger.application.dto import ItemFilter
from turfledger.application.list_active_items import ListActiveItemsHandler
from turfledger.domain.exceptions import DomainException
from turfledger.domain.model.item import Category
from turfledger.domain.model.value_objects import format_quantity
from turfledger.infrastructure.bootstrap import (
    item_repository,
    lock_registry,
    on_hand_projector,
)

_CATEGORY_CHOICES = click.Choice([c.value for c in Category], case_sensitive=False)


@click.command("add")
@click.option("--location", required=True, help="Location (turf) ID.")
@click.option("--sku", required=True, help="SKU code, e.g. BEV001.")
@click.option("--name", required=True, help="Item name.")
@click.option("--category", required=True, type=_CATEGORY_CHOICES, help="Item category.")
@click.option("--unit", default="pcs", show_default=True, help="Unit label.")
@click.option("--cost-price", default=None, help="Cost price per unit.")
@click.option("--selling-price", default=None, help="Selling price per unit.")
@click.option("--reorder-level", default=None, help="Low-stock threshold.")
@click.option("--actor", required=True, help="ID of the user performing the change.")
def item_add(
    location: str,
    sku: str,
    name: str,
    category: str,
    unit: str,
    cost_price: str | None,
    selling_price: str | None,
    reorder_level: str | None,
    actor: str,
) -> None:
    """Add a new item to a location's catalog."""
    handler = CreateItemHandler(item_repo=item_repository(), locks=lock_registry())

    try:
        item = handler.handle(
            location_id=location,
            sku=sku,
            name=name,
            category=category,
            unit=unit,
            cost_price=cost_price,
            selling_price=selling_price,
            reorder_level=reorder_level,
            actor_id=actor,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {item.sku} '{item.name}' added (id={item.id})")


@click.command("archive")
@click.option("--id", "item_id", required=True, help="Item ID to archive.")
def item_archive(item_id: str) -> None:
    """Archive an item (history is kept)."""
    handler = ArchiveItemHandler(item_repo=item_repository(), locks=lock_registry())

    try:
        handler.handle(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {item_id} archived.")


@click.command("list")
@click.option("--location", required=True, help="Location (turf) ID.")
@click.option("--category", default=None, type=_CATEGORY_CHOICES, help="Only this category.")
@click.option("--search", default=None, help="Match name or SKU.")
@click.option("--low-stock", is_flag=True, default=False, help="Only items at or below reorder level.")
def item_list(location: str, category: str | None, search: str | None, low_stock: bool) -> None:
    """List active items with stock on hand."""
    handler = ListActiveItemsHandler(
        item_repo=item_repository(),
        projector=on_hand_projector(),
    )
    item_filter = ItemFilter(
        category=Category.parse(category) if category else None,
        search_text=search,
        low_stock_only=low_stock,
    )

    try:
        lines = handler.handle(location, item_filter)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No items found.")
        return

    click.echo(
        f"{'SKU':<10} {'Name':<22} {'Category':<10} {'In':>8} {'Out':>8} {'On hand':>9} {'Reorder':>8}"
    )
    click.echo("-" * 81)
    for line in lines:
        reorder = (
            format_quantity(line.item.reorder_level)
            if line.item.reorder_level is not None
            else "-"
        )
        flag = "  LOW" if line.is_low_stock else ""
        click.echo(
            f"{line.item.sku:<10} {line.item.name:<22} {line.item.category.value:<10} "
            f"{format_quantity(line.total_in):>8} {format_quantity(line.total_out):>8} "
            f"{format_quantity(line.on_hand):>9} {reorder:>8}{flag}"
        )
