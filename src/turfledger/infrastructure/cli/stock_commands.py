"""CLI commands for stock movements.

Items are addressed by location and SKU on the command line and resolved
to item IDs before any handler runs.
"""

from __future__ import annotations

import click

from turfledger.application.item_history import ItemHistoryHandler
from turfledger.application.record_movement import RecordMovementHandler
from turfledger.application.record_opening_stock import RecordOpeningStockHandler
from turfledger.config.settings import get_settings
from turfledger.domain.exceptions import DomainException
from turfledger.domain.model.item import Item
from turfledger.domain.model.movement import AdjustmentReason, Movement
from turfledger.domain.model.value_objects import format_quantity
from turfledger.infrastructure.bootstrap import (
    item_repository,
    lock_registry,
    movement_ledger,
    movement_repository,
    on_hand_projector,
)


def _resolve_item(location: str, sku: str) -> Item:
    item = item_repository().get_by_sku(location, sku)
    if item is None:
        raise click.ClickException(f"No item with SKU '{sku}' at location '{location}'")
    return item


def _parse_quantities(location: str, raw: str) -> dict[str, str]:
    """Parse 'BEV001:50,EQP002:10' into {item_id: quantity}."""
    result: dict[str, str] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'SKU:Quantity'."
            )
        sku, qty = pair.rsplit(":", 1)
        result[_resolve_item(location, sku.strip()).id] = qty.strip()
    return result


def _echo_movement(item: Item, movement: Movement) -> None:
    sign = "+" if movement.is_inbound else "-"
    click.echo(
        f"{movement.movement_type.label}: {sign}{movement.quantity} {item.unit} "
        f"of {item.name} recorded."
    )


_location_option = click.option("--location", required=True, help="Location (turf) ID.")
_sku_option = click.option("--sku", required=True, help="Item SKU code.")
_actor_option = click.option("--actor", required=True, help="ID of the user recording the movement.")


@click.command("opening")
@_location_option
@click.option("--items", required=True, help="Opening quantities as 'SKU:Qty,SKU:Qty'.")
@_actor_option
def stock_opening(location: str, items: str, actor: str) -> None:
    """Record opening stock for several items at once."""
    quantities = _parse_quantities(location, items)
    handler = RecordOpeningStockHandler(ledger=movement_ledger(), item_repo=item_repository())

    try:
        movements = handler.handle(location, quantities, actor_id=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Opening stock recorded for {len(movements)} item(s).")


@click.command("receive")
@_location_option
@_sku_option
@click.option("--quantity", required=True, help="Quantity received.")
@click.option("--notes", default=None, help="e.g. supplier or invoice reference.")
@_actor_option
def stock_receive(location: str, sku: str, quantity: str, notes: str | None, actor: str) -> None:
    """Record goods received (stock in)."""
    item = _resolve_item(location, sku)
    handler = RecordMovementHandler(ledger=movement_ledger())

    try:
        movement = handler.receive(item.id, quantity, actor_id=actor, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_movement(item, movement)


@click.command("sell")
@_location_option
@_sku_option
@click.option("--quantity", required=True, help="Quantity sold.")
@click.option("--notes", default=None, help="e.g. customer or booking reference.")
@_actor_option
def stock_sell(location: str, sku: str, quantity: str, notes: str | None, actor: str) -> None:
    """Record a sale (stock out)."""
    item = _resolve_item(location, sku)
    handler = RecordMovementHandler(ledger=movement_ledger())

    try:
        movement = handler.sell(item.id, quantity, actor_id=actor, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_movement(item, movement)


@click.command("adjust")
@_location_option
@_sku_option
@click.option("--direction", required=True, type=click.Choice(["IN", "OUT"], case_sensitive=False))
@click.option("--quantity", required=True, help="Correction amount.")
@click.option(
    "--reason",
    required=True,
    type=click.Choice([r.value for r in AdjustmentReason], case_sensitive=False),
)
@click.option("--details", default=None, help="Free-text explanation.")
@_actor_option
def stock_adjust(
    location: str,
    sku: str,
    direction: str,
    quantity: str,
    reason: str,
    details: str | None,
    actor: str,
) -> None:
    """Record a manual stock adjustment."""
    item = _resolve_item(location, sku)
    handler = RecordMovementHandler(ledger=movement_ledger())

    try:
        movement = handler.adjust(
            item.id, direction, quantity, reason, actor_id=actor, details=details
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_movement(item, movement)


@click.command("show")
@_location_option
@_sku_option
def stock_show(location: str, sku: str) -> None:
    """Show current stock for one item."""
    item = _resolve_item(location, sku)

    try:
        state = on_hand_projector().get_on_hand(item.id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    last = state.last_movement_at.strftime("%Y-%m-%d %H:%M UTC") if state.last_movement_at else "never"
    click.echo(f"{item.sku}  {item.name}  ({item.status.value.lower()})")
    click.echo(f"  Total in:      {format_quantity(state.total_in)} {item.unit}")
    click.echo(f"  Total out:     {format_quantity(state.total_out)} {item.unit}")
    click.echo(f"  On hand:       {format_quantity(state.on_hand)} {item.unit}")
    click.echo(f"  Last movement: {last}")


@click.command("history")
@_location_option
@_sku_option
@click.option("--limit", type=int, default=None, help="Number of movements to show.")
def stock_history(location: str, sku: str, limit: int | None) -> None:
    """Show an item's most recent movements."""
    item = _resolve_item(location, sku)
    handler = ItemHistoryHandler(item_repo=item_repository(), movement_repo=movement_repository())

    try:
        movements = handler.handle(item.id, limit or get_settings().report.history_limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo("No movements recorded yet.")
        return

    click.echo(f"{'When':<17} {'Type':<14} {'Qty':>10}  {'By':<12} Notes")
    click.echo("-" * 70)
    for m in movements:
        sign = "+" if m.is_inbound else "-"
        click.echo(
            f"{m.created_at.strftime('%Y-%m-%d %H:%M'):<17} {m.movement_type.label:<14} "
            f"{sign + str(m.quantity):>10}  {m.actor_id:<12} {m.notes or ''}"
        )


@click.command("verify")
@_location_option
@click.option("--repair", is_flag=True, default=False, help="Rebuild drifted projections.")
def stock_verify(location: str, repair: bool) -> None:
    """Check cached stock levels against a replay of the ledger."""
    projector = on_hand_projector()

    try:
        drifts = projector.verify(location)
        if repair:
            locks = lock_registry()
            for drift in drifts:
                with locks.hold(drift.item_id):
                    projector.rebuild(drift.item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not drifts:
        click.echo("All cached stock levels match the ledger.")
        return

    for drift in drifts:
        click.echo(
            f"Item {drift.item_id}: cached {format_quantity(drift.cached.on_hand)}, "
            f"ledger {format_quantity(drift.replayed.on_hand)}"
        )
    if repair:
        click.echo(f"Rebuilt {len(drifts)} projection(s).")
    else:
        raise click.ClickException(f"{len(drifts)} projection(s) out of step with the ledger")
