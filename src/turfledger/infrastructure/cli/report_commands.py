"""CLI commands for inventory reports."""

from __future__ import annotations

from datetime import datetime

import click

from turfledger.application.inventory_overview import InventoryOverviewHandler
from turfledger.application.low_stock_report import LowStockReportHandler
from turfledger.application.movement_summary import MovementSummaryHandler
from turfledger.application.stock_valuation import StockValuationHandler
from turfledger.application.top_selling import TopSellingHandler
from turfledger.config.settings import get_settings
from turfledger.domain.exceptions import DomainException
from turfledger.domain.model.movement import Direction
from turfledger.domain.model.report_window import ReportWindow
from turfledger.domain.model.value_objects import format_quantity
from turfledger.infrastructure.bootstrap import (
    item_repository,
    movement_repository,
    on_hand_projector,
    reporting_calendar,
)

_location_option = click.option("--location", required=True, help="Location (turf) ID.")


def _window_options(func):
    """Attach --days / --start / --end to a windowed report command."""
    func = click.option("--end", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Last day (inclusive).")(func)
    func = click.option("--start", type=click.DateTime(["%Y-%m-%d"]), default=None, help="First day (inclusive).")(func)
    func = click.option("--days", type=click.IntRange(min=0), default=None, help="Trailing window length.")(func)
    return func


def _resolve_window(
    location: str,
    days: int | None,
    start: datetime | None,
    end: datetime | None,
) -> ReportWindow:
    if start is not None or end is not None:
        if start is None or end is None:
            raise click.UsageError("--start and --end must be given together")
        if days is not None:
            raise click.UsageError("--days cannot be combined with --start/--end")
        try:
            return ReportWindow(start=start.date(), end=end.date())
        except DomainException as exc:
            raise click.BadParameter(str(exc))
    if days is None:
        days = get_settings().report.default_window_days
    return reporting_calendar().trailing_window(location, days)


@click.command("overview")
@_location_option
def report_overview(location: str) -> None:
    """Headline inventory numbers for a location."""
    handler = InventoryOverviewHandler(
        item_repo=item_repository(),
        movement_repo=movement_repository(),
        projector=on_hand_projector(),
    )

    try:
        overview = handler.handle(location)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Active items:     {overview.total_items}")
    click.echo(f"Low stock:        {overview.low_stock_count}")
    click.echo(f"Value at cost:    {overview.total_cost_value}")
    click.echo(f"Value at retail:  {overview.total_retail_value}")
    if not overview.has_opening_stock:
        click.echo("Opening stock has not been recorded yet.")


@click.command("low-stock")
@_location_option
def report_low_stock(location: str) -> None:
    """Items at or below their reorder level."""
    handler = LowStockReportHandler(item_repo=item_repository(), projector=on_hand_projector())

    try:
        lines = handler.handle(location)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("All items are adequately stocked.")
        return

    click.echo(f"{'SKU':<10} {'Name':<22} {'On hand':>9} {'Reorder':>8} {'Short':>8}")
    click.echo("-" * 61)
    for line in lines:
        click.echo(
            f"{line.item.sku:<10} {line.item.name:<22} {format_quantity(line.on_hand):>9} "
            f"{format_quantity(line.reorder_level):>8} {format_quantity(line.shortfall):>8}"
        )


@click.command("top-selling")
@_location_option
@_window_options
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Number of items.")
def report_top_selling(
    location: str,
    days: int | None,
    start: datetime | None,
    end: datetime | None,
    limit: int | None,
) -> None:
    """Best-selling items in a date window."""
    window = _resolve_window(location, days, start, end)
    handler = TopSellingHandler(
        item_repo=item_repository(),
        movement_repo=movement_repository(),
        calendar=reporting_calendar(),
    )

    try:
        lines = handler.handle(location, window, limit or get_settings().report.top_selling_limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Top selling, {window.start} to {window.end}")
    if not lines:
        click.echo("No sales recorded in this period.")
        return

    click.echo(f"{'#':>3} {'SKU':<10} {'Name':<22} {'Sold':>8} {'Revenue':>12}")
    click.echo("-" * 59)
    for rank, line in enumerate(lines, start=1):
        click.echo(
            f"{rank:>3} {line.item.sku:<10} {line.item.name:<22} "
            f"{format_quantity(line.quantity_sold):>8} {str(line.revenue):>12}"
        )


@click.command("valuation")
@_location_option
def report_valuation(location: str) -> None:
    """Current stock value by category."""
    handler = StockValuationHandler(item_repo=item_repository(), projector=on_hand_projector())

    try:
        valuation = handler.handle(location)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Category':<12} {'Items':>6} {'Units':>10} {'Cost value':>12}")
    click.echo("-" * 43)
    for category, row in valuation.by_category.items():
        click.echo(
            f"{category.value:<12} {row.item_count:>6} "
            f"{format_quantity(row.unit_count):>10} {str(row.cost_value):>12}"
        )
    click.echo("-" * 43)
    click.echo(f"{'Total at cost':<30} {str(valuation.total_cost_value):>12}")
    click.echo(f"{'Total at retail':<30} {str(valuation.total_retail_value):>12}")


@click.command("movements")
@_location_option
@_window_options
def report_movements(
    location: str,
    days: int | None,
    start: datetime | None,
    end: datetime | None,
) -> None:
    """Stock movements grouped by day."""
    window = _resolve_window(location, days, start, end)
    handler = MovementSummaryHandler(
        item_repo=item_repository(),
        movement_repo=movement_repository(),
        calendar=reporting_calendar(),
    )

    try:
        days_summary = handler.handle(location, window)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not days_summary:
        click.echo("No movements in this period.")
        return

    for day in days_summary:
        click.echo(
            f"{day.date}  in +{format_quantity(day.total_in)}  "
            f"out -{format_quantity(day.total_out)}"
        )
        for line in day.movements:
            sign = "+" if line.direction == Direction.IN else "-"
            notes = f"  ({line.notes})" if line.notes else ""
            click.echo(
                f"    {line.item_name:<22} {line.type_label:<14} "
                f"{sign}{format_quantity(line.quantity)}{notes}"
            )
