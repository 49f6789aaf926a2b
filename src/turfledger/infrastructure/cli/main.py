import click

from turfledger.config.logging import configure_logging
from turfledger.infrastructure.cli.item_commands import item_add, item_archive, item_list
from turfledger.infrastructure.cli.report_commands import (
    report_low_stock,
    report_movements,
    report_overview,
    report_top_selling,
    report_valuation,
)
from turfledger.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_history,
    stock_opening,
    stock_receive,
    stock_sell,
    stock_show,
    stock_verify,
)


@click.group()
def cli() -> None:
    """Turf Inventory Ledger"""
    configure_logging()


@cli.group()
def item() -> None:
    """Manage the item catalog."""


@cli.group()
def stock() -> None:
    """Record and inspect stock movements."""


@cli.group()
def report() -> None:
    """Inventory reports."""


# Register subcommands
item.add_command(item_add)
item.add_command(item_archive)
item.add_command(item_list)
stock.add_command(stock_adjust)
stock.add_command(stock_history)
stock.add_command(stock_opening)
stock.add_command(stock_receive)
stock.add_command(stock_sell)
stock.add_command(stock_show)
stock.add_command(stock_verify)
report.add_command(report_low_stock)
report.add_command(report_movements)
report.add_command(report_overview)
report.add_command(report_top_selling)
report.add_command(report_valuation)
