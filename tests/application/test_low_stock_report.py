"""Integration tests for the LowStockReport query."""

from decimal import Decimal

from turfledger.application.low_stock_report import LowStockReportHandler
from tests.fakes import build_stack, make_item


class TestLowStockReport:

    def test_item_below_reorder_level_reported_with_shortfall(self):
        item = make_item(reorder_level="10")
        stack = build_stack([item])
        stack.ledger.record(item.id, "OPENING", None, "12", "owner-1")
        stack.ledger.record(item.id, "SALE", None, "7", "staff-1")

        lines = LowStockReportHandler(stack.items, stack.projector).handle("turf-1")

        assert len(lines) == 1
        assert lines[0].item.id == item.id
        assert lines[0].on_hand == Decimal("5")
        assert lines[0].reorder_level == Decimal("10")
        assert lines[0].shortfall == Decimal("5")

    def test_exactly_at_reorder_level_is_low(self):
        item = make_item(reorder_level="10")
        stack = build_stack([item])
        stack.ledger.record(item.id, "OPENING", None, "10", "owner-1")

        lines = LowStockReportHandler(stack.items, stack.projector).handle("turf-1")

        assert lines[0].shortfall == Decimal("0")

    def test_well_stocked_and_archived_items_left_out(self):
        stocked = make_item(sku="BEV001", reorder_level="10")
        archived = make_item(sku="BEV002", name="Soda", reorder_level="10")
        stack = build_stack([stocked, archived])
        stack.ledger.record(stocked.id, "OPENING", None, "11", "owner-1")
        archived.archive()

        assert LowStockReportHandler(stack.items, stack.projector).handle("turf-1") == []

    def test_sorted_by_name(self):
        water = make_item(sku="BEV001", name="Water Bottle")
        chips = make_item(sku="SNK001", name="Chips", category="Snacks")
        stack = build_stack([water, chips])

        lines = LowStockReportHandler(stack.items, stack.projector).handle("turf-1")

        assert [line.item.name for line in lines] == ["Chips", "Water Bottle"]
