"""Integration tests for the StockValuation report."""

from decimal import Decimal

from turfledger.application.stock_valuation import StockValuationHandler
from turfledger.domain.model.item import Category
from turfledger.domain.model.value_objects import Money
from tests.fakes import build_stack, make_item


class TestStockValuation:

    def test_values_at_cost_and_retail_by_category(self):
        water = make_item(sku="BEV001", cost_price="12.00", selling_price="20.00")
        soda = make_item(sku="BEV002", name="Soda", cost_price="25", selling_price="40")
        ball = make_item(sku="EQP001", name="Football", category="Equipment",
                         cost_price="450", selling_price=None)
        stack = build_stack([water, soda, ball])
        stack.ledger.record(water.id, "OPENING", None, "10", "owner-1")
        stack.ledger.record(soda.id, "OPENING", None, "4", "owner-1")
        stack.ledger.record(ball.id, "OPENING", None, "2", "owner-1")
        stack.ledger.record(water.id, "SALE", None, "5", "staff-1")

        valuation = StockValuationHandler(stack.items, stack.projector).handle("turf-1")

        beverages = valuation.by_category[Category.BEVERAGES]
        assert beverages.item_count == 2
        assert beverages.unit_count == Decimal("9")
        assert beverages.cost_value == Money.of("160.00")
        assert valuation.by_category[Category.EQUIPMENT].cost_value == Money.of("900")
        assert valuation.total_cost_value == Money.of("1060.00")
        assert valuation.total_retail_value == Money.of("260.00")

    def test_categories_follow_enum_order(self):
        chips = make_item(sku="SNK001", name="Chips", category="Snacks")
        water = make_item(sku="BEV001")
        stack = build_stack([chips, water])

        valuation = StockValuationHandler(stack.items, stack.projector).handle("turf-1")

        assert list(valuation.by_category) == [Category.BEVERAGES, Category.SNACKS]

    def test_items_without_prices_count_as_zero(self):
        item = make_item(cost_price=None, selling_price=None)
        stack = build_stack([item])
        stack.ledger.record(item.id, "OPENING", None, "7", "owner-1")

        valuation = StockValuationHandler(stack.items, stack.projector).handle("turf-1")

        assert valuation.total_cost_value == Money.zero()
        assert valuation.by_category[Category.BEVERAGES].unit_count == Decimal("7")

    def test_archived_items_excluded(self):
        item = make_item()
        stack = build_stack([item])
        stack.ledger.record(item.id, "OPENING", None, "7", "owner-1")
        item.archive()

        valuation = StockValuationHandler(stack.items, stack.projector).handle("turf-1")

        assert valuation.by_category == {}
        assert valuation.total_cost_value == Money.zero()
