"""Integration tests for the ListActiveItems query."""

from decimal import Decimal

from turfledger.application.dto import ItemFilter
from turfledger.application.list_active_items import ListActiveItemsHandler
from turfledger.domain.model.item import Category
from tests.fakes import build_stack, make_item


def _setup():
    water = make_item(sku="BEV001", name="Water Bottle", reorder_level="10")
    ball = make_item(sku="EQP001", name="football", category="Equipment", reorder_level="2")
    chips = make_item(sku="SNK001", name="Chips", category="Snacks", reorder_level="5")
    gone = make_item(sku="APP001", name="Bib", category="Apparel")
    stack = build_stack([water, ball, chips, gone])
    stack.ledger.record(water.id, "OPENING", None, "50", "owner-1")
    stack.ledger.record(water.id, "SALE", None, "45", "staff-1")
    stack.ledger.record(ball.id, "OPENING", None, "6", "owner-1")
    gone.archive()
    handler = ListActiveItemsHandler(stack.items, stack.projector)
    return handler, water, ball, chips


class TestListActiveItems:

    def test_lists_active_items_sorted_by_name(self):
        handler, *_ = _setup()
        names = [line.item.name for line in handler.handle("turf-1")]
        assert names == ["Chips", "football", "Water Bottle"]

    def test_lines_carry_stock(self):
        handler, water, _, chips = _setup()
        lines = {line.item.id: line for line in handler.handle("turf-1")}

        assert lines[water.id].total_in == Decimal("50")
        assert lines[water.id].total_out == Decimal("45")
        assert lines[water.id].on_hand == Decimal("5")
        assert lines[water.id].last_movement_at is not None
        assert lines[chips.id].on_hand == Decimal("0")
        assert lines[chips.id].last_movement_at is None

    def test_filter_by_category(self):
        handler, _, ball, _ = _setup()
        lines = handler.handle("turf-1", ItemFilter(category=Category.EQUIPMENT))
        assert [line.item.id for line in lines] == [ball.id]

    def test_search_matches_name_or_sku(self):
        handler, water, ball, _ = _setup()
        assert [l.item.id for l in handler.handle("turf-1", ItemFilter(search_text="WATER"))] == [water.id]
        assert [l.item.id for l in handler.handle("turf-1", ItemFilter(search_text="eqp"))] == [ball.id]

    def test_low_stock_only(self):
        handler, water, _, chips = _setup()
        lines = handler.handle("turf-1", ItemFilter(low_stock_only=True))
        assert [line.item.id for line in lines] == [chips.id, water.id]
        assert all(line.is_low_stock for line in lines)

    def test_other_location_is_empty(self):
        handler, *_ = _setup()
        assert handler.handle("turf-9") == []
