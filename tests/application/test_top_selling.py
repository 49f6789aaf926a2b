"""Integration tests for the TopSelling report."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from turfledger.application.top_selling import TopSellingHandler
from turfledger.domain.exceptions import ValidationError
from turfledger.domain.model.report_window import ReportWindow
from turfledger.domain.model.value_objects import Money
from tests.fakes import START, build_stack, make_item

MARCH_1 = ReportWindow(start=date(2026, 3, 1), end=date(2026, 3, 1))


def _setup():
    water = make_item(sku="BEV001", name="Water Bottle", selling_price="20.00")
    ball = make_item(sku="EQP001", name="Football", category="Equipment", selling_price="799")
    chips = make_item(sku="SNK001", name="Chips", category="Snacks", selling_price=None)
    stack = build_stack([water, ball, chips])
    for item in (water, ball, chips):
        stack.ledger.record(item.id, "OPENING", None, "100", "owner-1")
    return stack, water, ball, chips


class TestTopSelling:

    def test_ranks_by_quantity_with_revenue(self):
        stack, water, ball, chips = _setup()
        stack.ledger.record(water.id, "SALE", None, "5", "staff-1")
        stack.ledger.record(ball.id, "SALE", None, "2", "staff-1")
        stack.ledger.record(water.id, "SALE", None, "3", "staff-1")
        stack.ledger.record(chips.id, "SALE", None, "4", "staff-1")

        lines = TopSellingHandler(stack.items, stack.movements).handle("turf-1", MARCH_1)

        assert [line.item.id for line in lines] == [water.id, chips.id, ball.id]
        assert lines[0].quantity_sold == Decimal("8")
        assert lines[0].revenue == Money.of("160.00")
        assert lines[2].revenue == Money.of("1598")
        assert lines[1].revenue == Money.zero()

    def test_ties_keep_creation_order(self):
        stack, water, ball, chips = _setup()
        stack.ledger.record(chips.id, "SALE", None, "2", "staff-1")
        stack.ledger.record(water.id, "SALE", None, "2", "staff-1")

        lines = TopSellingHandler(stack.items, stack.movements).handle("turf-1", MARCH_1)

        assert [line.item.id for line in lines] == [water.id, chips.id]

    def test_only_sales_count(self):
        stack, water, _, _ = _setup()
        stack.ledger.record(water.id, "ADJUSTMENT", "OUT", "9", "owner-1", notes="Lost")

        assert TopSellingHandler(stack.items, stack.movements).handle("turf-1", MARCH_1) == []

    def test_sales_outside_window_ignored(self):
        stack, water, ball, _ = _setup()
        stack.ledger.record(water.id, "SALE", None, "1", "staff-1")
        stack.clock.jump_to(START + timedelta(days=1))
        stack.ledger.record(ball.id, "SALE", None, "6", "staff-1")

        lines = TopSellingHandler(stack.items, stack.movements).handle("turf-1", MARCH_1)

        assert [line.item.id for line in lines] == [water.id]

    def test_limit_applied(self):
        stack, water, ball, chips = _setup()
        for item in (water, ball, chips):
            stack.ledger.record(item.id, "SALE", None, "1", "staff-1")

        lines = TopSellingHandler(stack.items, stack.movements).handle("turf-1", MARCH_1, limit=2)

        assert len(lines) == 2

    def test_archived_items_still_ranked(self):
        stack, water, _, _ = _setup()
        stack.ledger.record(water.id, "SALE", None, "4", "staff-1")
        water.archive()

        lines = TopSellingHandler(stack.items, stack.movements).handle("turf-1", MARCH_1)

        assert lines[0].item.id == water.id

    def test_limit_must_be_positive(self):
        stack, *_ = _setup()
        with pytest.raises(ValidationError):
            TopSellingHandler(stack.items, stack.movements).handle("turf-1", MARCH_1, limit=0)
