"""Application service: Stock Valuation report (query).

Values current on-hand stock of active items at cost and at retail.
Not windowed: valuation is always as of now.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from turfledger.domain.model.item import Category
from turfledger.domain.model.value_objects import ZERO, Money
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.service.on_hand_projector import OnHandProjector


@dataclass(frozen=True)
class CategoryValuation:
    item_count: int
    unit_count: Decimal
    cost_value: Money


@dataclass(frozen=True)
class StockValuation:
    by_category: dict[Category, CategoryValuation] = field(default_factory=dict)
    total_cost_value: Money = field(default_factory=Money.zero)
    total_retail_value: Money = field(default_factory=Money.zero)


class StockValuationHandler:

    def __init__(self, item_repo: ItemRepository, projector: OnHandProjector) -> None:
        self._item_repo = item_repo
        self._projector = projector

    def handle(self, location_id: str) -> StockValuation:
        items = self._item_repo.list_by_location(location_id)
        stock = self._projector.get_on_hand_batch(i.id for i in items)

        counts: dict[Category, int] = {}
        units: dict[Category, Decimal] = {}
        costs: dict[Category, Money] = {}
        total_cost = Money.zero()
        total_retail = Money.zero()

        for item in items:
            on_hand = stock[item.id].on_hand
            cost = (item.cost_price or Money.zero()) * on_hand
            retail = (item.selling_price or Money.zero()) * on_hand

            counts[item.category] = counts.get(item.category, 0) + 1
            units[item.category] = units.get(item.category, ZERO) + on_hand
            costs[item.category] = costs.get(item.category, Money.zero()) + cost
            total_cost = total_cost + cost
            total_retail = total_retail + retail

        by_category = {
            category: CategoryValuation(
                item_count=counts[category],
                unit_count=units[category],
                cost_value=costs[category],
            )
            for category in Category
            if category in counts
        }
        return StockValuation(
            by_category=by_category,
            total_cost_value=total_cost,
            total_retail_value=total_retail,
        )
