"""Application service: Inventory Overview (query).

Headline numbers for a location's inventory screen, built from the
low-stock and valuation reports so every figure comes from the projector.
"""

from __future__ import annotations

from dataclasses import dataclass

from turfledger.application.low_stock_report import LowStockReportHandler
from turfledger.application.stock_valuation import StockValuationHandler
from turfledger.domain.model.movement import MovementType
from turfledger.domain.model.value_objects import Money
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.repository.movement_repository import MovementRepository
from turfledger.domain.service.on_hand_projector import OnHandProjector


@dataclass(frozen=True)
class InventoryOverview:
    total_items: int
    low_stock_count: int
    total_cost_value: Money
    total_retail_value: Money
    has_opening_stock: bool


class InventoryOverviewHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        movement_repo: MovementRepository,
        projector: OnHandProjector,
    ) -> None:
        self._item_repo = item_repo
        self._movement_repo = movement_repo
        self._projector = projector

    def handle(self, location_id: str) -> InventoryOverview:
        valuation = StockValuationHandler(self._item_repo, self._projector).handle(location_id)
        low_stock = LowStockReportHandler(self._item_repo, self._projector).handle(location_id)
        return InventoryOverview(
            total_items=len(self._item_repo.list_by_location(location_id)),
            low_stock_count=len(low_stock),
            total_cost_value=valuation.total_cost_value,
            total_retail_value=valuation.total_retail_value,
            has_opening_stock=self.has_opening_stock(location_id),
        )

    def has_opening_stock(self, location_id: str) -> bool:
        """True once any item at the location has an OPENING movement."""
        return any(
            m.movement_type == MovementType.OPENING
            for m in self._movement_repo.list_by_location(location_id)
        )
