"""Application service: Low Stock Report (query)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from turfledger.domain.model.item import Item
from turfledger.domain.model.value_objects import ZERO
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.service.on_hand_projector import OnHandProjector


@dataclass(frozen=True)
class LowStockLine:
    item: Item
    on_hand: Decimal
    reorder_level: Decimal
    shortfall: Decimal


class LowStockReportHandler:

    def __init__(self, item_repo: ItemRepository, projector: OnHandProjector) -> None:
        self._item_repo = item_repo
        self._projector = projector

    def handle(self, location_id: str) -> list[LowStockLine]:
        """Active items at or below their reorder level, sorted by name."""
        items = self._item_repo.list_by_location(location_id)
        stock = self._projector.get_on_hand_batch(i.id for i in items)

        lines: list[LowStockLine] = []
        for item in items:
            on_hand = stock[item.id].on_hand
            if not item.is_low_stock(on_hand):
                continue
            lines.append(
                LowStockLine(
                    item=item,
                    on_hand=on_hand,
                    reorder_level=item.reorder_level,
                    shortfall=max(ZERO, item.reorder_level - on_hand),
                )
            )
        return sorted(lines, key=lambda line: line.item.name.lower())
