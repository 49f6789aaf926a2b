"""Application service: List Active Items use case (query)."""

from __future__ import annotations

from turfledger.application.dto import ItemFilter, ItemWithOnHand
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.service.on_hand_projector import OnHandProjector


class ListActiveItemsHandler:

    def __init__(self, item_repo: ItemRepository, projector: OnHandProjector) -> None:
        self._item_repo = item_repo
        self._projector = projector

    def handle(
        self, location_id: str, item_filter: ItemFilter | None = None
    ) -> list[ItemWithOnHand]:
        """Return the location's active items with stock, sorted by name."""
        item_filter = item_filter or ItemFilter()
        items = self._item_repo.list_by_location(location_id)

        if item_filter.category is not None:
            items = [i for i in items if i.category == item_filter.category]

        needle = (item_filter.search_text or "").strip().lower()
        if needle:
            items = [
                i for i in items
                if needle in i.name.lower() or needle in i.sku.lower()
            ]

        stock = self._projector.get_on_hand_batch(i.id for i in items)
        lines = [
            ItemWithOnHand(
                item=item,
                total_in=stock[item.id].total_in,
                total_out=stock[item.id].total_out,
                on_hand=stock[item.id].on_hand,
                last_movement_at=stock[item.id].last_movement_at,
            )
            for item in items
        ]

        if item_filter.low_stock_only:
            lines = [line for line in lines if line.is_low_stock]

        return sorted(lines, key=lambda line: line.item.name.lower())
