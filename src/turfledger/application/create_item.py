"""Application service: Create Item use case."""

from __future__ import annotations

from decimal import Decimal

from turfledger.config.logging import get_logger
from turfledger.domain.exceptions import DuplicateSKUError
from turfledger.domain.model.item import Category, Item
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.service.lock_registry import LockRegistry

logger = get_logger(__name__)


class CreateItemHandler:

    def __init__(self, item_repo: ItemRepository, locks: LockRegistry) -> None:
        self._item_repo = item_repo
        self._locks = locks

    def handle(
        self,
        location_id: str,
        sku: str,
        name: str,
        category: str | Category,
        unit: str = "pcs",
        cost_price: str | Decimal | None = None,
        selling_price: str | Decimal | None = None,
        reorder_level: str | Decimal | None = None,
        actor_id: str | None = None,
    ) -> Item:
        """Add a new item to a location's catalog.

        SKUs are unique per location regardless of archive state, so an
        archived item keeps its code reserved.
        """
        item = Item.create(
            location_id=location_id,
            sku=sku,
            name=name,
            category=category,
            unit=unit,
            cost_price=cost_price,
            selling_price=selling_price,
            reorder_level=reorder_level,
            created_by=actor_id,
        )

        # Check and insert under one lock so concurrent creates cannot both pass
        with self._locks.hold(f"catalog:{item.location_id}"):
            if self._item_repo.get_by_sku(item.location_id, item.sku) is not None:
                raise DuplicateSKUError(
                    f"An item with SKU '{item.sku}' already exists at this location"
                )
            self._item_repo.save(item)

        logger.info(
            "item_created",
            item_id=item.id,
            location_id=item.location_id,
            sku=item.sku,
            actor_id=actor_id,
        )
        return item
