"""Application service: Archive Item use case.

Archiving is a soft delete: the item leaves active listings, its movement
history stays readable, and no further movements can be recorded for it.
"""

from __future__ import annotations

from turfledger.config.logging import get_logger
from turfledger.domain.exceptions import ItemNotFoundError
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.service.lock_registry import LockRegistry

logger = get_logger(__name__)


class ArchiveItemHandler:

    def __init__(self, item_repo: ItemRepository, locks: LockRegistry) -> None:
        self._item_repo = item_repo
        self._locks = locks

    def handle(self, item_id: str) -> None:
        """Archive an item. Archiving an archived item is a no-op."""
        # Same lock as the ledger, so no movement lands mid-archive
        with self._locks.hold(item_id):
            item = self._item_repo.get_by_id(item_id)
            if item is None:
                raise ItemNotFoundError(f"Item not found: '{item_id}'")
            if not item.archive():
                return
            self._item_repo.save(item)

        logger.info("item_archived", item_id=item.id, location_id=item.location_id)
