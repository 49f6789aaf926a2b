"""Application service: Item History use case (query)."""

from __future__ import annotations

from turfledger.domain.exceptions import ItemNotFoundError
from turfledger.domain.model.movement import Movement
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.repository.movement_repository import MovementRepository

DEFAULT_HISTORY_LIMIT = 50


class ItemHistoryHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        movement_repo: MovementRepository,
    ) -> None:
        self._item_repo = item_repo
        self._movement_repo = movement_repo

    def handle(self, item_id: str, limit: int = DEFAULT_HISTORY_LIMIT) -> list[Movement]:
        """Return the item's most recent movements, newest first.

        Works for archived items too; their history stays readable.
        """
        if self._item_repo.get_by_id(item_id) is None:
            raise ItemNotFoundError(f"Item not found: '{item_id}'")
        movements = sorted(
            self._movement_repo.list_by_item(item_id),
            key=lambda m: (m.created_at, m.sequence),
            reverse=True,
        )
        return movements[:limit]
