"""Abstract repository for the Item aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from turfledger.domain.model.item import Item


class ItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> Item | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, location_id: str, sku: str) -> Item | None:
        """Return the item with this normalized SKU at a location, active or archived."""

    @abstractmethod
    def list_by_location(self, location_id: str, include_archived: bool = False) -> list[Item]:
        """Return the location's items in creation order."""

    @abstractmethod
    def save(self, item: Item) -> None:
        """Persist a new or updated item."""
