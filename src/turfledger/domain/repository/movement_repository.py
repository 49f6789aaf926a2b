"""Abstract repository for the append-only movement log."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from turfledger.domain.model.movement import Movement


class MovementRepository(ABC):

    @abstractmethod
    def append(self, movement: Movement, expected_sequence: int) -> None:
        """Append a movement to its item's history.

        ``expected_sequence`` is the number of movements the caller saw for
        the item.  Raises ConcurrencyConflictError if the stored history no
        longer has exactly that many entries.
        """

    @abstractmethod
    def last_sequence(self, item_id: str) -> int:
        """Return the number of movements recorded for an item (0 if none)."""

    @abstractmethod
    def list_by_item(self, item_id: str) -> list[Movement]:
        """Return an item's movements in sequence order."""

    @abstractmethod
    def list_by_location(
        self,
        location_id: str,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[Movement]:
        """Return a location's movements ordered by ``created_at``.

        ``since`` and ``until`` are inclusive bounds when given.
        """
