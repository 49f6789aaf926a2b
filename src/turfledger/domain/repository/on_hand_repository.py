"""Abstract repository for materialized OnHand rows.

Rows stored here are a cache of the movement log, never a source of truth.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from turfledger.domain.model.on_hand import OnHand


class OnHandRepository(ABC):

    @abstractmethod
    def get(self, item_id: str) -> OnHand | None:
        """Return the cached row for an item, or None if not materialized."""

    @abstractmethod
    def save(self, on_hand: OnHand) -> None:
        """Replace the cached row for an item."""
