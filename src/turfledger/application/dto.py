"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing repositories or services to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from turfledger.domain.model.item import Category, Item


@dataclass(frozen=True)
class ItemFilter:
    """Input: optional narrowing of an active-item listing."""

    category: Category | None = None
    search_text: str | None = None
    low_stock_only: bool = False


@dataclass(frozen=True)
class ItemWithOnHand:
    """Output: a catalog item joined with its current stock."""

    item: Item
    total_in: Decimal
    total_out: Decimal
    on_hand: Decimal
    last_movement_at: datetime | None

    @property
    def is_low_stock(self) -> bool:
        return self.item.is_low_stock(self.on_hand)
