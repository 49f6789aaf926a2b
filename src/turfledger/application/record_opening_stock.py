"""Application service: Record Opening Stock use case.

Sets the initial baseline for several items of one location at once.

Uses a two-phase approach so a bad entry never leaves the location with
only part of its opening stock recorded:
  Phase 1: parse and validate every entry (quantity, item exists, is
            active, belongs to the location and has no opening yet when
            only one is allowed).  Fails fast before any movement is
            written.
  Phase 2: record one OPENING movement per entry through the ledger.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Mapping

from turfledger.domain.exceptions import (
    ItemArchivedError,
    ItemNotFoundError,
    ValidationError,
)
from turfledger.domain.model.movement import Direction, Movement, MovementType
from turfledger.domain.model.value_objects import ZERO, Quantity, to_decimal
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.service.movement_ledger import MovementLedger

OPENING_NOTES = "Initial opening stock"


class RecordOpeningStockHandler:

    def __init__(self, ledger: MovementLedger, item_repo: ItemRepository) -> None:
        self._ledger = ledger
        self._item_repo = item_repo

    def handle(
        self,
        location_id: str,
        quantities: Mapping[str, str | int | Decimal | None],
        actor_id: str,
        notes: str = OPENING_NOTES,
    ) -> list[Movement]:
        """Record opening stock; blank or non-positive entries are skipped."""
        # Phase 1: validate everything
        entries: list[tuple[str, Quantity]] = []
        for item_id, raw in quantities.items():
            if raw is None or str(raw).strip() == "":
                continue
            amount = to_decimal(raw, "opening quantity")
            if amount <= ZERO:
                continue

            item = self._item_repo.get_by_id(item_id)
            if item is None or item.location_id != location_id:
                raise ItemNotFoundError(f"Item not found at this location: '{item_id}'")
            if not item.is_active:
                raise ItemArchivedError(f"Item '{item.name}' is archived")
            self._ledger.ensure_opening_allowed(item)
            entries.append((item_id, Quantity(amount)))

        if not entries:
            raise ValidationError("Enter at least one opening stock quantity")

        # Phase 2: write
        return [
            self._ledger.record(
                item_id=item_id,
                movement_type=MovementType.OPENING,
                direction=Direction.IN,
                quantity=qty.value,
                actor_id=actor_id,
                notes=notes,
            )
            for item_id, qty in entries
        ]
