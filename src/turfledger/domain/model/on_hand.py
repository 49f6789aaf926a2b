"""OnHand projection: current stock of one item, folded from its movements.

The projection is derived data.  It can always be rebuilt by replaying the
item's movements in order; the ledger is the only source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from turfledger.domain.exceptions import LedgerIntegrityError
from turfledger.domain.model.movement import Direction, Movement
from turfledger.domain.model.value_objects import ZERO


@dataclass(frozen=True)
class OnHand:
    """Running totals for one item.

    Invariants:
    - ``on_hand`` (``total_in - total_out``) is never negative
    - ``movement_count`` equals the sequence of the last folded movement
    """

    item_id: str
    total_in: Decimal = ZERO
    total_out: Decimal = ZERO
    last_movement_at: datetime | None = None
    movement_count: int = 0

    @property
    def on_hand(self) -> Decimal:
        return self.total_in - self.total_out

    def apply(self, movement: Movement) -> OnHand:
        """Return the projection after folding in one more movement."""
        if movement.item_id != self.item_id:
            raise LedgerIntegrityError(
                f"Movement {movement.id} belongs to item {movement.item_id}, "
                f"not {self.item_id}"
            )
        if movement.sequence != self.movement_count + 1:
            raise LedgerIntegrityError(
                f"Movement {movement.id} has sequence {movement.sequence}, "
                f"expected {self.movement_count + 1}"
            )

        qty = movement.quantity.value
        if movement.direction == Direction.IN:
            folded = replace(self, total_in=self.total_in + qty)
        else:
            folded = replace(self, total_out=self.total_out + qty)
        if folded.on_hand < ZERO:
            raise LedgerIntegrityError(
                f"Movement {movement.id} would take item {self.item_id} "
                f"to {folded.on_hand}"
            )

        last = self.last_movement_at
        if last is None or movement.created_at > last:
            last = movement.created_at
        return replace(folded, last_movement_at=last, movement_count=movement.sequence)

    @staticmethod
    def replay(item_id: str, movements: Iterable[Movement]) -> OnHand:
        """Fold a full history, ordered by (created_at, sequence)."""
        state = OnHand(item_id=item_id)
        for movement in sorted(movements, key=lambda m: (m.created_at, m.sequence)):
            state = state.apply(movement)
        return state
