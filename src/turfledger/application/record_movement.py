"""Application service: Record Movement use cases.

Thin entry points over the Movement Ledger.  ``handle`` is the general
command; ``receive``, ``sell`` and ``adjust`` fix the movement type so
callers cannot pick a direction that the type does not allow.
"""

from __future__ import annotations

from decimal import Decimal

from turfledger.domain.model.movement import (
    AdjustmentReason,
    Direction,
    Movement,
    MovementType,
    adjustment_notes,
)
from turfledger.domain.service.movement_ledger import MovementLedger


class RecordMovementHandler:

    def __init__(self, ledger: MovementLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        item_id: str,
        movement_type: str | MovementType,
        quantity: str | int | Decimal,
        actor_id: str,
        direction: str | Direction | None = None,
        notes: str | None = None,
    ) -> Movement:
        return self._ledger.record(
            item_id=item_id,
            movement_type=movement_type,
            direction=direction,
            quantity=quantity,
            actor_id=actor_id,
            notes=notes,
        )

    def receive(
        self,
        item_id: str,
        quantity: str | int | Decimal,
        actor_id: str,
        notes: str | None = None,
    ) -> Movement:
        """Goods received (stock in)."""
        return self.handle(item_id, MovementType.RECEIPT, quantity, actor_id, notes=notes)

    def sell(
        self,
        item_id: str,
        quantity: str | int | Decimal,
        actor_id: str,
        notes: str | None = None,
    ) -> Movement:
        """Units sold or consumed. Fails with InsufficientStockError if short."""
        return self.handle(item_id, MovementType.SALE, quantity, actor_id, notes=notes)

    def adjust(
        self,
        item_id: str,
        direction: str | Direction,
        quantity: str | int | Decimal,
        reason: str | AdjustmentReason,
        actor_id: str,
        details: str | None = None,
    ) -> Movement:
        """Manual correction in either direction, tagged with a reason code."""
        return self.handle(
            item_id,
            MovementType.ADJUSTMENT,
            quantity,
            actor_id,
            direction=direction,
            notes=adjustment_notes(reason, details),
        )
