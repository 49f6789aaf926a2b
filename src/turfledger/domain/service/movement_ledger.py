"""Domain service: Movement Ledger.

The only writer of stock history.  ``record()`` validates a movement,
checks stock sufficiency and appends the movement as one unit, inside a
critical section keyed by item ID:

  1. quantity, type/direction pairing, notes and actor are validated
     before any lock is taken;
  2. under the item's lock the item is loaded, the current on-hand is read
     from the projector and an outbound movement is rejected if it asks
     for more than is on hand;
  3. the movement is appended with an optimistic sequence check, and the
     cached projection is advanced with the same state the check used.

Two sales of the same item are therefore strictly ordered, and the second
one is checked against the stock left by the first.  A sequence conflict
from the store (another process appended first) is retried a bounded
number of times before it is surfaced.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from turfledger.config.logging import get_logger
from turfledger.domain.exceptions import (
    ConcurrencyConflictError,
    InsufficientStockError,
    ItemArchivedError,
    ItemNotFoundError,
    OpeningAlreadyRecordedError,
    ValidationError,
)
from turfledger.domain.model.item import Item
from turfledger.domain.model.movement import (
    Direction,
    Movement,
    MovementType,
    parse_adjustment_reason,
    resolve_direction,
)
from turfledger.domain.model.on_hand import OnHand
from turfledger.domain.model.value_objects import Quantity
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.repository.movement_repository import MovementRepository
from turfledger.domain.service.location_clock import LocationClock
from turfledger.domain.service.lock_registry import LockRegistry
from turfledger.domain.service.on_hand_projector import OnHandProjector

logger = get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


class MovementLedger:

    def __init__(
        self,
        item_repo: ItemRepository,
        movement_repo: MovementRepository,
        projector: OnHandProjector,
        locks: LockRegistry,
        clock: LocationClock | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        single_opening: bool = False,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._item_repo = item_repo
        self._movement_repo = movement_repo
        self._projector = projector
        self._locks = locks
        self._clock = clock or LocationClock()
        self._max_attempts = max_attempts
        self._single_opening = single_opening

    def record(
        self,
        item_id: str,
        movement_type: str | MovementType,
        direction: str | Direction | None,
        quantity: str | int | Decimal,
        actor_id: str,
        notes: str | None = None,
    ) -> Movement:
        """Append one movement to an item's history.

        ``direction`` may be None for OPENING, RECEIPT and SALE, which only
        go one way.  Raises InvalidQuantityError, ValidationError,
        ItemNotFoundError, ItemArchivedError or InsufficientStockError;
        nothing is written when any of them is raised.
        """
        qty = Quantity.of(quantity)
        kind = MovementType.parse(movement_type)
        way = resolve_direction(
            kind, Direction.parse(direction) if direction is not None else None
        )
        if not actor_id or not str(actor_id).strip():
            raise ValidationError("Actor is required to record a movement")
        notes = (notes or "").strip() or None
        if kind == MovementType.ADJUSTMENT:
            parse_adjustment_reason(notes)

        for attempt in range(1, self._max_attempts + 1):
            with self._locks.hold(item_id):
                item = self._load_active(item_id)
                before = self._projector.current(item_id)
                self._check(item, kind, way, qty, before)

                movement = Movement(
                    id=uuid.uuid4().hex,
                    item_id=item.id,
                    location_id=item.location_id,
                    movement_type=kind,
                    direction=way,
                    quantity=qty,
                    actor_id=str(actor_id).strip(),
                    created_at=self._clock.tick(
                        item.location_id, after=before.last_movement_at
                    ),
                    sequence=before.movement_count + 1,
                    notes=notes,
                )
                try:
                    self._movement_repo.append(
                        movement, expected_sequence=before.movement_count
                    )
                except ConcurrencyConflictError:
                    logger.warning(
                        "movement_conflict_retry",
                        item_id=item_id,
                        attempt=attempt,
                        max_attempts=self._max_attempts,
                    )
                    continue
                after = self._projector.apply(before, movement)

            logger.info(
                "movement_recorded",
                movement_id=movement.id,
                item_id=item.id,
                location_id=item.location_id,
                movement_type=kind.value,
                direction=way.value,
                quantity=str(qty),
                on_hand=str(after.on_hand),
                actor_id=movement.actor_id,
            )
            return movement

        raise ConcurrencyConflictError(
            f"Could not record movement for item '{item_id}' "
            f"after {self._max_attempts} attempts"
        )

    def ensure_opening_allowed(self, item: Item) -> None:
        """Raise OpeningAlreadyRecordedError if ``item`` may not take an OPENING.

        Lets batch callers apply the opening rule to every entry before the
        first movement is written; ``record`` still enforces it under the lock.
        """
        self._check_opening(item, self._movement_repo.last_sequence(item.id))

    # --- Internal helpers -----------------------------------------------------

    def _load_active(self, item_id: str) -> Item:
        item = self._item_repo.get_by_id(item_id)
        if item is None:
            raise ItemNotFoundError(f"Item not found: '{item_id}'")
        if not item.is_active:
            raise ItemArchivedError(f"Item '{item.name}' is archived")
        return item

    def _check(
        self,
        item: Item,
        kind: MovementType,
        way: Direction,
        qty: Quantity,
        before: OnHand,
    ) -> None:
        if kind == MovementType.OPENING:
            self._check_opening(item, before.movement_count)
        if way == Direction.OUT and qty.value > before.on_hand:
            logger.info(
                "movement_rejected",
                item_id=item.id,
                movement_type=kind.value,
                requested=str(qty),
                available=str(before.on_hand),
            )
            raise InsufficientStockError(
                item_name=item.name,
                requested=qty.value,
                available=before.on_hand,
            )

    def _check_opening(self, item: Item, history_length: int) -> None:
        if self._single_opening and history_length > 0:
            raise OpeningAlreadyRecordedError(
                f"Item '{item.name}' already has stock history; "
                f"record a receipt or adjustment instead"
            )
