"""Movement: an immutable stock ledger entry.

A movement records a quantity of one item moving in or out of stock at a
point in time.  Once written it is never updated or deleted; mistakes are
corrected with a compensating ADJUSTMENT.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from turfledger.domain.exceptions import ValidationError
from turfledger.domain.model.value_objects import Quantity


class Direction(Enum):
    IN = "IN"
    OUT = "OUT"

    @staticmethod
    def parse(raw: str | Direction) -> Direction:
        if isinstance(raw, Direction):
            return raw
        try:
            return Direction((raw or "").strip().upper())
        except ValueError:
            raise ValidationError(f"Unknown direction '{raw}' (expected IN or OUT)")


class MovementType(Enum):
    OPENING = "OPENING"
    RECEIPT = "RECEIPT"
    SALE = "SALE"
    ADJUSTMENT = "ADJUSTMENT"

    @staticmethod
    def parse(raw: str | MovementType) -> MovementType:
        if isinstance(raw, MovementType):
            return raw
        text = (raw or "").strip().upper()
        if text in _LEGACY_TYPE_CODES:
            return _LEGACY_TYPE_CODES[text]
        try:
            return MovementType(text)
        except ValueError:
            allowed = ", ".join(t.value for t in MovementType)
            raise ValidationError(
                f"Unknown movement type '{raw}' (expected one of: {allowed})"
            )

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]

    @property
    def allowed_directions(self) -> frozenset[Direction]:
        return ALLOWED_DIRECTIONS[self]


_LEGACY_TYPE_CODES = {"GRN": MovementType.RECEIPT}

_TYPE_LABELS = {
    MovementType.OPENING: "Opening Stock",
    MovementType.RECEIPT: "Stock In",
    MovementType.SALE: "Sale",
    MovementType.ADJUSTMENT: "Adjustment",
}

# Every movement type maps to the directions the ledger accepts for it.
ALLOWED_DIRECTIONS: dict[MovementType, frozenset[Direction]] = {
    MovementType.OPENING: frozenset({Direction.IN}),
    MovementType.RECEIPT: frozenset({Direction.IN}),
    MovementType.SALE: frozenset({Direction.OUT}),
    MovementType.ADJUSTMENT: frozenset({Direction.IN, Direction.OUT}),
}


def resolve_direction(
    movement_type: MovementType, direction: Direction | None
) -> Direction:
    """Return the direction for a movement, deriving it when unambiguous.

    Raises ValidationError if the pairing is not allowed or if an
    ADJUSTMENT does not say which way it goes.
    """
    allowed = ALLOWED_DIRECTIONS[movement_type]
    if direction is None:
        if len(allowed) != 1:
            raise ValidationError(
                f"Direction is required for {movement_type.value} movements"
            )
        return next(iter(allowed))
    if direction not in allowed:
        raise ValidationError(
            f"{movement_type.value} movements cannot be {direction.value}"
        )
    return direction


class AdjustmentReason(Enum):
    DAMAGE = "Damage"
    EXPIRED = "Expired"
    LOST = "Lost"
    CORRECTION = "Correction"
    TRANSFER = "Transfer"
    OTHER = "Other"

    @staticmethod
    def parse(raw: str | AdjustmentReason) -> AdjustmentReason:
        if isinstance(raw, AdjustmentReason):
            return raw
        text = (raw or "").strip().lower()
        for reason in AdjustmentReason:
            if reason.value.lower() == text:
                return reason
        allowed = ", ".join(r.value for r in AdjustmentReason)
        raise ValidationError(
            f"Unknown adjustment reason '{raw}' (expected one of: {allowed})"
        )


def adjustment_notes(reason: str | AdjustmentReason, details: str | None = None) -> str:
    """Build ``"<Reason>: <details>"`` notes for an ADJUSTMENT movement."""
    code = AdjustmentReason.parse(reason).value
    details = (details or "").strip()
    return f"{code}: {details}" if details else code


def parse_adjustment_reason(notes: str | None) -> AdjustmentReason:
    """Extract the reason code that ADJUSTMENT notes must start with."""
    if not notes or not notes.strip():
        raise ValidationError("Adjustment notes with a reason code are required")
    head = notes.strip().split(":", 1)[0]
    return AdjustmentReason.parse(head)


@dataclass(frozen=True)
class Movement:
    """A single stock movement.

    ``sequence`` is the 1-based position of the movement in its item's
    history; ``created_at`` is assigned by the ledger and is strictly
    increasing per location.
    """

    id: str
    item_id: str
    location_id: str
    movement_type: MovementType
    direction: Direction
    quantity: Quantity
    actor_id: str
    created_at: datetime
    sequence: int
    notes: str | None = None

    @property
    def is_inbound(self) -> bool:
        return self.direction == Direction.IN
