"""JSON-lines-backed implementation of MovementRepository.

Each item's history lives in its own append-only file,
``<root>/<location_id>/<item_id>.jsonl``, one movement per line.  Appends
for different items never touch the same file.

The sequence check and the append run under the file's inter-process lock,
so two writers (threads or CLI processes) cannot both append the same
sequence; the loser gets ConcurrencyConflictError.  Readers take the same
lock so they never see a partly written line.
"""

from __future__ import annotations

import json
import os
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from turfledger.domain.exceptions import ConcurrencyConflictError
from turfledger.domain.model.movement import Direction, Movement, MovementType
from turfledger.domain.model.value_objects import Quantity
from turfledger.domain.repository.movement_repository import MovementRepository
from turfledger.infrastructure.persistence.file_store import locked


class JsonMovementRepository(MovementRepository):

    def __init__(self, root_dir: Path) -> None:
        self._root_dir = root_dir
        self._root_dir.mkdir(parents=True, exist_ok=True)

    # --- MovementRepository interface -----------------------------------------

    def append(self, movement: Movement, expected_sequence: int) -> None:
        path = self._root_dir / movement.location_id / f"{movement.item_id}.jsonl"
        with locked(path):
            stored = len(self._load_raw(path))
            if stored != expected_sequence:
                raise ConcurrencyConflictError(
                    f"Item {movement.item_id} has {stored} movements, "
                    f"expected {expected_sequence}"
                )
            with path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(self._to_raw(movement)) + "\n")
                fh.flush()
                os.fsync(fh.fileno())

    def last_sequence(self, item_id: str) -> int:
        path = self._find_item_file(item_id)
        return len(self._read(path)) if path is not None else 0

    def list_by_item(self, item_id: str) -> list[Movement]:
        path = self._find_item_file(item_id)
        if path is None:
            return []
        return [self._to_domain(raw) for raw in self._read(path)]

    def list_by_location(
        self,
        location_id: str,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[Movement]:
        location_dir = self._root_dir / location_id
        if not location_dir.is_dir():
            return []
        movements = [
            self._to_domain(raw)
            for path in sorted(location_dir.glob("*.jsonl"))
            for raw in self._read(path)
        ]
        if since is not None:
            movements = [m for m in movements if m.created_at >= since]
        if until is not None:
            movements = [m for m in movements if m.created_at <= until]
        return sorted(movements, key=lambda m: (m.created_at, m.sequence))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(movement: Movement) -> dict:
        return {
            "id": movement.id,
            "item_id": movement.item_id,
            "location_id": movement.location_id,
            "type": movement.movement_type.value,
            "direction": movement.direction.value,
            "quantity": str(movement.quantity.value),
            "notes": movement.notes,
            "actor_id": movement.actor_id,
            "created_at": movement.created_at.isoformat(),
            "sequence": movement.sequence,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Movement:
        return Movement(
            id=raw["id"],
            item_id=raw["item_id"],
            location_id=raw["location_id"],
            movement_type=MovementType(raw["type"]),
            direction=Direction(raw["direction"]),
            quantity=Quantity(Decimal(raw["quantity"])),
            actor_id=raw["actor_id"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            sequence=raw["sequence"],
            notes=raw.get("notes"),
        )

    # --- File helpers ---------------------------------------------------------

    def _find_item_file(self, item_id: str) -> Path | None:
        for path in self._root_dir.glob(f"*/{item_id}.jsonl"):
            return path
        return None

    def _read(self, path: Path) -> list[dict]:
        with locked(path):
            return self._load_raw(path)

    @staticmethod
    def _load_raw(path: Path) -> list[dict]:
        if not path.exists():
            return []
        with path.open(encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
