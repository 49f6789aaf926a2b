"""JSON-file-backed implementation of OnHandRepository.

One small file per item under ``<root>/<item_id>.json``.  Rows are swapped
in atomically, so a report reading a row while the ledger rewrites it sees
the old row or the new one.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from turfledger.domain.model.on_hand import OnHand
from turfledger.domain.repository.on_hand_repository import OnHandRepository
from turfledger.infrastructure.persistence.file_store import write_atomic


class JsonOnHandRepository(OnHandRepository):

    def __init__(self, root_dir: Path) -> None:
        self._root_dir = root_dir
        self._root_dir.mkdir(parents=True, exist_ok=True)

    # --- OnHandRepository interface -------------------------------------------

    def get(self, item_id: str) -> OnHand | None:
        path = self._path(item_id)
        if not path.exists():
            return None
        return self._to_domain(json.loads(path.read_text(encoding="utf-8")))

    def save(self, on_hand: OnHand) -> None:
        write_atomic(
            self._path(on_hand.item_id), json.dumps(self._to_raw(on_hand), indent=2) + "\n"
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(on_hand: OnHand) -> dict:
        return {
            "item_id": on_hand.item_id,
            "total_in": str(on_hand.total_in),
            "total_out": str(on_hand.total_out),
            "last_movement_at": (
                on_hand.last_movement_at.isoformat()
                if on_hand.last_movement_at is not None
                else None
            ),
            "movement_count": on_hand.movement_count,
        }

    @staticmethod
    def _to_domain(raw: dict) -> OnHand:
        last = raw.get("last_movement_at")
        return OnHand(
            item_id=raw["item_id"],
            total_in=Decimal(raw["total_in"]),
            total_out=Decimal(raw["total_out"]),
            last_movement_at=datetime.fromisoformat(last) if last else None,
            movement_count=raw["movement_count"],
        )

    # --- File helpers ---------------------------------------------------------

    def _path(self, item_id: str) -> Path:
        return self._root_dir / f"{item_id}.json"
