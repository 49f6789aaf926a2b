"""JSON-file-backed implementation of ItemRepository.

The catalog is one JSON list.  ``save`` rewrites it under the file's
inter-process lock and swaps it in atomically, so readers never need the
lock and concurrent saves from any repository instance or process never
drop each other's items.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from turfledger.domain.model.item import Category, Item, ItemStatus, normalize_sku
from turfledger.domain.model.value_objects import Money
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.infrastructure.persistence.file_store import locked, write_atomic


class JsonItemRepository(ItemRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- ItemRepository interface ---------------------------------------------

    def get_by_id(self, item_id: str) -> Item | None:
        for raw in self._load_raw():
            if raw["id"] == item_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, location_id: str, sku: str) -> Item | None:
        wanted = normalize_sku(sku)
        for raw in self._load_raw():
            if raw["location_id"] == location_id and raw["sku"] == wanted:
                return self._to_domain(raw)
        return None

    def list_by_location(self, location_id: str, include_archived: bool = False) -> list[Item]:
        items = [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["location_id"] == location_id
        ]
        if not include_archived:
            items = [i for i in items if i.is_active]
        return items

    def save(self, item: Item) -> None:
        with locked(self._file_path):
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] == item.id:
                    records[i] = self._to_raw(item)
                    break
            else:
                records.append(self._to_raw(item))
            self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: Item) -> dict:
        return {
            "id": item.id,
            "location_id": item.location_id,
            "sku": item.sku,
            "name": item.name,
            "category": item.category.value,
            "unit": item.unit,
            "cost_price": _money_to_raw(item.cost_price),
            "selling_price": _money_to_raw(item.selling_price),
            "reorder_level": (
                str(item.reorder_level) if item.reorder_level is not None else None
            ),
            "status": item.status.value,
            "created_at": item.created_at.isoformat(),
            "created_by": item.created_by,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Item:
        level = raw.get("reorder_level")
        return Item(
            id=raw["id"],
            location_id=raw["location_id"],
            sku=raw["sku"],
            name=raw["name"],
            category=Category(raw["category"]),
            unit=raw.get("unit", "pcs"),
            cost_price=_money_from_raw(raw.get("cost_price")),
            selling_price=_money_from_raw(raw.get("selling_price")),
            reorder_level=Decimal(level) if level is not None else None,
            status=ItemStatus(raw.get("status", ItemStatus.ACTIVE.value)),
            created_at=datetime.fromisoformat(raw["created_at"]),
            created_by=raw.get("created_by"),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        if not self._file_path.exists():
            return []
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        write_atomic(self._file_path, json.dumps(records, indent=2) + "\n")


def _money_to_raw(money: Money | None) -> str | None:
    return str(money.amount) if money is not None else None


def _money_from_raw(raw: str | None) -> Money | None:
    return Money(Decimal(raw)) if raw is not None else None
