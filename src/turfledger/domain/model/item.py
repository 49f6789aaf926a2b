"""Item aggregate: a stock-keeping unit owned by one location.

Items live independently of the movements that reference them. They have
their own lifecycle: prices are set at creation, and an item can be
archived (soft-deleted) while its history stays readable.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from turfledger.domain.exceptions import ValidationError
from turfledger.domain.model.value_objects import ZERO, Money, to_decimal


class Category(Enum):
    BEVERAGES = "Beverages"
    EQUIPMENT = "Equipment"
    APPAREL = "Apparel"
    SNACKS = "Snacks"
    OTHER = "Other"

    @staticmethod
    def parse(raw: str | Category) -> Category:
        if isinstance(raw, Category):
            return raw
        text = (raw or "").strip().lower()
        for category in Category:
            if category.value.lower() == text or category.name.lower() == text:
                return category
        allowed = ", ".join(c.value for c in Category)
        raise ValidationError(f"Unknown category '{raw}' (expected one of: {allowed})")


class ItemStatus(Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


def normalize_sku(sku: str) -> str:
    return (sku or "").strip().upper()


@dataclass
class Item:
    """Aggregate root for a tracked SKU.

    Use the ``Item.create()`` factory for new items; it enforces all
    catalog rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted items without re-validating.
    """

    id: str
    location_id: str
    sku: str
    name: str
    category: Category
    unit: str
    cost_price: Money | None = None
    selling_price: Money | None = None
    reorder_level: Decimal | None = ZERO
    status: ItemStatus = ItemStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    created_by: str | None = None

    # --- Factory (used for NEW items only) ------------------------------------

    @staticmethod
    def create(
        location_id: str,
        sku: str,
        name: str,
        category: str | Category,
        unit: str = "pcs",
        cost_price: str | Decimal | None = None,
        selling_price: str | Decimal | None = None,
        reorder_level: str | Decimal | None = None,
        created_by: str | None = None,
    ) -> Item:
        """Create a new active item, enforcing all invariants."""
        if not location_id or not location_id.strip():
            raise ValidationError("Location is required")
        if not normalize_sku(sku):
            raise ValidationError("SKU code is required")
        if not name or not name.strip():
            raise ValidationError("Item name is required")

        level = ZERO
        if reorder_level is not None and str(reorder_level).strip() != "":
            level = to_decimal(reorder_level, "reorder level")
            if level < ZERO:
                raise ValidationError("Reorder level cannot be negative")

        return Item(
            id=uuid.uuid4().hex,
            location_id=location_id.strip(),
            sku=normalize_sku(sku),
            name=name.strip(),
            category=Category.parse(category),
            unit=(unit or "").strip() or "pcs",
            cost_price=_optional_price(cost_price, "cost price"),
            selling_price=_optional_price(selling_price, "selling price"),
            reorder_level=level,
            created_by=created_by,
        )

    # --- State transitions ----------------------------------------------------

    def archive(self) -> bool:
        """Archive the item. Returns False if it was already archived."""
        if self.status == ItemStatus.ARCHIVED:
            return False
        self.status = ItemStatus.ARCHIVED
        return True

    # --- Computed properties --------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status == ItemStatus.ACTIVE

    def is_low_stock(self, on_hand: Decimal) -> bool:
        return self.reorder_level is not None and on_hand <= self.reorder_level


def _optional_price(raw: str | Decimal | None, label: str) -> Money | None:
    if raw is None or str(raw).strip() == "":
        return None
    amount = to_decimal(raw, label)
    if amount < ZERO:
        raise ValidationError(f"{label.capitalize()} cannot be negative")
    return Money(amount)
