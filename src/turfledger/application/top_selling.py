"""Application service: Top Selling report (query).

Aggregates SALE movements inside a reporting window per item.  Sales of
archived items still count; their history stays readable.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from turfledger.domain.exceptions import ValidationError
from turfledger.domain.model.item import Item
from turfledger.domain.model.movement import MovementType
from turfledger.domain.model.report_window import ReportingCalendar, ReportWindow
from turfledger.domain.model.value_objects import ZERO, Money
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.repository.movement_repository import MovementRepository

DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class TopSellingLine:
    item: Item
    quantity_sold: Decimal
    revenue: Money


class TopSellingHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        movement_repo: MovementRepository,
        calendar: ReportingCalendar | None = None,
    ) -> None:
        self._item_repo = item_repo
        self._movement_repo = movement_repo
        self._calendar = calendar or ReportingCalendar()

    def handle(
        self, location_id: str, window: ReportWindow, limit: int = DEFAULT_LIMIT
    ) -> list[TopSellingLine]:
        """Best sellers by quantity, ties in item creation order."""
        if limit < 1:
            raise ValidationError("Limit must be at least 1")

        since, until = self._calendar.bounds(location_id, window)
        sold: dict[str, Decimal] = {}
        for movement in self._movement_repo.list_by_location(location_id, since, until):
            if movement.movement_type != MovementType.SALE:
                continue
            sold[movement.item_id] = sold.get(movement.item_id, ZERO) + movement.quantity.value

        # Catalog order is creation order; sorted() is stable
        items = self._item_repo.list_by_location(location_id, include_archived=True)
        lines = [
            TopSellingLine(
                item=item,
                quantity_sold=sold[item.id],
                revenue=(item.selling_price or Money.zero()) * sold[item.id],
            )
            for item in items
            if item.id in sold
        ]
        lines = sorted(lines, key=lambda line: line.quantity_sold, reverse=True)
        return lines[:limit]
