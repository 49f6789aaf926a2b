"""Application service: Movement Summary report (query).

Groups a window's movements by calendar day in the location's reporting
timezone.  Most recent day first; inside a day, newest movement first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from turfledger.domain.model.movement import Direction
from turfledger.domain.model.report_window import ReportingCalendar, ReportWindow
from turfledger.domain.model.value_objects import ZERO
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.repository.movement_repository import MovementRepository


@dataclass(frozen=True)
class MovementLine:
    movement_id: str
    item_id: str
    item_name: str
    direction: Direction
    quantity: Decimal
    type_label: str
    notes: str | None
    created_at: datetime


@dataclass
class DailyMovements:
    date: date
    total_in: Decimal = ZERO
    total_out: Decimal = ZERO
    movements: list[MovementLine] = field(default_factory=list)


class MovementSummaryHandler:

    def __init__(
        self,
        item_repo: ItemRepository,
        movement_repo: MovementRepository,
        calendar: ReportingCalendar | None = None,
    ) -> None:
        self._item_repo = item_repo
        self._movement_repo = movement_repo
        self._calendar = calendar or ReportingCalendar()

    def handle(self, location_id: str, window: ReportWindow) -> list[DailyMovements]:
        tz = self._calendar.timezone_for(location_id)
        since, until = self._calendar.bounds(location_id, window)
        names = {
            item.id: item.name
            for item in self._item_repo.list_by_location(location_id, include_archived=True)
        }

        days: dict[date, DailyMovements] = {}
        movements = self._movement_repo.list_by_location(location_id, since, until)
        for movement in sorted(
            movements, key=lambda m: (m.created_at, m.sequence), reverse=True
        ):
            if not window.contains(movement.created_at, tz):
                continue
            day = window.local_date(movement.created_at, tz)
            bucket = days.setdefault(day, DailyMovements(date=day))
            qty = movement.quantity.value
            if movement.direction == Direction.IN:
                bucket.total_in += qty
            else:
                bucket.total_out += qty
            bucket.movements.append(
                MovementLine(
                    movement_id=movement.id,
                    item_id=movement.item_id,
                    item_name=names.get(movement.item_id, movement.item_id),
                    direction=movement.direction,
                    quantity=qty,
                    type_label=movement.movement_type.label,
                    notes=movement.notes,
                    created_at=movement.created_at,
                )
            )

        return [days[day] for day in sorted(days, reverse=True)]
