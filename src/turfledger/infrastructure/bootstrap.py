"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Repositories are cheap views over the data directory and are built per
call; the lock registry and clock are process-wide so every ledger built
here serializes on the same per-item locks.
"""

from __future__ import annotations

from turfledger.config.settings import get_settings
from turfledger.domain.model.report_window import ReportingCalendar
from turfledger.domain.service.location_clock import LocationClock
from turfledger.domain.service.lock_registry import LockRegistry
from turfledger.domain.service.movement_ledger import MovementLedger
from turfledger.domain.service.on_hand_projector import OnHandProjector
from turfledger.infrastructure.persistence.json_item_repository import (
    JsonItemRepository,
)
from turfledger.infrastructure.persistence.json_movement_repository import (
    JsonMovementRepository,
)
from turfledger.infrastructure.persistence.json_on_hand_repository import (
    JsonOnHandRepository,
)

_LOCKS = LockRegistry()
_CLOCK = LocationClock()


def lock_registry() -> LockRegistry:
    return _LOCKS


def item_repository() -> JsonItemRepository:
    return JsonItemRepository(get_settings().storage.items_path)


def movement_repository() -> JsonMovementRepository:
    return JsonMovementRepository(get_settings().storage.movements_dir)


def on_hand_repository() -> JsonOnHandRepository:
    return JsonOnHandRepository(get_settings().storage.on_hand_dir)


def on_hand_projector() -> OnHandProjector:
    return OnHandProjector(
        item_repo=item_repository(),
        movement_repo=movement_repository(),
        on_hand_repo=on_hand_repository(),
    )


def movement_ledger() -> MovementLedger:
    settings = get_settings().ledger
    return MovementLedger(
        item_repo=item_repository(),
        movement_repo=movement_repository(),
        projector=on_hand_projector(),
        locks=_LOCKS,
        clock=_CLOCK,
        max_attempts=settings.max_attempts,
        single_opening=settings.single_opening,
    )


def reporting_calendar() -> ReportingCalendar:
    settings = get_settings().report
    return ReportingCalendar(
        default_timezone=settings.timezone,
        location_timezones=settings.location_timezones,
    )
