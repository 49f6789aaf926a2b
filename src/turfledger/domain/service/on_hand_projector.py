"""Domain service: On-Hand Projector.

The single owner of "how much do we have now".  Every other component asks
the projector instead of summing movements itself.

Cached rows are trusted only while their ``movement_count`` matches the
length of the item's history in the movement log; otherwise the row is
replayed from the log.  That keeps the ledger authoritative even if the
cache is lost, stale or written by another process.

Queries never write: a stale row is replayed and returned without being
saved.  Only the ledger, inside an item's critical section, and an
explicit ``rebuild`` replace cached rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from turfledger.config.logging import get_logger
from turfledger.domain.exceptions import ItemNotFoundError
from turfledger.domain.model.movement import Movement
from turfledger.domain.model.on_hand import OnHand
from turfledger.domain.repository.item_repository import ItemRepository
from turfledger.domain.repository.movement_repository import MovementRepository
from turfledger.domain.repository.on_hand_repository import OnHandRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectionDrift:
    """A cached row that disagrees with a replay of the ledger."""

    item_id: str
    cached: OnHand
    replayed: OnHand


class OnHandProjector:

    def __init__(
        self,
        item_repo: ItemRepository,
        movement_repo: MovementRepository,
        on_hand_repo: OnHandRepository,
    ) -> None:
        self._item_repo = item_repo
        self._movement_repo = movement_repo
        self._on_hand_repo = on_hand_repo

    # --- Queries --------------------------------------------------------------

    def get_on_hand(self, item_id: str) -> OnHand:
        """Return current totals for an item.

        Raises ItemNotFoundError if the item is unknown.
        """
        if self._item_repo.get_by_id(item_id) is None:
            raise ItemNotFoundError(f"Item not found: '{item_id}'")
        return self.snapshot(item_id)

    def get_on_hand_batch(self, item_ids: Iterable[str]) -> dict[str, OnHand]:
        """Return totals for many items; unknown IDs are left out."""
        result: dict[str, OnHand] = {}
        for item_id in item_ids:
            if item_id in result or self._item_repo.get_by_id(item_id) is None:
                continue
            result[item_id] = self.snapshot(item_id)
        return result

    def snapshot(self, item_id: str) -> OnHand:
        """Return the cached row if it is in step with the ledger, else a replay.

        Read-only, safe to call while movements are being recorded.
        """
        cached = self._in_step(item_id)
        if cached is not None:
            return cached
        return OnHand.replay(item_id, self._movement_repo.list_by_item(item_id))

    def current(self, item_id: str) -> OnHand:
        """Like ``snapshot`` but a stale row is rebuilt and saved.

        Writer path: call inside the item's critical section.
        """
        cached = self._in_step(item_id)
        if cached is not None:
            return cached
        return self.rebuild(item_id)

    def _in_step(self, item_id: str) -> OnHand | None:
        # Rows are saved after their append, so a row can lag the log but never lead it
        cached = self._on_hand_repo.get(item_id)
        if cached is not None and cached.movement_count == self._movement_repo.last_sequence(item_id):
            return cached
        return None

    # --- Updates --------------------------------------------------------------

    def apply(self, before: OnHand, movement: Movement) -> OnHand:
        """Fold a freshly appended movement into the cached row.

        Must be called inside the item's critical section with the state
        the ledger checked against.
        """
        after = before.apply(movement)
        self._on_hand_repo.save(after)
        return after

    def rebuild(self, item_id: str) -> OnHand:
        """Replay the item's history and replace the cached row."""
        replayed = OnHand.replay(item_id, self._movement_repo.list_by_item(item_id))
        self._on_hand_repo.save(replayed)
        logger.debug(
            "projection_rebuilt",
            item_id=item_id,
            movement_count=replayed.movement_count,
            on_hand=str(replayed.on_hand),
        )
        return replayed

    def verify(self, location_id: str) -> list[ProjectionDrift]:
        """Compare every cached row at a location with a fresh replay.

        Read-only: drifted rows are reported, not repaired.
        """
        drifts: list[ProjectionDrift] = []
        for item in self._item_repo.list_by_location(location_id, include_archived=True):
            cached = self._on_hand_repo.get(item.id)
            if cached is None:
                continue
            replayed = OnHand.replay(item.id, self._movement_repo.list_by_item(item.id))
            if cached != replayed:
                logger.warning(
                    "projection_drift",
                    item_id=item.id,
                    cached_on_hand=str(cached.on_hand),
                    replayed_on_hand=str(replayed.on_hand),
                )
                drifts.append(ProjectionDrift(item.id, cached, replayed))
        return drifts
