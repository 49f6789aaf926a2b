"""Integration tests for the CreateItem use case.

Uses in-memory fake repositories, no file I/O.
"""

from decimal import Decimal

import pytest

from turfledger.application.create_item import CreateItemHandler
from turfledger.domain.exceptions import DuplicateSKUError, ValidationError
from turfledger.domain.service.lock_registry import LockRegistry
from tests.fakes import FakeItemRepository


def _setup() -> tuple[CreateItemHandler, FakeItemRepository]:
    repo = FakeItemRepository()
    return CreateItemHandler(repo, LockRegistry()), repo


class TestCreateItem:

    def test_creates_and_persists(self):
        handler, repo = _setup()
        item = handler.handle(
            "turf-1", "bev001", "Water Bottle", "Beverages",
            cost_price="12", selling_price="20", reorder_level="10", actor_id="owner-1",
        )
        assert repo.get_by_id(item.id) is item
        assert item.sku == "BEV001"
        assert item.created_by == "owner-1"
        assert item.reorder_level == Decimal("10")

    def test_duplicate_sku_is_case_insensitive(self):
        handler, _ = _setup()
        handler.handle("turf-1", "BEV001", "Water Bottle", "Beverages")
        with pytest.raises(DuplicateSKUError, match="BEV001"):
            handler.handle("turf-1", " bev001 ", "Other Water", "Beverages")

    def test_archived_item_keeps_sku_reserved(self):
        handler, repo = _setup()
        item = handler.handle("turf-1", "BEV001", "Water Bottle", "Beverages")
        item.archive()
        repo.save(item)
        with pytest.raises(DuplicateSKUError):
            handler.handle("turf-1", "BEV001", "Water Bottle", "Beverages")

    def test_same_sku_at_other_location_allowed(self):
        handler, repo = _setup()
        handler.handle("turf-1", "BEV001", "Water Bottle", "Beverages")
        other = handler.handle("turf-2", "BEV001", "Water Bottle", "Beverages")
        assert repo.get_by_sku("turf-2", "bev001") is other

    def test_invalid_input_persists_nothing(self):
        handler, repo = _setup()
        with pytest.raises(ValidationError):
            handler.handle("turf-1", "BEV001", "Water", "Beverages", cost_price="-1")
        assert repo.list_by_location("turf-1", include_archived=True) == []
