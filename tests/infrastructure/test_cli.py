"""End-to-end tests for the click CLI against a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from turfledger.config.settings import reset_settings
from turfledger.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    reset_settings()
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, list(args))

    yield invoke
    reset_settings()


def _add_water(run, reorder_level: str = "10"):
    result = run(
        "item", "add", "--location", "turf-1", "--sku", "bev001",
        "--name", "Water Bottle", "--category", "beverages",
        "--cost-price", "12", "--selling-price", "20",
        "--reorder-level", reorder_level, "--actor", "owner-1",
    )
    assert result.exit_code == 0, result.output
    return result


class TestItemCommands:

    def test_add_and_list(self, run):
        result = _add_water(run)
        assert "Item BEV001 'Water Bottle' added" in result.output

        listing = run("item", "list", "--location", "turf-1")
        assert listing.exit_code == 0
        assert "BEV001" in listing.output
        assert "LOW" in listing.output

    def test_duplicate_sku_fails(self, run):
        _add_water(run)
        result = run(
            "item", "add", "--location", "turf-1", "--sku", "BEV001",
            "--name", "Again", "--category", "Beverages", "--actor", "owner-1",
        )
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_archive_hides_item(self, tmp_path, run):
        _add_water(run)
        item_id = json.loads((tmp_path / "items.json").read_text())[0]["id"]

        result = run("item", "archive", "--id", item_id)

        assert result.exit_code == 0
        assert "No items found." in run("item", "list", "--location", "turf-1").output

    def test_archive_unknown_item_fails(self, run):
        result = run("item", "archive", "--id", "missing")
        assert result.exit_code == 1
        assert "Item not found" in result.output


class TestStockCommands:

    def test_opening_receive_sell_show(self, run):
        _add_water(run)
        assert run("stock", "opening", "--location", "turf-1",
                   "--items", "BEV001:50", "--actor", "owner-1").exit_code == 0
        assert run("stock", "receive", "--location", "turf-1", "--sku", "BEV001",
                   "--quantity", "20", "--actor", "owner-1").exit_code == 0
        sold = run("stock", "sell", "--location", "turf-1", "--sku", "BEV001",
                   "--quantity", "30", "--actor", "staff-1")
        assert sold.exit_code == 0
        assert "Sale: -30 pcs of Water Bottle recorded." in sold.output

        shown = run("stock", "show", "--location", "turf-1", "--sku", "BEV001")
        assert "Total in:      70 pcs" in shown.output
        assert "On hand:       40 pcs" in shown.output

    def test_oversell_fails_with_available(self, run):
        _add_water(run)
        run("stock", "opening", "--location", "turf-1", "--items", "BEV001:5", "--actor", "owner-1")

        result = run("stock", "sell", "--location", "turf-1", "--sku", "BEV001",
                     "--quantity", "6", "--actor", "staff-1")

        assert result.exit_code == 1
        assert "Insufficient stock for Water Bottle (need 6, have 5 available)" in result.output

    def test_adjust_and_history(self, run):
        _add_water(run)
        run("stock", "opening", "--location", "turf-1", "--items", "BEV001:40", "--actor", "owner-1")
        adjusted = run("stock", "adjust", "--location", "turf-1", "--sku", "BEV001",
                       "--direction", "out", "--quantity", "5", "--reason", "damage",
                       "--details", "broke in transit", "--actor", "owner-1")
        assert adjusted.exit_code == 0, adjusted.output

        history = run("stock", "history", "--location", "turf-1", "--sku", "BEV001")
        lines = history.output.splitlines()
        assert "Adjustment" in lines[2]
        assert "Damage: broke in transit" in lines[2]
        assert "Opening Stock" in lines[3]

    def test_unknown_sku_fails(self, run):
        result = run("stock", "receive", "--location", "turf-1", "--sku", "NOPE",
                     "--quantity", "1", "--actor", "owner-1")
        assert result.exit_code == 1
        assert "No item with SKU 'NOPE'" in result.output

    def test_bad_opening_format_rejected(self, run):
        _add_water(run)
        result = run("stock", "opening", "--location", "turf-1", "--items", "BEV001=5", "--actor", "owner-1")
        assert result.exit_code == 2

    def test_verify_reports_and_repairs_drift(self, tmp_path, run):
        _add_water(run)
        run("stock", "opening", "--location", "turf-1", "--items", "BEV001:8", "--actor", "owner-1")
        assert run("stock", "verify", "--location", "turf-1").exit_code == 0

        row_path = next((tmp_path / "on_hand").glob("*.json"))
        row = json.loads(row_path.read_text())
        row["total_in"] = "80"
        row_path.write_text(json.dumps(row))

        drifted = run("stock", "verify", "--location", "turf-1")
        assert drifted.exit_code == 1
        assert "cached 80, ledger 8" in drifted.output

        repaired = run("stock", "verify", "--location", "turf-1", "--repair")
        assert repaired.exit_code == 0
        assert "Rebuilt 1 projection(s)." in repaired.output
        assert run("stock", "verify", "--location", "turf-1").exit_code == 0


class TestReportCommands:

    def _stock_up(self, run):
        _add_water(run, reorder_level="10")
        run("stock", "opening", "--location", "turf-1", "--items", "BEV001:12", "--actor", "owner-1")
        run("stock", "sell", "--location", "turf-1", "--sku", "BEV001", "--quantity", "7", "--actor", "staff-1")

    def test_overview(self, run):
        self._stock_up(run)
        result = run("report", "overview", "--location", "turf-1")
        assert result.exit_code == 0
        assert "Active items:     1" in result.output
        assert "Low stock:        1" in result.output
        assert "Value at cost:    60.00" in result.output

    def test_overview_without_opening_stock(self, run):
        _add_water(run)
        result = run("report", "overview", "--location", "turf-1")
        assert "Opening stock has not been recorded yet." in result.output

    def test_low_stock(self, run):
        self._stock_up(run)
        result = run("report", "low-stock", "--location", "turf-1")
        assert result.exit_code == 0
        assert "Water Bottle" in result.output

    def test_top_selling_default_window(self, run):
        self._stock_up(run)
        result = run("report", "top-selling", "--location", "turf-1")
        assert result.exit_code == 0
        assert "140.00" in result.output

    def test_window_needs_both_ends(self, run):
        result = run("report", "top-selling", "--location", "turf-1", "--start", "2026-03-01")
        assert result.exit_code == 2

    def test_inverted_window_rejected(self, run):
        result = run("report", "movements", "--location", "turf-1",
                     "--start", "2026-03-05", "--end", "2026-03-01")
        assert result.exit_code == 2

    def test_valuation(self, run):
        self._stock_up(run)
        result = run("report", "valuation", "--location", "turf-1")
        assert result.exit_code == 0
        assert "Beverages" in result.output
        assert "100.00" in result.output

    def test_movements(self, run):
        self._stock_up(run)
        result = run("report", "movements", "--location", "turf-1", "--days", "1")
        assert result.exit_code == 0
        assert "in +12" in result.output
        assert "out -7" in result.output
