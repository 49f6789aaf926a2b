"""Tests for the structlog setup."""

import json
import logging

import pytest
import structlog

from turfledger.config.logging import configure_logging, get_logger
from turfledger.config.settings import reset_settings


@pytest.fixture
def configure(monkeypatch):
    def apply(environment: str, level: str = "INFO"):
        monkeypatch.setenv("ENVIRONMENT", environment)
        monkeypatch.setenv("LOG_LEVEL", level)
        reset_settings()
        configure_logging()

    yield apply
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    reset_settings()


def test_production_writes_json_lines_to_stderr(configure, capsys):
    configure("production")

    get_logger("turfledger.audit").info("movement_recorded", item_id="item-1", on_hand="42")

    captured = capsys.readouterr()
    assert captured.out == ""
    event = json.loads(captured.err.strip().splitlines()[-1])
    assert event["event"] == "movement_recorded"
    assert event["item_id"] == "item-1"
    assert event["level"] == "info"
    assert event["logger"] == "turfledger.audit"
    assert event["timestamp"].endswith("Z")
    assert set(event) == {"event", "item_id", "on_hand", "level", "logger", "timestamp"}


def test_development_renders_plain_lines_and_honours_level(configure, capsys):
    configure("development", level="WARNING")
    logger = get_logger("turfledger.projector")

    logger.info("projection_rebuilt", item_id="item-1")
    logger.warning("projection_drift", item_id="item-1")

    err = capsys.readouterr().err
    assert "projection_rebuilt" not in err
    assert "projection_drift" in err
    assert "item_id=item-1" in err
    assert not err.lstrip().startswith("{")
