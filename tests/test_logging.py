"""Tests for logging configuration."""

import json
import logging

import pytest

from mediagate.logging_config import HANDLER_NAME, get_logger, setup_logging


@pytest.fixture
def restore_logging():
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)


def _json_lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


def test_server_loggers_share_the_gateway_handler(restore_logging):
    logging.getLogger("uvicorn.access").addHandler(logging.NullHandler())

    setup_logging("DEBUG")

    ours = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
    assert len(ours) == 1
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        server_logger = logging.getLogger(name)
        assert server_logger.handlers == []
        assert server_logger.propagate is True
        assert server_logger.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_repeated_setup_keeps_one_handler(restore_logging):
    setup_logging("INFO")
    setup_logging("WARNING")

    ours = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
    assert len(ours) == 1
    assert logging.getLogger().level == logging.WARNING


def test_json_output_for_gateway_and_access_records(restore_logging, capsys):
    setup_logging("INFO", json_format=True)

    get_logger("mediagate.test").info("upload_stored", image_id="test_images/abc")
    logging.getLogger("uvicorn.access").info("GET /images 200")

    records = _json_lines(capsys.readouterr().err)
    gateway = next(r for r in records if r["event"] == "upload_stored")
    assert gateway["image_id"] == "test_images/abc"
    assert gateway["level"] == "info"
    assert "timestamp" in gateway
    access = next(r for r in records if r["event"] == "GET /images 200")
    assert access["logger"] == "uvicorn.access"


def test_records_below_level_are_dropped(restore_logging, capsys):
    setup_logging("WARNING", json_format=True)

    get_logger("mediagate.test").info("upload_received")
    get_logger("mediagate.test").warning("upload_rejected", code="EMPTY_FILE")

    events = [r["event"] for r in _json_lines(capsys.readouterr().err)]
    assert "upload_received" not in events
    assert "upload_rejected" in events
