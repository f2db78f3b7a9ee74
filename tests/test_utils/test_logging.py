"""Tests for tech_health/utils/logging.py."""

from __future__ import annotations

import json
import logging

import pytest

from tech_health.config import LoggingConfig
from tech_health.utils.logging import _JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str = "hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "tech_health.test", logging.WARNING, __file__, 1, msg, args, None
    )
    for key, val in extra.items():
        setattr(record, key, val)
    return record


class TestJsonFormatter:
    def test_core_fields(self):
        payload = json.loads(_JsonFormatter().format(_record()))
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "tech_health.test"
        assert payload["msg"] == "hello world"
        assert payload["ts"].endswith("Z")

    def test_extra_fields_included(self):
        payload = json.loads(_JsonFormatter().format(_record(count=7)))
        assert payload["count"] == 7
        assert "levelno" not in payload


class TestConfigureLogging:
    def test_sets_root_level(self):
        configure_logging(LoggingConfig(level="warning"))
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler_created(self, tmp_path):
        log_file = tmp_path / "logs" / "recs.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
        logging.getLogger("tech_health.test").info("written")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")
