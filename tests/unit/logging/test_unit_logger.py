# tests/unit/logging/test_unit_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging

from docdigest.logging.context import clear_context, set_request_context, set_stage
from docdigest.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "Hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_request_context("req1", "f" * 64)
        set_stage("parse")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"]["request_id"] == "req1"
        assert parsed["context"]["stage"] == "parse"

    def test_format_with_data(self):
        parsed = json.loads(JsonFormatter().format(_record(data={"path": "model"})))
        assert parsed["data"] == {"path": "model"}

    def test_format_with_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys
            record = _record()
            record.exc_info = sys.exc_info()
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in parsed["exception"]


class TestTextFormatter:
    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_stage_and_fingerprint(self):
        set_request_context("req1", "abcdef0123456789")
        set_stage("call")
        output = TextFormatter().format(_record())
        assert "[abcdef012345]" in output
        assert "(call)" in output


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("test_module")
        assert logger.name == "docdigest.test_module"


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger("docdigest").handlers.clear()

    def test_json_console_handler(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("docdigest")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_reinit_does_not_duplicate(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("docdigest").handlers) == 1

    def test_text_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        setup_logging(log_format="text", log_file=log_file)
        root = logging.getLogger("docdigest")
        assert len(root.handlers) == 2
        assert isinstance(root.handlers[1].formatter, TextFormatter)
        root.warning("written")
        for handler in root.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")
