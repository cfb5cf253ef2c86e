"""Structured logging helpers: level parsing, events and formatting."""
from __future__ import annotations

import json
import logging

from fault_interceptor.base.log_support import JsonFormatter, LogContext
from fault_interceptor.base.logging import _parse_level, configure_logger, get_logger, log_event


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("fault_interceptor.test", logging.INFO, __file__, 1, msg, None, None)


def test_parse_level():
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level(" warn ") == logging.WARNING  # nosec B101
    assert _parse_level("nonsense", default=logging.ERROR) == logging.ERROR  # nosec B101
    assert _parse_level(None) == logging.INFO  # nosec B101


def test_child_loggers_propagate_to_base():
    child = get_logger("fault_interceptor.test.child")
    assert child.propagate is True  # nosec B101
    assert child.level == logging.NOTSET  # nosec B101
    assert not child.handlers  # nosec B101
    assert get_logger().propagate is False  # nosec B101


def test_log_event_payload_drops_none(log_capture):
    logger = get_logger("fault_interceptor.test.events")
    log_event(
        logger,
        "fault.caught",
        LogContext(operation="Service.op", channel="sync", extra={"attempt": 1, "skip": None}),
        code=None,
        message="Caught error: boom",
    )
    (payload,) = log_capture.events()
    assert payload == {  # nosec B101
        "event": "fault.caught",
        "operation": "Service.op",
        "channel": "sync",
        "attempt": 1,
        "message": "Caught error: boom",
    }


def test_log_event_respects_level(log_capture):
    logger = get_logger("fault_interceptor.test.levels")
    logging.getLogger("fault_interceptor").setLevel(logging.INFO)
    log_event(logger, "interceptor.call", level=logging.DEBUG)
    assert log_capture.events() == []  # nosec B101


def test_json_formatter_hoists_event_keys():
    line = JsonFormatter().format(_record(json.dumps({"event": "fault.caught", "code": 404})))
    data = json.loads(line)
    assert data["event"] == "fault.caught" and data["code"] == 404  # nosec B101
    assert data["logger"] == "fault_interceptor.test"  # nosec B101
    assert "msg" not in data  # nosec B101


def test_json_formatter_keeps_plain_text():
    data = json.loads(JsonFormatter().format(_record("plain words")))
    assert data["msg"] == "plain words"  # nosec B101
    assert data["level"] == "INFO"  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "interceptor.log"
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        assert logger.level == logging.DEBUG  # nosec B101
        log_event(logger, "interceptor.call", level=logging.DEBUG)
        for h in logger.handlers:
            h.flush()
        assert '"interceptor.call"' in target.read_text(encoding="utf-8")  # nosec B101
        # same path reuses the handler
        configure_logger(file_path=str(target))
        files = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(files) == 1  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not [h for h in logger.handlers if isinstance(h, logging.FileHandler)]  # nosec B101
