"""Pytest configuration for the interceptor test suite.

Provides a fresh handler per test, a collector for structured log events, and
resets module-level state (cached config file, default handler) around every
test so environment tweaks do not leak.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from fault_interceptor.base import InterceptionHandler, set_error_handler
from fault_interceptor.config import reset_config_cache
from fault_interceptor.config.defaults import DEFAULT_LOGGER_NAME


class ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self) -> List[Dict[str, Any]]:
        """Return JSON payloads emitted through ``log_event``."""
        out = []
        for record in self.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict) and "event" in payload:
                out.append(payload)
        return out


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear config env vars, the config file cache and the default handler."""
    for name in ("FAULT_INTERCEPTOR_CONFIG_FILE", "FAULT_INTERCEPTOR_LOG_LEVEL", "FAULT_INTERCEPTOR_JSON_LOGS"):
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    set_error_handler(None)
    yield
    reset_config_cache()
    set_error_handler(None)


@pytest.fixture()
def handler() -> InterceptionHandler:
    """A handler with the default failure messages and its own error log."""
    return InterceptionHandler()


@pytest.fixture()
def log_capture() -> Iterator[ListHandler]:
    """Attach a collecting handler at DEBUG to the shared interceptor logger."""
    logger = logging.getLogger(DEFAULT_LOGGER_NAME)
    collector = ListHandler()
    previous = logger.level
    logger.addHandler(collector)
    logger.setLevel(logging.DEBUG)
    try:
        yield collector
    finally:
        logger.removeHandler(collector)
        logger.setLevel(previous)
