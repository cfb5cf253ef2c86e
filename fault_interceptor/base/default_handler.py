"""Process-wide default interception handler.

Separates global state management from the handler implementation. The
default handler is built lazily from :func:`get_interceptor_config` on first
use, which also applies the configured logging preferences; hosts may
replace it with :func:`set_error_handler` (tests do).
"""

from __future__ import annotations

import threading
from typing import Optional

from .handler import InterceptionHandler
from .logging import configure_logger

_DEFAULT_HANDLER: Optional[InterceptionHandler] = None
_LOCK = threading.Lock()


def get_error_handler() -> InterceptionHandler:
    """Return the default handler, creating it from configuration if needed."""
    global _DEFAULT_HANDLER
    with _LOCK:
        if _DEFAULT_HANDLER is None:
            from ..config import get_interceptor_config

            settings = get_interceptor_config()
            configure_logger(level=settings.log_level, json_mode=settings.json_logs)
            _DEFAULT_HANDLER = InterceptionHandler.from_settings(settings)
        return _DEFAULT_HANDLER


def set_error_handler(handler: Optional[InterceptionHandler]) -> None:
    """Replace the default handler; ``None`` resets it to lazy creation.

    Side effects:
        Mutates module-level state.
    """
    global _DEFAULT_HANDLER
    with _LOCK:
        _DEFAULT_HANDLER = handler


__all__ = ["get_error_handler", "set_error_handler"]
