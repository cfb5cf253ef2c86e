"""fault_interceptor.config.defaults
=================================

Central place for small, stable default values used across the
fault_interceptor package. These defaults can be overridden via environment
variables or an external configuration file, but provide sensible fallbacks
for local development and tests.

This module intentionally avoids importing from other package modules to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

from typing import Dict

# ---- Failure messages ----

# Fallback used when a fault carries nothing usable (no code, no message).
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."

NOT_FOUND_STATUS = 404
SERVER_ERROR_STATUS = 500

# Failure code -> user-facing text. Unmapped codes fall through to the
# message/stringification rules of the normalizer.
DEFAULT_FAILURE_MESSAGES: Dict[int, str] = {
    NOT_FOUND_STATUS: "The requested data or service could not be found.",
    SERVER_ERROR_STATUS: "Unknown errors occurred at the server.",
}

# Prefix applied when the failing callable carries a ``description``.
DESCRIPTION_TEMPLATE = "Unable to {description}. {message}"


# ---- Logging ----

DEFAULT_LOGGER_NAME = "fault_interceptor"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_JSON_LOGS = True


# ---- Environment variables ----

ENV_PREFIX = "FAULT_INTERCEPTOR"
CONFIG_FILE_ENV = f"{ENV_PREFIX}_CONFIG_FILE"
LOG_LEVEL_ENV = f"{ENV_PREFIX}_LOG_LEVEL"
JSON_LOGS_ENV = f"{ENV_PREFIX}_JSON_LOGS"


# ---- Demo ----

# Delay before the demo collaborators reject their pending results.
DEMO_REJECTION_DELAY_SECONDS = 0.5


__all__ = [
    "UNKNOWN_ERROR_MESSAGE",
    "NOT_FOUND_STATUS",
    "SERVER_ERROR_STATUS",
    "DEFAULT_FAILURE_MESSAGES",
    "DESCRIPTION_TEMPLATE",
    "DEFAULT_LOGGER_NAME",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_JSON_LOGS",
    "ENV_PREFIX",
    "CONFIG_FILE_ENV",
    "LOG_LEVEL_ENV",
    "JSON_LOGS_ENV",
    "DEMO_REJECTION_DELAY_SECONDS",
]
