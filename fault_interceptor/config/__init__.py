"""Unified configuration layer for the interception handler.

Goals
-----
* Centralize defaults (failure-code messages, logging preferences).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       FAULT_INTERCEPTOR_CONFIG_FILE
    3. Environment variables (FAULT_INTERCEPTOR_LOG_LEVEL,
       FAULT_INTERCEPTOR_JSON_LOGS)
    4. In-code overrides passed to helper
* Provide a single call site: ``get_interceptor_config()``.

External Config File (Optional)
-------------------------------
JSON is attempted first, then YAML. Structure example:

```
failure_messages:
  401: "You are not allowed to do that."
  404: "Nothing here."
log_level: DEBUG
json_logs: false
```

``failure_messages`` entries are merged into the defaults rather than
replacing them, so a file only needs to list the codes it adds or rewrites.

Public API
----------
* get_interceptor_config(overrides: dict | None = None) -> InterceptorSettings
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..base.errors import ConfigError
from .defaults import (
    CONFIG_FILE_ENV,
    DEFAULT_FAILURE_MESSAGES,
    DEFAULT_JSON_LOGS,
    DEFAULT_LOG_LEVEL,
    JSON_LOGS_ENV,
    LOG_LEVEL_ENV,
)


class InterceptorSettings(BaseModel):
    """Validated, immutable settings for an :class:`InterceptionHandler`.

    Attributes
    ----------
    failure_messages:
        Failure code -> user-facing message table. Keys from JSON/YAML files
        arrive as strings and are coerced to integers.
    log_level:
        Level name for the shared ``fault_interceptor`` logger.
    json_logs:
        Whether log lines are JSON (``True``) or plain text.
    """

    model_config = ConfigDict(frozen=True)

    failure_messages: Dict[int, str] = Field(
        default_factory=lambda: dict(DEFAULT_FAILURE_MESSAGES)
    )
    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = DEFAULT_JSON_LOGS


_FILE_CACHE: Optional[Dict[str, Any]] = None

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _load_external_config() -> Dict[str, Any]:
    """Load (and cache) the optional external config file.

    A missing variable or missing file yields an empty mapping. A file that
    parses as neither JSON nor YAML, or whose top level is not a mapping,
    raises :class:`ConfigError`.
    """
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        _FILE_CACHE = {}
        return _FILE_CACHE
    p = Path(path)
    if not p.exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = p.read_text(encoding="utf-8")
    # Try JSON first
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Config file '{p}' is neither JSON nor YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{p}' must contain a mapping at the top level")
    _FILE_CACHE = data
    return data


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"Environment variable {name} has non-boolean value {value!r}")


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        out["log_level"] = level.strip().upper()
    json_logs = os.getenv(JSON_LOGS_ENV)
    if json_logs is not None:
        out["json_logs"] = _parse_bool(JSON_LOGS_ENV, json_logs)
    return out


def _merge_messages(base: Dict[Any, str], extra: Any) -> Dict[Any, str]:
    if extra is None:
        return base
    if not isinstance(extra, Mapping):
        raise ConfigError("'failure_messages' must be a mapping of code to message")
    merged = dict(base)
    for code, text in extra.items():
        # file keys arrive as strings; "404" must replace 404, not sit beside it
        if isinstance(code, str) and code.strip().isdigit():
            code = int(code)
        merged[code] = text
    return merged


def get_interceptor_config(overrides: Optional[Mapping[str, Any]] = None) -> InterceptorSettings:
    """Return merged interceptor settings.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``failure_messages`` is merged key by key at every layer.

    Raises
    ------
    ConfigError
        If the external file is unreadable as JSON/YAML, an environment value
        is malformed, or the merged values fail validation.
    """
    cfg: Dict[str, Any] = {"failure_messages": dict(DEFAULT_FAILURE_MESSAGES)}

    # 1. External config file
    file_cfg = dict(_load_external_config())
    cfg["failure_messages"] = _merge_messages(cfg["failure_messages"], file_cfg.pop("failure_messages", None))
    cfg |= file_cfg

    # 2. Env overrides
    cfg |= _env_overrides()

    # 3. Explicit overrides arg
    if overrides:
        explicit = {k: v for k, v in overrides.items() if v is not None}
        cfg["failure_messages"] = _merge_messages(cfg["failure_messages"], explicit.pop("failure_messages", None))
        cfg |= explicit

    try:
        return InterceptorSettings(**cfg)
    except ValidationError as exc:
        raise ConfigError(f"Invalid interceptor configuration: {exc}") from exc


def reset_config_cache() -> None:
    """Forget the cached external config so the next lookup re-reads it."""
    global _FILE_CACHE
    _FILE_CACHE = None


__all__ = [
    "InterceptorSettings",
    "get_interceptor_config",
    "reset_config_cache",
]
