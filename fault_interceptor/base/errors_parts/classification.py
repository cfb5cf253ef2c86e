"""
Fault classification helpers.

Implements failure-code extraction and message extraction for the
heterogeneous failure shapes the normalizer accepts: raised exceptions,
HTTP-style structured failures (exception attributes or plain mappings), and
arbitrary rejection reasons.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from .rejection import Rejection

_CODE_ATTRS = ("status_code", "status")


def _valid_code(val: Any) -> Optional[int]:
    # bool is an int subclass; ``status=True`` is not a failure code
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    return None


def unwrap_rejection(failure: Any) -> Any:
    """Return the carried reason of a :class:`Rejection`, else ``failure``."""
    while isinstance(failure, Rejection):
        failure = failure.reason
    return failure


def extract_failure_code(failure: Any) -> Optional[int]:
    """Attempt to extract an integer failure code from a fault.

    Supported shapes (checked in order):
    - ``failure.status_code``
    - ``failure.status``
    - ``failure.response.status_code``
    - ``failure["status_code"]`` / ``failure["status"]`` for mappings
    Returns ``None`` if no integer code can be found.
    """
    if failure is None:
        return None
    if isinstance(failure, Mapping):
        for key in _CODE_ATTRS:
            code = _valid_code(failure.get(key))
            if code is not None:
                return code
        return None
    for attr in _CODE_ATTRS:
        code = _valid_code(getattr(failure, attr, None))
        if code is not None:
            return code
    resp = getattr(failure, "response", None)
    if resp is not None:
        return _valid_code(getattr(resp, "status_code", None))
    return None


def extract_message(failure: Any) -> Optional[str]:
    """Return the message carried by an exception-like fault, if any.

    - A non-empty string ``message`` attribute (or mapping key) wins.
    - Exceptions fall back to ``str(exc)``, then to the exception class name
      when that string is empty.
    - Anything else yields ``None``.
    """
    if failure is None or isinstance(failure, str):
        return None
    if isinstance(failure, Mapping):
        msg = failure.get("message")
    else:
        msg = getattr(failure, "message", None)
    if isinstance(msg, str) and msg:
        return msg
    if isinstance(failure, BaseException):
        return str(failure) or type(failure).__name__
    return None


__all__ = [
    "unwrap_rejection",
    "extract_failure_code",
    "extract_message",
]
