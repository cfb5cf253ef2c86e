"""
Rejection carrier exception.

Futures only hold exceptions, while a pending operation may fail with any
reason (a plain string, a response-like object, or nothing at all).
`Rejection` carries such a reason; the normalizer unwraps it before applying
its rules.
"""
from __future__ import annotations

from typing import Any


class Rejection(Exception):
    """A pending operation failed with an arbitrary ``reason``.

    Attributes:
        reason: The original failure value, possibly ``None``.
    """

    def __init__(self, reason: Any = None) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return "" if self.reason is None else str(self.reason)


__all__ = ["Rejection"]
