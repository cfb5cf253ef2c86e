"""
Fault channels (taxonomy).

Defines the `FaultChannel` enumeration distinguishing failures raised while a
callable executed from failures delivered later by a pending result. Values
are lowercase and are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class FaultChannel(str, Enum):
    """Where a fault surfaced.

    ``SYNC`` faults are logged and re-raised; ``ASYNC`` faults are only logged.
    """

    SYNC = "sync"
    ASYNC = "async"


__all__ = ["FaultChannel"]
