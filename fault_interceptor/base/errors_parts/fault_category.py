"""
Fault categories (taxonomy).

Defines the `FaultCategory` enumeration recording which normalization rule
produced a user-facing message.
"""
from __future__ import annotations

from enum import Enum


class FaultCategory(str, Enum):
    """Normalization outcome, in priority order."""

    CODED = "coded"
    STRUCTURED = "structured"
    UNSTRUCTURED = "unstructured"
    RAW = "raw"


__all__ = ["FaultCategory"]
