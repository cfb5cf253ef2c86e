"""Context carried by interception log events.

A :class:`LogContext` names the operation a fault or call belongs to, the
operation's description and the channel the fault arrived on. Unset fields
are left out of the emitted payload.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Operation context for ``log_event`` payloads.

    ``extra`` entries are flattened into the payload next to the named fields.
    """

    operation: Optional[str] = None
    description: Optional[str] = None
    channel: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        fields = {
            "operation": self.operation,
            "description": self.description,
            "channel": self.channel,
            **self.extra,
        }
        return {k: v for k, v in fields.items() if v is not None}


__all__ = ["LogContext"]
