"""Shared, append-only error log.

The log is the single place a host renders failures. It holds the
user-facing strings in completion order together with a structured
:class:`FaultRecord` per entry. Appends are serialized with a lock because
``concurrent.futures`` callbacks fire on worker threads.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, overload

from .errors import FaultCategory, FaultChannel
from .logging import get_logger

logger = get_logger(__name__)

Listener = Callable[["FaultRecord"], None]


@dataclass(frozen=True)
class FaultRecord:
    """Structured companion of one error log entry.

    Attributes:
        message: The user-facing string stored in the log.
        channel: Whether the fault was raised synchronously or delivered later.
        category: Which normalization rule produced ``message``.
        code: Failure code found on the fault, if any.
        operation: Qualified name of the failing callable.
        description: The callable's description, if any.
        timestamp: UTC time the record was created.
    """

    message: str
    channel: FaultChannel
    category: FaultCategory
    code: Optional[int] = None
    operation: Optional[str] = None
    description: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorLog(Sequence[str]):
    """Ordered, unbounded, append-only sequence of user-facing fault messages.

    Reading behaves like a read-only list of strings. The log never prunes or
    deduplicates entries; only :meth:`append` mutates it.
    """

    def __init__(self) -> None:
        self._entries: List[str] = []
        self._records: List[FaultRecord] = []
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()
        self._view = ErrorLogView(self)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[str]: ...

    def __getitem__(self, index):
        with self._lock:
            return self._entries[index]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"ErrorLog({list(self.snapshot())!r})"

    def snapshot(self) -> Tuple[str, ...]:
        """Return the current messages as an immutable tuple."""
        with self._lock:
            return tuple(self._entries)

    @property
    def records(self) -> Tuple[FaultRecord, ...]:
        """Structured records, index-aligned with the messages."""
        with self._lock:
            return tuple(self._records)

    def append(self, record: FaultRecord) -> None:
        """Append one record and notify listeners in subscription order.

        A failing listener is logged and skipped; it never interrupts the
        fault path that produced the record.
        """
        with self._lock:
            self._entries.append(record.message)
            self._records.append(record)
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(record)
            except Exception:
                logger.exception("Error log listener %r failed", listener)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for future appends; return an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def view(self) -> "ErrorLogView":
        """Return the read-only view of this log handed to display code."""
        return self._view


class ErrorLogView(Sequence[str]):
    """Read-only face of an :class:`ErrorLog`.

    Supports reading, ``records``, ``snapshot`` and ``subscribe``; appending
    stays with the handlers that own the log.
    """

    __slots__ = ("_log",)

    def __init__(self, log: ErrorLog) -> None:
        self._log = log

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[str]: ...

    def __getitem__(self, index):
        return self._log[index]

    def __len__(self) -> int:
        return len(self._log)

    def __iter__(self) -> Iterator[str]:
        return iter(self._log)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"ErrorLogView({list(self._log.snapshot())!r})"

    def snapshot(self) -> Tuple[str, ...]:
        return self._log.snapshot()

    @property
    def records(self) -> Tuple[FaultRecord, ...]:
        return self._log.records

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._log.subscribe(listener)


__all__ = ["ErrorLog", "ErrorLogView", "FaultRecord"]
