"""Pending result detection and failure continuations.

A call result is either :class:`Immediate` (an ordinary value) or
:class:`Pending` (work whose failure is known later). ``classify_result``
decides between the two from the value's capabilities:

- futures: anything with callable ``add_done_callback`` and ``exception``
  (``asyncio.Future``/``Task``, ``concurrent.futures.Future``);
- hybrids: a resource exposing such a future under ``future`` or ``promise``
  while the resource itself is what the caller receives;
- awaitables: coroutines and other ``__await__`` implementers.

``add_failure_callback`` attaches a continuation that sees only failures.
Cancellation is not a failure and is ignored.
"""
from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Set, Union

_HYBRID_ATTRS = ("future", "promise")

FailureCallback = Callable[[BaseException], None]


@dataclass(frozen=True)
class Immediate:
    """A call result that is final as returned."""

    value: Any


@dataclass(frozen=True)
class Pending:
    """A call result whose failure may surface later.

    Attributes:
        result: The value handed back to the caller.
        handle: The future or awaitable continuations attach to; ``result``
            itself unless ``result`` is a hybrid resource.
    """

    result: Any
    handle: Any


CallResult = Union[Immediate, Pending]


def is_future_like(value: Any) -> bool:
    """Whether ``value`` supports done-callbacks and exception retrieval.

    Classes are never future-like: their ``add_done_callback`` is unbound.
    """
    if isinstance(value, type):
        return False
    return callable(getattr(value, "add_done_callback", None)) and callable(getattr(value, "exception", None))


def _hybrid_handle(value: Any) -> Optional[Any]:
    if isinstance(value, type):
        return None
    for attr in _HYBRID_ATTRS:
        inner = getattr(value, attr, None)
        if inner is not None and inner is not value and is_future_like(inner):
            return inner
    return None


def classify_result(value: Any) -> CallResult:
    """Tag a call result as :class:`Immediate` or :class:`Pending`."""
    if value is None or isinstance(value, (str, bytes, int, float, bool, type)):
        return Immediate(value)
    if is_future_like(value) or inspect.isawaitable(value):
        return Pending(result=value, handle=value)
    inner = _hybrid_handle(value)
    if inner is not None:
        return Pending(result=value, handle=inner)
    return Immediate(value)


# strong references to watcher tasks until they finish
_WATCHERS: Set["asyncio.Task[None]"] = set()


async def _observe(awaitable: Awaitable[Any], on_failure: FailureCallback) -> Any:
    try:
        return await awaitable
    except Exception as exc:
        on_failure(exc)
        raise


async def _watch(awaitable: Awaitable[Any], on_failure: FailureCallback) -> None:
    try:
        await awaitable
    except Exception as exc:
        on_failure(exc)


def add_failure_callback(handle: Any, on_failure: FailureCallback) -> Any:
    """Run ``on_failure(exc)`` once ``handle`` fails; return the observed handle.

    - Futures are observed in place and returned unchanged.
    - A coroutine cannot carry callbacks, so it is replaced: inside a running
      event loop by a scheduled ``Task`` (it starts running immediately),
      otherwise by a coroutine that reports the failure when awaited. Either
      replacement still raises the original exception to whoever awaits it.
    - Any other awaitable (e.g. a resource that is also an async context
      manager) is returned unchanged. Inside a running loop a watcher task
      awaits it alongside the caller; outside one it cannot be observed.
    """
    if is_future_like(handle):

        def _done(fut: Any) -> None:
            cancelled = getattr(fut, "cancelled", None)
            if callable(cancelled) and cancelled():
                return
            exc = fut.exception()
            if exc is not None:
                on_failure(exc)

        handle.add_done_callback(_done)
        return handle

    if not inspect.isawaitable(handle):
        raise TypeError(f"Cannot observe non-pending value of type {type(handle).__name__}")

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(handle):
            return _observe(handle, on_failure)
        return handle

    if inspect.iscoroutine(handle):
        return add_failure_callback(asyncio.ensure_future(handle), on_failure)

    watcher = asyncio.ensure_future(_watch(handle, on_failure))
    _WATCHERS.add(watcher)
    watcher.add_done_callback(_WATCHERS.discard)
    return handle


__all__ = [
    "Immediate",
    "Pending",
    "CallResult",
    "is_future_like",
    "classify_result",
    "add_failure_callback",
]
