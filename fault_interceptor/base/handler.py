"""Interception handler.

Runs callables and captures their failures into a shared :class:`ErrorLog`:

- ``call`` invokes a callable; a synchronous exception is normalized,
  appended to the log and re-raised unchanged. A pending result gets a
  failure continuation through ``async_`` and is returned to the caller.
- ``async_`` observes a pending result; its eventual failure is normalized
  and appended, and nothing is re-raised from the continuation.
- ``decorate`` arranges for named collaborators of a
  :class:`CollaboratorRegistry` to have every operation routed through
  ``call``.

Synchronous faults travel on two channels (log and exception) because the
call site can still react with ``try/except``; asynchronous faults only reach
the log because nothing upstream waits on the continuation.
"""
from __future__ import annotations

import functools
import inspect
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional, Sequence, Tuple

from ..config.defaults import DEFAULT_FAILURE_MESSAGES
from .decoration import decorate_instance, wrap_operation
from .error_log import ErrorLog, ErrorLogView, FaultRecord
from .errors import FaultChannel
from .logging import LogContext, get_logger, log_event
from .normalizer import classify_fault
from .pending import Immediate, add_failure_callback, classify_result
from .registry import CollaboratorRegistry

if TYPE_CHECKING:
    from ..config import InterceptorSettings

logger = get_logger(__name__)


def _operation_name(func: Any) -> str:
    return getattr(func, "__qualname__", None) or getattr(func, "__name__", None) or repr(func)


def _bind(func: Callable[..., Any], receiver: Any) -> Callable[..., Any]:
    """Bind ``func`` to ``receiver`` when it is a plain function of the receiver's class.

    Bound methods, static methods, functions stored on the instance and
    other callables are returned as-is.
    """
    if receiver is None or not inspect.isfunction(func):
        return func
    name = getattr(func, "__name__", None)
    if name and inspect.getattr_static(type(receiver), name, None) is func:
        return func.__get__(receiver, type(receiver))
    return func


class InterceptionHandler:
    """Capture failures of intercepted callables into an error log.

    Parameters
    ----------
    failure_messages:
        Failure code -> user-facing message table. Copied and frozen at
        construction; defaults to the built-in 404/500 messages.
    error_log:
        Log to append to. Pass the same instance to several handlers (or
        hand it to display code) to share one log.
    """

    def __init__(
        self,
        failure_messages: Optional[Mapping[int, str]] = None,
        *,
        error_log: Optional[ErrorLog] = None,
    ) -> None:
        messages = DEFAULT_FAILURE_MESSAGES if failure_messages is None else failure_messages
        self._failure_messages: Mapping[int, str] = MappingProxyType(dict(messages))
        self._errors = error_log if error_log is not None else ErrorLog()

    @classmethod
    def from_settings(
        cls, settings: "InterceptorSettings", *, error_log: Optional[ErrorLog] = None
    ) -> "InterceptionHandler":
        """Build a handler from validated :class:`InterceptorSettings`."""
        return cls(settings.failure_messages, error_log=error_log)

    @property
    def errors(self) -> ErrorLogView:
        """Read-only view of the ordered log of user-facing fault messages.

        Handlers sharing one :class:`ErrorLog` return the same view.
        """
        return self._errors.view()

    @property
    def records(self) -> Tuple[FaultRecord, ...]:
        """Structured records aligned with :attr:`errors`."""
        return self._errors.records

    @property
    def failure_messages(self) -> Mapping[int, str]:
        """Immutable failure code -> message table."""
        return self._failure_messages

    def report(self, func: Any, failure: Any, *, channel: FaultChannel = FaultChannel.SYNC) -> str:
        """Normalize ``failure`` of ``func``, append it to the log and return the message.

        Used by ``call``/``async_`` and by hosts handling a failure manually.
        """
        fault = classify_fault(func, failure, self._failure_messages)
        operation = _operation_name(func) if func is not None else None
        record = FaultRecord(
            message=fault.message,
            channel=channel,
            category=fault.category,
            code=fault.code,
            operation=operation,
            description=fault.description,
        )
        log_event(
            logger,
            "fault.caught",
            LogContext(operation=operation, description=fault.description, channel=channel.value),
            category=fault.category.value,
            code=fault.code,
            message=f"Caught error: {fault.message}",
        )
        self._errors.append(record)
        return fault.message

    def _report_quietly(self, func: Any, failure: BaseException, channel: FaultChannel) -> None:
        # the caller re-raises (or the future keeps) the original failure; a
        # failure that cannot be normalized must not replace it
        try:
            self.report(func, failure, channel=channel)
        except Exception:
            logger.exception("Could not record %s fault of %s", channel.value, _operation_name(func))

    def call(
        self,
        func: Callable[..., Any],
        receiver: Any = None,
        args: Sequence[Any] = (),
        kwargs: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Invoke ``func`` with error capture and return its result.

        ``receiver`` is the execution context: a plain function defined on the
        receiver's class is bound to it before the call.

        Raises
        ------
        Exception
            Whatever ``func`` raised synchronously, after it was logged.
        """
        target = _bind(func, receiver)
        log_event(logger, "interceptor.call", LogContext(operation=_operation_name(func)), level=logging.DEBUG)
        try:
            result = target(*args, **(kwargs or {}))
        except Exception as exc:
            self._report_quietly(func, exc, FaultChannel.SYNC)
            raise

        if isinstance(classify_result(result), Immediate):
            return result
        return self.async_(func, result)

    def async_(self, func: Any, pending: Any) -> Any:
        """Log the eventual failure of ``pending`` against ``func``.

        Futures, hybrid resources and awaitable objects are returned
        unchanged. A bare coroutine is returned as the observable handle that
        replaces it (see :func:`~fault_interceptor.base.pending.add_failure_callback`).

        Raises
        ------
        TypeError
            If ``pending`` is not a pending result.
        """
        outcome = classify_result(pending)
        if isinstance(outcome, Immediate):
            raise TypeError(f"Expected a pending result, got {type(pending).__name__}")

        def _on_failure(exc: BaseException) -> None:
            self._report_quietly(func, exc, FaultChannel.ASYNC)

        observed = add_failure_callback(outcome.handle, _on_failure)
        return observed if outcome.handle is outcome.result else outcome.result

    def wrap(self, func: Callable[..., Any], receiver: Any = None) -> Callable[..., Any]:
        """Return ``func`` routed through :meth:`call`; usable as a decorator."""
        return wrap_operation(self, receiver, func)

    def decorate(self, registry: CollaboratorRegistry, names: Iterable[str]) -> None:
        """Intercept every operation of the named collaborators of ``registry``.

        Must run before the collaborators are first resolved. Repeating the
        call for the same handler and name has no further effect.
        """
        if isinstance(names, str):
            names = [names]
        decorator = functools.partial(decorate_instance, self)
        for name in names:
            registry.add_decorator(name, decorator, key=self)


__all__ = ["InterceptionHandler"]
