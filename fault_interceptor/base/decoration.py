"""Decoration policy: route every operation of a collaborator through a handler.

A collaborator's operations are either declared explicitly through an ordered
``__operations__`` tuple on its class, or discovered by a flat scan of its
*own* members:

- public callables stored on the instance itself, then
- public functions, static methods and class methods defined directly on
  the collaborator's class (members inherited from base classes are skipped).

Each operation is replaced on the instance by a wrapper forwarding to
``handler.call(original, instance, args, kwargs)``. Wrappers carry the
original's ``description`` and are tagged with it, so decorating an
already-decorated instance leaves it unchanged.
"""
from __future__ import annotations

import functools
import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from .errors import DecorationError
from .logging import LogContext, get_logger, log_event

if TYPE_CHECKING:
    from .handler import InterceptionHandler

logger = get_logger(__name__)

_WRAPPED_ATTR = "__intercepted__"


def original_of(member: Any) -> Optional[Callable[..., Any]]:
    """Return the callable wrapped by an interception wrapper, else ``None``."""
    return getattr(member, _WRAPPED_ATTR, None)


def iter_operations(instance: Any) -> List[Tuple[str, Any]]:
    """Return ``(name, member)`` pairs for the collaborator's own operations."""
    cls = type(instance)
    ops: List[Tuple[str, Any]] = []
    declared = getattr(cls, "__operations__", None)
    if declared is not None:
        for name in declared:
            member = getattr(instance, name, None)
            if not callable(member):
                raise DecorationError(f"{cls.__name__}.__operations__ names non-callable member '{name}'")
            ops.append((name, member))
        return ops

    seen = set()
    own = getattr(instance, "__dict__", {})
    for name, member in own.items():
        if name.startswith("_") or not callable(member) or inspect.isclass(member):
            continue
        ops.append((name, member))
        seen.add(name)
    for name, raw in cls.__dict__.items():
        if name.startswith("_") or name in seen:
            continue
        if isinstance(raw, (staticmethod, classmethod)) or inspect.isfunction(raw):
            ops.append((name, getattr(instance, name)))
    return ops


def wrap_operation(handler: "InterceptionHandler", instance: Any, member: Callable[..., Any]) -> Callable[..., Any]:
    """Return ``member`` routed through ``handler.call`` with ``instance`` as receiver."""
    if original_of(member) is not None:
        return member

    @functools.wraps(member)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return handler.call(member, instance, args, kwargs)

    description = getattr(member, "description", None)
    if description is not None:
        wrapper.description = description  # type: ignore[attr-defined]
    setattr(wrapper, _WRAPPED_ATTR, member)
    return wrapper


def decorate_instance(handler: "InterceptionHandler", instance: Any) -> Any:
    """Replace each operation of ``instance`` with an intercepting wrapper.

    Returns the same instance.

    Raises
    ------
    DecorationError
        If the instance refuses attribute assignment.
    """
    wrapped = []
    for name, member in iter_operations(instance):
        wrapper = wrap_operation(handler, instance, member)
        if wrapper is member:
            continue
        try:
            setattr(instance, name, wrapper)
        except (AttributeError, TypeError) as exc:
            raise DecorationError(
                f"Cannot decorate '{name}' on {type(instance).__name__}: {exc}"
            ) from exc
        wrapped.append(name)
    log_event(
        logger,
        "collaborator.decorated",
        LogContext(operation=type(instance).__qualname__),
        level=logging.DEBUG,
        wrapped=wrapped,
    )
    return instance


__all__ = [
    "original_of",
    "iter_operations",
    "wrap_operation",
    "decorate_instance",
]
