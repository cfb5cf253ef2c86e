"""Collaborator registry.

Purpose
-------
Map canonical collaborator names (e.g., ``"example_service"``) to the
factories that build them, and apply registered decorators to every instance
the registry creates. This is the seam through which
:meth:`InterceptionHandler.decorate` reaches collaborators without touching
their call sites.

Collaborators are registered either with a factory callable or with a
``module`` + ``class_name`` pair imported lazily via ``importlib`` so that
registration has no import side effects.

Failure modes
-------------
- Unknown names, import failures, missing classes and constructor errors all
  raise :class:`UnknownCollaboratorError` with the cause chained.
- Adding a decorator after a name's singleton was resolved raises
  :class:`DecorationError`; that instance would otherwise stay undecorated.
"""

from __future__ import annotations

import inspect
import threading
from importlib import import_module
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from .errors import DecorationError, UnknownCollaboratorError


Factory = Callable[..., Any]
InstanceDecorator = Callable[[Any], Any]


def _canonical(name: str) -> str:
    return (name or "").lower().strip()


def _argument_mismatch(factory: Factory, kwargs: Dict[str, Any]) -> Optional[TypeError]:
    """Return the binding error when ``kwargs`` do not fit ``factory``'s signature."""
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        # no introspectable signature; let the call itself decide
        return None
    try:
        signature.bind(**kwargs)
    except TypeError as exc:
        return exc
    return None


class CollaboratorRegistry:
    """Create collaborators by canonical name, decorated on the way out.

    Usage::

        registry = CollaboratorRegistry()
        registry.register("example_service", ExampleService)
        registry.register("reports", module="app.reports", class_name="ReportService")

        handler.decorate(registry, ["example_service"])
        service = registry.get("example_service")  # operations now intercepted
    """

    def __init__(self) -> None:
        self._factories: Dict[str, Factory] = {}
        self._specs: Dict[str, Dict[str, str]] = {}
        self._decorators: Dict[str, List[Tuple[Hashable, InstanceDecorator]]] = {}
        self._instances: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register(
        self,
        name: str,
        factory: Optional[Factory] = None,
        *,
        module: Optional[str] = None,
        class_name: Optional[str] = None,
    ) -> None:
        """Register a collaborator under ``name``.

        Exactly one of ``factory`` or the ``module``/``class_name`` pair must be
        given. Re-registering a name replaces the factory and drops any cached
        singleton; registered decorators are kept.
        """
        key = _canonical(name)
        if not key:
            raise ValueError("Collaborator name must be a non-empty string")
        if (factory is None) == (module is None or class_name is None):
            raise ValueError("Provide either a factory or both module and class_name")
        with self._lock:
            self._factories.pop(key, None)
            self._specs.pop(key, None)
            self._instances.pop(key, None)
            if factory is not None:
                self._factories[key] = factory
            else:
                self._specs[key] = {"module": module, "class": class_name}  # type: ignore[dict-item]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        key = _canonical(name)
        return key in self._factories or key in self._specs

    def supported(self) -> Tuple[str, ...]:
        """Return registered canonical names in registration order."""
        with self._lock:
            return tuple(list(self._factories) + [k for k in self._specs if k not in self._factories])

    def add_decorator(self, name: str, decorator: InstanceDecorator, *, key: Optional[Hashable] = None) -> bool:
        """Apply ``decorator`` to every future instance of ``name``.

        ``key`` identifies the decorator for idempotence (defaults to the
        decorator itself); adding the same key twice is a no-op. Returns
        whether the decorator was newly added.
        """
        canonical = _canonical(name)
        if canonical not in self:
            raise UnknownCollaboratorError(f"Unknown collaborator '{name}'")
        ident = decorator if key is None else key
        with self._lock:
            if canonical in self._instances:
                raise DecorationError(
                    f"Collaborator '{name}' was already resolved; decorate it before first use"
                )
            chain = self._decorators.setdefault(canonical, [])
            if any(existing == ident for existing, _ in chain):
                return False
            chain.append((ident, decorator))
            return True

    def _resolve_factory(self, name: str, key: str) -> Factory:
        factory = self._factories.get(key)
        if factory is not None:
            return factory
        spec = self._specs.get(key)
        if not spec:
            raise UnknownCollaboratorError(f"Unknown collaborator '{name}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:
            raise UnknownCollaboratorError(
                f"Failed to import module '{module_path}' for collaborator '{name}': {exc}"
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownCollaboratorError(
                f"Class '{class_name}' not found in '{module_path}' for collaborator '{name}'"
            ) from exc

    def create(self, name: str, **kwargs: Any) -> Any:
        """Build a new, decorated instance of ``name``.

        Raises
        ------
        UnknownCollaboratorError
            If the name is unknown, its module/class cannot be loaded, or the
            factory raises.
        """
        key = _canonical(name)
        with self._lock:
            factory = self._resolve_factory(name, key)
            decorators = [d for _, d in self._decorators.get(key, [])]

        mismatch = _argument_mismatch(factory, kwargs)
        if mismatch is not None:
            raise UnknownCollaboratorError(
                f"Invalid arguments for collaborator '{name}': {mismatch}"
            ) from mismatch
        try:
            instance = factory(**kwargs)
        except Exception as exc:
            raise UnknownCollaboratorError(f"Failed to initialize collaborator '{name}': {exc}") from exc

        for decorate in decorators:
            instance = decorate(instance)
        return instance

    def get(self, name: str) -> Any:
        """Return the singleton instance of ``name``, creating it on first use."""
        key = _canonical(name)
        with self._lock:
            if key not in self._instances:
                self._instances[key] = self.create(name)
            return self._instances[key]


__all__ = ["CollaboratorRegistry"]
