"""Decoration of registry collaborators: transparency and idempotence."""
from __future__ import annotations

import asyncio
import types

import pytest

from fault_interceptor.base import CollaboratorRegistry, DecorationError, UnknownCollaboratorError, describe
from fault_interceptor.base.decoration import decorate_instance, iter_operations, original_of


class Base:
    def inherited(self):
        raise RuntimeError("inherited")


class Widget(Base):
    def __init__(self):
        self.calls = 0

    def add(self, a, b):
        self.calls += 1
        return a + b

    @describe("fetch the widget")
    def fetch(self):
        raise KeyError("widget")

    @staticmethod
    def version():
        raise ValueError("no version")

    @classmethod
    def kind(cls):
        return cls.__name__

    def _private(self):
        raise RuntimeError("private")

    async def refresh(self):
        await asyncio.sleep(0)
        raise ConnectionError("refresh failed")


class Declared:
    __operations__ = ("visible",)

    def visible(self):
        raise RuntimeError("visible")

    def hidden(self):
        raise RuntimeError("hidden")


class Slotted:
    __slots__ = ()

    def op(self):
        return 1


def _registry(factory, name="widget"):
    registry = CollaboratorRegistry()
    registry.register(name, factory)
    return registry


def test_decorated_success_is_transparent(handler):
    registry = _registry(Widget)
    handler.decorate(registry, ["widget"])
    widget = registry.get("widget")
    assert widget.add(2, 3) == 5  # nosec B101
    assert widget.calls == 1  # receiver preserved  # nosec B101
    assert widget.kind() == "Widget"  # nosec B101
    assert len(handler.errors) == 0  # nosec B101


def test_decorated_failure_logged_and_reraised(handler):
    registry = _registry(Widget)
    handler.decorate(registry, ["widget"])
    widget = registry.get("widget")
    with pytest.raises(KeyError):
        widget.fetch()
    with pytest.raises(ValueError):
        widget.version()
    assert list(handler.errors) == [  # nosec B101
        "Unable to fetch the widget. 'widget'",
        "no version",
    ]


def test_wrapper_keeps_name_and_description(handler):
    registry = _registry(Widget)
    handler.decorate(registry, "widget")
    widget = registry.get("widget")
    assert widget.fetch.__name__ == "fetch"  # nosec B101
    assert widget.fetch.description == "fetch the widget"  # nosec B101
    assert original_of(widget.fetch) is not None  # nosec B101


def test_inherited_and_private_members_are_left_alone(handler):
    registry = _registry(Widget)
    handler.decorate(registry, ["widget"])
    widget = registry.get("widget")
    with pytest.raises(RuntimeError):
        widget.inherited()
    with pytest.raises(RuntimeError):
        widget._private()
    assert len(handler.errors) == 0  # nosec B101
    assert original_of(widget.inherited) is None  # nosec B101


def test_operation_scan_order_and_members():
    names = [name for name, _ in iter_operations(Widget())]
    assert names == ["add", "fetch", "version", "kind", "refresh"]  # nosec B101


def test_instance_functions_are_wrapped(handler):
    def explode():
        raise OSError("disk gone")

    registry = _registry(lambda: types.SimpleNamespace(explode=explode, label="x"))
    handler.decorate(registry, ["widget"])
    ns = registry.get("widget")
    with pytest.raises(OSError):
        ns.explode()
    assert ns.label == "x"  # nosec B101
    assert list(handler.errors) == ["disk gone"]  # nosec B101


def test_declared_operations_limit_the_scan(handler):
    registry = _registry(Declared)
    handler.decorate(registry, ["widget"])
    obj = registry.get("widget")
    with pytest.raises(RuntimeError):
        obj.visible()
    with pytest.raises(RuntimeError):
        obj.hidden()
    assert list(handler.errors) == ["visible"]  # nosec B101


def test_decorating_twice_wraps_once(handler):
    registry = _registry(Widget)
    handler.decorate(registry, ["widget"])
    handler.decorate(registry, ["widget"])
    widget = registry.get("widget")
    decorate_instance(handler, widget)
    with pytest.raises(KeyError):
        widget.fetch()
    assert len(handler.errors) == 1  # nosec B101
    assert original_of(original_of(widget.fetch)) is None  # nosec B101


def test_decorate_after_resolution_fails(handler):
    registry = _registry(Widget)
    registry.get("widget")
    with pytest.raises(DecorationError):
        handler.decorate(registry, ["widget"])


def test_decorate_unknown_name_fails(handler):
    registry = _registry(Widget)
    with pytest.raises(UnknownCollaboratorError):
        handler.decorate(registry, ["gadget"])


def test_slotted_instance_cannot_be_decorated(handler):
    registry = _registry(Slotted)
    handler.decorate(registry, ["widget"])
    with pytest.raises(DecorationError):
        registry.get("widget")


def test_decorated_log_event(handler, log_capture):
    registry = _registry(Declared)
    handler.decorate(registry, ["widget"])
    registry.get("widget")
    events = [e for e in log_capture.events() if e["event"] == "collaborator.decorated"]
    assert events and events[0]["wrapped"] == ["visible"]  # nosec B101
    assert events[0]["operation"] == "Declared"  # nosec B101


@pytest.mark.asyncio
async def test_decorated_coroutine_method_logs_async_failure(handler):
    registry = _registry(Widget)
    handler.decorate(registry, ["widget"])
    widget = registry.get("widget")
    task = widget.refresh()
    assert isinstance(task, asyncio.Task)  # nosec B101
    with pytest.raises(ConnectionError):
        await task
    await asyncio.sleep(0)
    assert list(handler.errors) == ["refresh failed"]  # nosec B101
