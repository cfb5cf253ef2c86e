"""Sample collaborators exercising the interception handler.

- :class:`UndecoratedService` is never decorated; callers wrap it by hand.
- :class:`DecoratedService` carries described operations and is decorated
  through the registry.
- :class:`ExampleService` simulates a data request that either succeeds or
  fails with a 404-coded response.

Asynchronous failures are produced on the running asyncio loop after
``delay`` seconds, mirroring a timer-driven rejection.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..base import CollaboratorRegistry, InterceptionHandler, Rejection, describe
from ..config.defaults import DEMO_REJECTION_DELAY_SECONDS, NOT_FOUND_STATUS


def _reject_later(delay: float, reason: Any) -> "asyncio.Future[Any]":
    loop = asyncio.get_running_loop()
    fut = loop.create_future()

    def _reject() -> None:
        if not fut.done():
            fut.set_exception(Rejection(reason))

    loop.call_later(delay, _reject)
    return fut


class UndecoratedService:
    """Plain service used for manual handling."""

    def __init__(self, delay: float = DEMO_REJECTION_DELAY_SECONDS) -> None:
        self.delay = delay

    def throws_an_error(self) -> None:
        raise RuntimeError("This is an error from throws_an_error.")

    def promise_rejects(self) -> "asyncio.Future[Any]":
        return _reject_later(self.delay, "Something went wrong (asynchronously).")


class DecoratedService:
    """Service whose operations are intercepted once decorated."""

    def __init__(self, delay: float = DEMO_REJECTION_DELAY_SECONDS) -> None:
        self.delay = delay

    @describe("perform some synchronous operation")
    def throws_an_error(self) -> None:
        raise RuntimeError("You won't believe what just happened!")

    @describe("perform some asynchronous operation")
    def promise_rejects_after_a_while(self) -> "asyncio.Future[Any]":
        return _reject_later(self.delay, "Something happened, but I'm not sure how to fix it.")


@dataclass
class DataResponse:
    """Response-like failure reason for the simulated data request."""

    status: int
    url: str
    data: Optional[Any] = None


class ExampleService:
    """Loads example data from an in-memory source."""

    __operations__ = ("load_data",)

    def __init__(self, delay: float = DEMO_REJECTION_DELAY_SECONDS, source: Optional[Dict[str, Any]] = None) -> None:
        self.delay = delay
        self.source = source if source is not None else {"data": "This is the example data."}

    async def _get(self, url: str) -> DataResponse:
        await asyncio.sleep(self.delay)
        if url not in self.source:
            raise Rejection(DataResponse(status=NOT_FOUND_STATUS, url=url))
        return DataResponse(status=200, url=url, data=self.source[url])

    @describe("load the example data from the 'realistic scenario'")
    async def load_data(self, successful: bool) -> Any:
        response = await self._get("data" if successful else "doesntExist")
        return response.data


def build_registry(handler: InterceptionHandler, delay: float = DEMO_REJECTION_DELAY_SECONDS) -> CollaboratorRegistry:
    """Register the demo services and decorate the auto-handled ones."""
    registry = CollaboratorRegistry()
    registry.register("undecorated_service", lambda: UndecoratedService(delay))
    registry.register("decorated_service", lambda: DecoratedService(delay))
    registry.register("example_service", lambda: ExampleService(delay))
    handler.decorate(registry, ["decorated_service", "example_service"])
    return registry


__all__ = [
    "UndecoratedService",
    "DecoratedService",
    "ExampleService",
    "DataResponse",
    "build_registry",
]
