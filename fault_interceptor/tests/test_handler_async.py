"""Asynchronous interception: single-channel faults on pending results.

Pending results are asyncio futures/tasks, coroutines, hybrid resources and
``concurrent.futures`` futures completed on worker threads.
"""
from __future__ import annotations

import asyncio
import concurrent.futures
import threading
import types

import pytest

from fault_interceptor.base import FaultChannel, Rejection, describe


def _reject_later(delay: float, reason) -> asyncio.Future:
    loop = asyncio.get_running_loop()
    fut = loop.create_future()
    loop.call_later(delay, fut.set_exception, Rejection(reason))
    return fut


class AsyncService:
    def promise_rejects(self):
        return _reject_later(0.05, "Y")

    @describe("perform some asynchronous operation")
    def described_rejects(self):
        return _reject_later(0.01, RuntimeError("boom"))

    def resolves(self):
        fut = asyncio.get_running_loop().create_future()
        fut.set_result("payload")
        return fut

    async def fetch(self, fail: bool):
        await asyncio.sleep(0)
        if fail:
            raise LookupError("row missing")
        return "row"


@pytest.mark.asyncio
async def test_pending_returned_immediately_and_logged_after_rejection(handler):
    svc = AsyncService()
    fut = handler.call(svc.promise_rejects, svc)
    assert isinstance(fut, asyncio.Future) and not fut.done()  # nosec B101
    assert len(handler.errors) == 0  # nosec B101
    await asyncio.sleep(0.01)
    assert len(handler.errors) == 0  # not before the rejection  # nosec B101
    with pytest.raises(Rejection):
        await fut
    await asyncio.sleep(0)
    assert list(handler.errors) == ["Y"]  # nosec B101
    assert handler.records[0].channel is FaultChannel.ASYNC  # nosec B101


@pytest.mark.asyncio
async def test_call_returns_same_future_identity(handler):
    svc = AsyncService()
    created = []

    def producer():
        fut = svc.resolves()
        created.append(fut)
        return fut

    fut = handler.call(producer)
    assert fut is created[0]  # nosec B101
    assert await fut == "payload"  # nosec B101
    await asyncio.sleep(0)
    assert len(handler.errors) == 0  # nosec B101


@pytest.mark.asyncio
async def test_described_async_fault(handler):
    svc = AsyncService()
    fut = handler.call(svc.described_rejects, svc)
    await asyncio.wait([fut])
    await asyncio.sleep(0)
    assert list(handler.errors) == ["Unable to perform some asynchronous operation. boom"]  # nosec B101


@pytest.mark.asyncio
async def test_failures_logged_in_completion_order(handler):
    loop = asyncio.get_running_loop()
    slow = loop.create_future()
    fast = loop.create_future()
    handler.call(lambda: slow)
    handler.call(lambda: fast)
    loop.call_later(0.03, slow.set_exception, Rejection("slow"))
    loop.call_later(0.01, fast.set_exception, Rejection("fast"))
    await asyncio.wait([slow, fast])
    await asyncio.sleep(0)
    assert list(handler.errors) == ["fast", "slow"]  # nosec B101


@pytest.mark.asyncio
async def test_coroutine_result_is_scheduled_and_still_raises(handler):
    svc = AsyncService()
    task = handler.call(svc.fetch, svc, (True,))
    assert isinstance(task, asyncio.Task)  # nosec B101
    with pytest.raises(LookupError):
        await task
    await asyncio.sleep(0)
    assert list(handler.errors) == ["row missing"]  # nosec B101

    ok = handler.call(svc.fetch, svc, (False,))
    assert await ok == "row"  # nosec B101
    assert len(handler.errors) == 1  # nosec B101


@pytest.mark.asyncio
async def test_hybrid_resource_returned_unchanged(handler):
    inner = asyncio.get_running_loop().create_future()
    resource = types.SimpleNamespace(items=[], promise=inner)
    assert handler.call(lambda: resource) is resource  # nosec B101
    inner.set_exception(Rejection({"status": 404}))
    await asyncio.sleep(0)
    assert list(handler.errors) == ["The requested data or service could not be found."]  # nosec B101


@pytest.mark.asyncio
async def test_cancelled_future_is_not_logged(handler):
    fut = asyncio.get_running_loop().create_future()
    handler.call(lambda: fut)
    fut.cancel()
    await asyncio.sleep(0)
    assert len(handler.errors) == 0  # nosec B101


@pytest.mark.asyncio
async def test_async_returns_the_handle(handler):
    fut = asyncio.get_running_loop().create_future()
    assert handler.async_(None, fut) is fut  # nosec B101
    fut.set_exception(Rejection(None))
    await asyncio.sleep(0)
    assert list(handler.errors) == ["An unknown error occurred."]  # nosec B101


def test_async_rejects_non_pending(handler):
    with pytest.raises(TypeError):
        handler.async_(None, "not pending")


def test_thread_pool_failure_logged_from_worker(handler):
    appended = threading.Event()
    handler.errors.subscribe(lambda _r: appended.set())
    release = threading.Event()

    def job():
        release.wait(2)
        raise ValueError("worker failed")

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        fut = handler.call(pool.submit, None, (job,))
        assert isinstance(fut, concurrent.futures.Future)  # nosec B101
        assert len(handler.errors) == 0  # nosec B101
        release.set()
        assert appended.wait(2)  # nosec B101
    assert list(handler.errors) == ["worker failed"]  # nosec B101
    assert isinstance(fut.exception(), ValueError)  # nosec B101


class StreamResource:
    """Awaitable response that also works with ``async with``."""

    def __init__(self, fut):
        self._fut = fut
        self.closed = False

    def __await__(self):
        return self._fut.__await__()

    async def __aenter__(self):
        return await self

    async def __aexit__(self, *exc_info):
        self.closed = True
        return None


@pytest.mark.asyncio
async def test_awaitable_resource_keeps_identity_and_protocols(handler):
    fut = asyncio.get_running_loop().create_future()
    resource = StreamResource(fut)
    returned = handler.call(lambda: resource)
    assert returned is resource  # nosec B101
    fut.set_result("body")
    async with returned as body:
        assert body == "body"  # nosec B101
    assert resource.closed  # nosec B101
    await asyncio.sleep(0)
    assert len(handler.errors) == 0  # nosec B101


@pytest.mark.asyncio
async def test_awaitable_resource_failure_is_logged(handler):
    fut = asyncio.get_running_loop().create_future()
    resource = handler.call(lambda: StreamResource(fut))
    fut.set_exception(Rejection({"status": 500}))
    for _ in range(3):
        await asyncio.sleep(0)
    assert list(handler.errors) == ["Unknown errors occurred at the server."]  # nosec B101
    with pytest.raises(Rejection):
        await resource
