"""Demo scenarios and CLI entrypoint.

Each scenario drives one way of using the handler against the demo services:

- ``manual``: the caller catches the failure itself and reports it.
- ``wrapped``: the caller routes single calls through ``handler.call``.
- ``decorated``: the registry hands out a service whose operations are
  intercepted without any call-site changes.
- ``example``: a described coroutine operation that loads data, once
  successfully and once failing with a 404-coded response.

The accumulated error log is printed at the end.
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from ..base import CollaboratorRegistry, ErrorLogView, InterceptionHandler
from ..base.errors import ConfigError, Rejection
from ..base.logging import configure_logger
from ..config import get_interceptor_config
from ..config.defaults import DEMO_REJECTION_DELAY_SECONDS
from .services import build_registry

Emit = Callable[[str], None]
Scenario = Callable[[InterceptionHandler, CollaboratorRegistry, Emit], Awaitable[None]]


async def _settle(*pending: Any) -> None:
    """Wait for pending results to finish, then let their callbacks run."""
    await asyncio.wait([asyncio.ensure_future(p) for p in pending])
    await asyncio.sleep(0)


async def manual_scenario(handler: InterceptionHandler, registry: CollaboratorRegistry, emit: Emit) -> None:
    svc = registry.get("undecorated_service")
    try:
        svc.throws_an_error()
    except RuntimeError as exc:
        emit(f"caught by caller: {exc}")
        handler.report(svc.throws_an_error, exc)


async def wrapped_scenario(handler: InterceptionHandler, registry: CollaboratorRegistry, emit: Emit) -> None:
    svc = registry.get("undecorated_service")
    try:
        handler.call(svc.throws_an_error, svc)
    except RuntimeError as exc:
        emit(f"re-raised to caller: {exc}")

    pending = handler.call(svc.promise_rejects, svc)
    emit(f"pending result returned, log holds {len(handler.errors)} entries")
    await _settle(pending)


async def decorated_scenario(handler: InterceptionHandler, registry: CollaboratorRegistry, emit: Emit) -> None:
    svc = registry.get("decorated_service")
    try:
        svc.throws_an_error()
    except RuntimeError as exc:
        emit(f"re-raised to caller: {exc}")
    await _settle(svc.promise_rejects_after_a_while())


async def example_scenario(handler: InterceptionHandler, registry: CollaboratorRegistry, emit: Emit) -> None:
    svc = registry.get("example_service")
    data = await svc.load_data(True)
    emit(f"loaded: {data}")
    failing = svc.load_data(False)
    await _settle(failing)
    # the task still carries the failure for anyone awaiting it
    if isinstance(failing.exception(), Rejection):
        emit("second load failed")


SCENARIOS: Dict[str, Scenario] = {
    "manual": manual_scenario,
    "wrapped": wrapped_scenario,
    "decorated": decorated_scenario,
    "example": example_scenario,
}


async def run_scenarios(
    names: Iterable[str],
    handler: InterceptionHandler,
    *,
    delay: float = DEMO_REJECTION_DELAY_SECONDS,
    emit: Emit = print,
) -> ErrorLogView:
    """Run the named scenarios in order against one registry; return the log."""
    registry = build_registry(handler, delay)
    for name in names:
        emit(f"== {name}")
        await SCENARIOS[name](handler, registry, emit)
    return handler.errors


def build_parser() -> argparse.ArgumentParser:
    """Construct the demo CLI parser."""
    p = argparse.ArgumentParser(
        prog="fault-interceptor-demo",
        description="Replay the interception scenarios and print the error log",
    )
    p.add_argument(
        "--scenario",
        action="append",
        choices=sorted(SCENARIOS),
        help="Scenario to run (repeatable; default: all in order)",
    )
    p.add_argument("--delay", type=float, default=DEMO_REJECTION_DELAY_SECONDS, help="Rejection delay in seconds")
    p.add_argument("--log-level", default=None, help="Override the interceptor log level")
    p.add_argument("--plain-logs", action="store_true", help="Plain text logs instead of JSON")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    """Demo entrypoint.

    Returns
    -------
    int
        Process exit code (0 success, 2 on configuration errors).
    """
    args = build_parser().parse_args(argv)
    try:
        settings = get_interceptor_config({"log_level": args.log_level})
    except ConfigError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2
    configure_logger(level=settings.log_level, json_mode=settings.json_logs and not args.plain_logs)

    handler = InterceptionHandler.from_settings(settings)
    names = args.scenario or list(SCENARIOS)
    log = asyncio.run(run_scenarios(names, handler, delay=args.delay))

    print("Error log:")
    for index, message in enumerate(log, start=1):
        print(f"{index:>3}. {message}")
    return 0


__all__ = [
    "SCENARIOS",
    "run_scenarios",
    "build_parser",
    "main",
]
